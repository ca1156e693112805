"""
Migration 001: Add client_version column to scores

Databases created before score submissions carried a client build string
lack the column. Existing rows are tagged 'unknown'.
"""


def run(conn):
    """Run the migration."""
    cursor = conn.cursor()

    cursor.execute("PRAGMA table_info(scores)")
    columns = [row[1] for row in cursor.fetchall()]

    if 'client_version' in columns:
        return True  # Already migrated

    cursor.execute("ALTER TABLE scores ADD COLUMN client_version TEXT")
    cursor.execute("UPDATE scores SET client_version = 'unknown' WHERE client_version IS NULL")

    conn.commit()
    return True
