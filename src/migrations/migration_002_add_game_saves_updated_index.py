"""
Migration 002: Index game_saves by last update

Used when listing recent saves in the CLI.
"""


def run(conn):
    """Run the migration."""
    conn.execute("CREATE INDEX IF NOT EXISTS idx_game_saves_updated ON game_saves(updated_at DESC)")
    conn.commit()
    return True
