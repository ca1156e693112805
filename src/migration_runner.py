"""
Fret Wars - Database Migration Runner

Applies schema migrations to the SQLite database.
Migrations are Python files in the migrations/ folder with a run(conn) function.

Migration files should be named: migration_NNN_description.py

The schema_version table tracks which migrations have been applied.
"""

import importlib.util
import re
import sqlite3
from pathlib import Path

from setup_sqlite import get_db_path

MIGRATION_PATTERN = re.compile(r'^migration_(\d{3})_(.+)\.py$')


def get_migrations_path():
    """Return the path to the migrations folder"""
    return Path(__file__).parent / "migrations"


def get_current_version(conn):
    """
    Highest migration version recorded in schema_version (0 if none).

    Creates the schema_version table on databases that predate it.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY,
            description TEXT,
            applied_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] if row[0] is not None else 0


def discover_migrations():
    """
    List every migration file on disk.

    Returns:
        list: (version, filepath, description) tuples sorted by version
    """
    migrations = []
    for file in get_migrations_path().glob('migration_*.py'):
        match = MIGRATION_PATTERN.match(file.name)
        if match:
            migrations.append((int(match.group(1)), file, match.group(2).replace('_', ' ')))
    return sorted(migrations)


def apply_migration(conn, version, filepath, description):
    """
    Load one migration module, call its run(conn) and record the version.

    Returns:
        bool: True if successful, False otherwise
    """
    print(f"  Applying migration {version}: {description}...", end=" ")
    try:
        spec = importlib.util.spec_from_file_location(f"fretwars_migration_{version}", filepath)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        if not hasattr(module, 'run'):
            print("[ERROR] No run(conn) function found")
            return False

        module.run(conn)
        conn.execute("INSERT INTO schema_version (version, description) VALUES (?, ?)", (version, description))
        conn.commit()
        print("[OK]")
        return True

    except sqlite3.Error as e:
        print("[ERROR]")
        print(f"    Error: {e}")
        conn.rollback()
        return False


def run_all_pending(db_path=None):
    """
    Apply every migration newer than the recorded schema version.

    Returns:
        int: Number of migrations applied
    """
    db_path = Path(db_path) if db_path else get_db_path()
    if not db_path.exists():
        # nothing to migrate until setup_sqlite has created the file
        return 0

    conn = sqlite3.connect(str(db_path))
    try:
        current_version = get_current_version(conn)
        pending = [m for m in discover_migrations() if m[0] > current_version]
        if not pending:
            return 0

        print(f"Found {len(pending)} pending migration(s):")
        applied = 0
        for version, filepath, description in pending:
            if not apply_migration(conn, version, filepath, description):
                print(f"  [ERROR] Migration {version} failed. Stopping.")
                break
            applied += 1
        return applied

    finally:
        conn.close()


def list_migrations(db_path=None):
    """Print every migration and whether it has been applied"""
    db_path = Path(db_path) if db_path else get_db_path()
    if not db_path.exists():
        print("Database does not exist yet.")
        return

    conn = sqlite3.connect(str(db_path))
    try:
        current_version = get_current_version(conn)
    finally:
        conn.close()

    migrations = discover_migrations()
    if not migrations:
        print("No migrations found in migrations/")
        return

    print()
    print("Migration Status:")
    print("=" * 60)
    for version, _, description in migrations:
        status = "[APPLIED]" if version <= current_version else "[PENDING]"
        print(f"{version:03d}. {description:<40} {status}")
    print()
    print(f"Current schema version: {current_version}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == 'list':
        list_migrations()
    else:
        print("=" * 60)
        print("Fret Wars - Migration Runner")
        print("=" * 60)
        print()

        applied = run_all_pending()
        if applied > 0:
            print()
            print(f"[OK] Applied {applied} migration(s) successfully!")
        else:
            print("[OK] No pending migrations.")
