"""
Fret Wars - SQLite Database Setup & Initialization

Creates the SQLite database used by the game shell and the leaderboard.

Database Schema Overview:
------------------------
- game_saves: one saved run per save key (state stored as JSON)
- scores: leaderboard submissions
- schema_version: applied migrations (see migration_runner.py)

The file location defaults to src/data/fretwars.db and can be moved with the
FRETWARS_DB_PATH environment variable.
"""

import os
import sqlite3
from pathlib import Path

EXPECTED_TABLES = ['game_saves', 'scores', 'schema_version']


def get_db_path():
    """Return the path to the SQLite database file"""
    override = os.environ.get('FRETWARS_DB_PATH')
    if override:
        return Path(override)
    return Path(__file__).parent / "data" / "fretwars.db"


def create_database(db_path=None, quiet=False):
    """
    Create the Fret Wars SQLite database with all tables.

    [WARNING]  If the database already exists, this will NOT drop it.
    Use reset_database() if you want to start fresh.
    """
    db_path = Path(db_path) if db_path else get_db_path()
    say = (lambda *args, **kwargs: None) if quiet else print

    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    cursor = conn.cursor()

    say("--- Creating Fret Wars Database ---")
    say(f"Location: {db_path}")
    say()

    try:
        # =================================================================
        # TABLE 1: game_saves - one serialized run per save key
        # =================================================================
        say("Creating table 'game_saves'...", end=" ")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS game_saves (
                save_key TEXT PRIMARY KEY,
                run_seed TEXT NOT NULL,
                state_json TEXT NOT NULL,
                updated_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """)
        say("OK")

        # =================================================================
        # TABLE 2: scores - leaderboard submissions
        # =================================================================
        say("Creating table 'scores'...", end=" ")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS scores (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
                display_name TEXT NOT NULL DEFAULT 'Anonymous',
                score INTEGER NOT NULL CHECK(score >= 0),
                run_seed TEXT,
                day INTEGER NOT NULL,
                total_days INTEGER NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                eligible INTEGER NOT NULL DEFAULT 0,
                cash INTEGER,
                reputation INTEGER,
                inventory_slots_used INTEGER,
                inventory_capacity INTEGER,
                best_flip_name TEXT,
                best_flip_profit INTEGER,
                rarest_sold_name TEXT,
                rarest_sold_rarity TEXT,
                email TEXT,
                email_opt_in INTEGER NOT NULL DEFAULT 0,
                opt_in_at TEXT,
                client_version TEXT
            )
        """)
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_scores_ranked ON scores(eligible, score DESC, created_at DESC);")
        say("OK")

        # =================================================================
        # TABLE 3: schema_version - migration tracking
        # =================================================================
        say("Creating table 'schema_version'...", end=" ")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT,
                applied_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """)
        say("OK")

        conn.commit()
        say()
        say("[OK] Database schema created successfully!")
        say(f"[OK] Database file: {db_path}")
        return True

    except sqlite3.Error as err:
        print(f"\n[ERROR] Error creating database: {err}")
        conn.rollback()
        return False

    finally:
        conn.close()


def reset_database(db_path=None):
    """
    [WARNING]  DANGER: Delete the existing database and create a fresh one.
    All saves and scores will be permanently lost!
    """
    db_path = Path(db_path) if db_path else get_db_path()

    if db_path.exists():
        print(f"[WARNING]  WARNING: Deleting existing database at {db_path}")
        db_path.unlink()
        print("[OK] Old database deleted")

    return create_database(db_path)


def verify_schema(db_path=None):
    """Verify that all tables exist"""
    db_path = Path(db_path) if db_path else get_db_path()

    if not db_path.exists():
        print("[ERROR] Database does not exist")
        return False

    conn = sqlite3.connect(str(db_path))
    cursor = conn.cursor()
    print()

    for table in EXPECTED_TABLES:
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,))
        if cursor.fetchone():
            print(f"[OK] Table '{table}' exists")
        else:
            print(f"[ERROR] Table '{table}' MISSING")
            conn.close()
            return False

    conn.close()
    print()
    print("[OK] Schema verification complete")
    return True


if __name__ == "__main__":
    print("=" * 80)
    print("Fret Wars - SQLite Database Setup")
    print("=" * 80)
    print()

    db_path = get_db_path()

    if db_path.exists():
        print(f"Database already exists at: {db_path}")
        print()
        choice = input("Choose an option:\n  1. Verify existing schema\n  2. Reset database ([WARNING]  DELETES ALL DATA)\n  3. Cancel\n\nChoice: ")

        if choice == '1':
            verify_schema()
        elif choice == '2':
            confirm = input("\n[WARNING]  WARNING: This will DELETE ALL DATA. Type 'DELETE' to confirm: ")
            if confirm == 'DELETE':
                reset_database()
                verify_schema()
            else:
                print("Reset cancelled.")
        else:
            print("Cancelled.")
    else:
        print("No existing database found. Creating new database...")
        print()
        create_database()
        verify_schema()
