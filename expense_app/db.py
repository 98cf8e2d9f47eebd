import sqlite3
from pathlib import Path

MEMORY_DB = ":memory:"


def get_conn(db_path: Path | str) -> sqlite3.Connection:
    """Return a sqlite3 connection to db_path (or an in-memory database)."""
    if not db_path:
        raise RuntimeError("Database path is not configured.")
    if str(db_path) != MEMORY_DB:
        parent = Path(db_path).expanduser().parent
        if not parent.is_dir():
            raise FileNotFoundError(f"Database folder not found: {parent}")
    # The handle is opened by whichever thread initializes the store first
    return sqlite3.connect(str(db_path), check_same_thread=False)
