import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from .errors import StoreError
from .settings import Settings

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS transactions (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      kind TEXT NOT NULL,
      description TEXT NOT NULL,
      amount INTEGER NOT NULL,
      date TEXT NOT NULL
    );
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_transactions_date
    ON transactions(date DESC, id DESC)
    """,
)


def connect(db_path: str | Path):
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def session(db_path: str | Path):
    """Yield a connection whose work is committed as one transaction.

    Any sqlite error, or an integer sqlite cannot bind, rolls the whole
    block back and is re-raised as StoreError.
    """
    try:
        conn = connect(db_path)
    except sqlite3.Error as exc:
        raise StoreError() from exc
    try:
        with conn:
            yield conn
    except (sqlite3.Error, OverflowError) as exc:
        raise StoreError() from exc
    finally:
        conn.close()


def init_db(settings: Settings) -> None:
    try:
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreError(f"cannot create data directory {settings.data_dir}") from exc

    # IF NOT EXISTS makes re-running a no-op; any other failure is StoreError
    with session(settings.db_path) as conn:
        for statement in SCHEMA:
            conn.execute(statement)
    logger.info("database ready at %s", settings.db_path)
