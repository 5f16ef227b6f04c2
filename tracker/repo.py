import logging

from .db import session
from .models import NewTransaction, Transaction

logger = logging.getLogger(__name__)

_INSERT = """
    INSERT INTO transactions(kind, description, amount, date)
    VALUES (?, ?, ?, ?)
"""


def _params(txn: NewTransaction) -> tuple:
    return (txn.kind, txn.description, txn.amount, txn.date)


def list_all(db_path) -> list[Transaction]:
    with session(db_path) as conn:
        cur = conn.execute(
            """
            SELECT id, kind, description, amount, date
            FROM transactions
            ORDER BY date DESC, id DESC
            """
        )
        return [Transaction.from_row(row) for row in cur.fetchall()]


def insert(db_path, txn: NewTransaction) -> int:
    with session(db_path) as conn:
        cur = conn.execute(_INSERT, _params(txn))
        return int(cur.lastrowid)


def delete(db_path, txn_id: int) -> bool:
    with session(db_path) as conn:
        cur = conn.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
        return cur.rowcount > 0


def replace_all(db_path, txns: list[NewTransaction]) -> int:
    """Swap the whole table for ``txns`` in a single transaction.

    Either every row is replaced or, on any error, the previous rows stay.
    """
    with session(db_path) as conn:
        removed = conn.execute("DELETE FROM transactions").rowcount
        conn.executemany(_INSERT, [_params(txn) for txn in txns])
    logger.info("replaced %d transactions with %d imported", removed, len(txns))
    return len(txns)
