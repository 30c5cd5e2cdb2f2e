from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

import pandas as pd

try:
    from .config import DB_PATH
    from .models import (
        Budget,
        DuplicateBudgetError,
        RecordNotFoundError,
        Transaction,
        parse_budget,
        parse_transaction,
    )
except ImportError:
    from config import DB_PATH
    from models import (
        Budget,
        DuplicateBudgetError,
        RecordNotFoundError,
        Transaction,
        parse_budget,
        parse_transaction,
    )

logger = logging.getLogger(__name__)

# Tests point this at a temporary file.
DB_PATH_STR = str(DB_PATH)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL CHECK (amount > 0),
    description TEXT NOT NULL,
    transaction_date TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
    category TEXT NOT NULL DEFAULT 'Other',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_txn_date ON transactions (transaction_date);
CREATE INDEX IF NOT EXISTS ix_txn_category ON transactions (category);

CREATE TABLE IF NOT EXISTS budgets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    budget_amount REAL NOT NULL CHECK (budget_amount >= 0),
    month INTEGER NOT NULL CHECK (month BETWEEN 1 AND 12),
    year INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS ux_budget_period
ON budgets (category, month, year);
"""

DUPLICATE_BUDGET_MESSAGE = "Budget for this category and month already exists"


def _now() -> str:
    return datetime.now().isoformat(timespec='seconds')


def _iso(value: datetime) -> str:
    return value.isoformat(timespec='seconds')


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """Open a connection to the current database, creating any missing tables."""
    Path(DB_PATH_STR).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH_STR)
    conn.row_factory = sqlite3.Row
    try:
        conn.executescript(SCHEMA_SQL)
        yield conn
    finally:
        conn.close()


def init_db() -> None:
    with connect() as conn:
        conn.commit()
    logger.info("Database ready at %s", DB_PATH_STR)


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row['id'],
        amount=row['amount'],
        description=row['description'],
        date=datetime.fromisoformat(row['transaction_date']),
        type=row['type'],
        category=row['category'],
        created_at=_parse_ts(row['created_at']),
        updated_at=_parse_ts(row['updated_at']),
    )


def _row_to_budget(row: sqlite3.Row) -> Budget:
    return Budget(
        id=row['id'],
        category=row['category'],
        budget_amount=row['budget_amount'],
        month=row['month'],
        year=row['year'],
        created_at=_parse_ts(row['created_at']),
        updated_at=_parse_ts(row['updated_at']),
    )


def _as_mapping(data: Union[Mapping[str, Any], Transaction, Budget]) -> Mapping[str, Any]:
    if isinstance(data, (Transaction, Budget)):
        return data.to_dict()
    return data


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

def create_transaction(data: Union[Mapping[str, Any], Transaction]) -> Transaction:
    """Validate and insert a transaction; returns the stored record.

    Raises:
        ValidationError: If the submitted fields are invalid.
    """
    txn = parse_transaction(_as_mapping(data))
    stamp = _now()
    with connect() as conn:
        cursor = conn.execute(
            "INSERT INTO transactions (amount, description, transaction_date, type, category, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (txn.amount, txn.description, _iso(txn.date), txn.type, txn.category, stamp, stamp),
        )
        conn.commit()
        new_id = cursor.lastrowid
    logger.info("Created %s transaction %s (%.2f, %s)", txn.type, new_id, txn.amount, txn.category)
    return get_transaction(new_id)


def get_transaction(transaction_id: int) -> Transaction:
    with connect() as conn:
        row = conn.execute("SELECT * FROM transactions WHERE id = ?", (transaction_id,)).fetchone()
    if row is None:
        raise RecordNotFoundError("Transaction not found")
    return _row_to_transaction(row)


def update_transaction(transaction_id: int, data: Union[Mapping[str, Any], Transaction]) -> Transaction:
    """Replace every mutable field of a transaction and refresh ``updated_at``.

    Raises:
        ValidationError: If the submitted fields are invalid.
        RecordNotFoundError: If no transaction has this id.
    """
    txn = parse_transaction(_as_mapping(data))
    with connect() as conn:
        cursor = conn.execute(
            "UPDATE transactions SET amount = ?, description = ?, transaction_date = ?, type = ?, "
            "category = ?, updated_at = ? WHERE id = ?",
            (txn.amount, txn.description, _iso(txn.date), txn.type, txn.category, _now(), transaction_id),
        )
        conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError("Transaction not found")
    logger.info("Updated transaction %s", transaction_id)
    return get_transaction(transaction_id)


def delete_transaction(transaction_id: int) -> None:
    with connect() as conn:
        cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
        conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError("Transaction not found")
    logger.info("Deleted transaction %s", transaction_id)


def list_transactions() -> List[Transaction]:
    """All transactions, newest first."""
    with connect() as conn:
        rows = conn.execute(
            "SELECT * FROM transactions ORDER BY transaction_date DESC, id DESC"
        ).fetchall()
    return [_row_to_transaction(row) for row in rows]


def fetch_transactions_frame() -> pd.DataFrame:
    """All transactions as a display-ready DataFrame, newest first."""
    sql = (
        "SELECT id, transaction_date AS 'Date', description AS 'Description', category AS 'Category', "
        "type AS 'Type', amount AS 'Amount', created_at AS 'Created', updated_at AS 'Updated' "
        "FROM transactions ORDER BY transaction_date DESC, id DESC"
    )
    with connect() as conn:
        df = pd.read_sql_query(sql, conn)
    if not df.empty:
        df['Date'] = pd.to_datetime(df['Date'])
    return df


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------

def create_budget(data: Union[Mapping[str, Any], Budget]) -> Budget:
    """Validate and insert a budget.

    Raises:
        ValidationError: If the submitted fields are invalid.
        DuplicateBudgetError: If the category already has a budget that month.
    """
    budget = parse_budget(_as_mapping(data))
    stamp = _now()
    try:
        with connect() as conn:
            cursor = conn.execute(
                "INSERT INTO budgets (category, budget_amount, month, year, created_at, updated_at) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (budget.category, budget.budget_amount, budget.month, budget.year, stamp, stamp),
            )
            conn.commit()
            new_id = cursor.lastrowid
    except sqlite3.IntegrityError as e:
        logger.warning("Rejected duplicate budget %s %s/%s", budget.category, budget.month, budget.year)
        raise DuplicateBudgetError(DUPLICATE_BUDGET_MESSAGE) from e
    logger.info("Created budget %s for %s %s/%s", new_id, budget.category, budget.month, budget.year)
    return get_budget(new_id)


def get_budget(budget_id: int) -> Budget:
    with connect() as conn:
        row = conn.execute("SELECT * FROM budgets WHERE id = ?", (budget_id,)).fetchone()
    if row is None:
        raise RecordNotFoundError("Budget not found")
    return _row_to_budget(row)


def update_budget(budget_id: int, data: Union[Mapping[str, Any], Budget]) -> Budget:
    """Replace every mutable field of a budget and refresh ``updated_at``.

    Raises:
        ValidationError: If the submitted fields are invalid.
        DuplicateBudgetError: If the change collides with another budget.
        RecordNotFoundError: If no budget has this id.
    """
    budget = parse_budget(_as_mapping(data))
    try:
        with connect() as conn:
            cursor = conn.execute(
                "UPDATE budgets SET category = ?, budget_amount = ?, month = ?, year = ?, updated_at = ? "
                "WHERE id = ?",
                (budget.category, budget.budget_amount, budget.month, budget.year, _now(), budget_id),
            )
            conn.commit()
            updated = cursor.rowcount
    except sqlite3.IntegrityError as e:
        logger.warning("Rejected budget update %s: duplicate %s %s/%s", budget_id, budget.category, budget.month, budget.year)
        raise DuplicateBudgetError(DUPLICATE_BUDGET_MESSAGE) from e
    if updated == 0:
        raise RecordNotFoundError("Budget not found")
    logger.info("Updated budget %s", budget_id)
    return get_budget(budget_id)


def delete_budget(budget_id: int) -> None:
    with connect() as conn:
        cursor = conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError("Budget not found")
    logger.info("Deleted budget %s", budget_id)


def list_budgets(month: Optional[int] = None, year: Optional[int] = None) -> List[Budget]:
    """Budgets sorted by category; filtered to one month only when both month and year are given."""
    sql = "SELECT * FROM budgets"
    params: List[Any] = []
    if month and year:
        sql += " WHERE month = ? AND year = ?"
        params.extend([int(month), int(year)])
    sql += " ORDER BY category ASC, year DESC, month DESC"
    with connect() as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_budget(row) for row in rows]


def clear_database() -> bool:
    """Delete every transaction and budget. Returns True if successful."""
    with connect() as conn:
        conn.execute("DELETE FROM transactions")
        conn.execute("DELETE FROM budgets")
        conn.commit()
    logger.warning("Cleared all transactions and budgets from %s", DB_PATH_STR)
    return True


def counts() -> Dict[str, int]:
    with connect() as conn:
        txn_count = conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]
        budget_count = conn.execute("SELECT COUNT(*) FROM budgets").fetchone()[0]
    return {'transactions': txn_count, 'budgets': budget_count}
