"""Expense store: the SQLite table and the operations the window drives."""

import logging
import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pandas as pd

from .db import get_conn
from .errors import QueryFailed, StorageUnavailable, WriteFailed

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    amount REAL NOT NULL,
    date TEXT NOT NULL,
    category TEXT NOT NULL
)
"""

COLUMNS = ["id", "title", "amount", "date", "category"]

_DB_ERRORS = (sqlite3.Error, pd.errors.DatabaseError)


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: float
    date: str
    category: str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix, e.g. 2026-10-17T08:30:12.345Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class ExpenseStore:
    """Owns the database handle for the expenses table.

    The store stays uninitialized until initialize() succeeds; every other
    operation raises StorageUnavailable before that. Timestamps are written
    and compared in UTC. No input validation happens here, callers check
    title and amount before calling add_expense().
    """

    def __init__(self, db_path: Path | str, clock: Callable[[], datetime] = utc_now):
        self.db_path = db_path
        self._clock = clock
        self._conn: sqlite3.Connection | None = None
        self._init_lock = threading.Lock()

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def ready(self) -> bool:
        return self._conn is not None

    def initialize(self) -> None:
        with self._init_lock:
            if self._conn is not None:
                return
            try:
                conn = get_conn(self.db_path)
            except (OSError, RuntimeError, sqlite3.Error) as exc:
                logger.exception("Cannot open expense database %s", self.db_path)
                raise StorageUnavailable(f"cannot open database {self.db_path}: {exc}") from exc
            try:
                with conn:
                    conn.execute(SCHEMA)
            except sqlite3.Error as exc:
                conn.close()
                logger.exception("Cannot create expenses schema in %s", self.db_path)
                raise StorageUnavailable(f"cannot create schema in {self.db_path}: {exc}") from exc
            self._conn = conn
            logger.info("Expense database ready at %s", self.db_path)

    def close(self) -> None:
        with self._init_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _handle(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageUnavailable("expense store is not initialized")
        return self._conn

    def list_expenses(self) -> list[Expense]:
        conn = self._handle()
        try:
            df = pd.read_sql_query(
                "SELECT id, title, amount, date, category FROM expenses "
                "ORDER BY julianday(date) DESC, id DESC",
                conn,
            )
        except _DB_ERRORS as exc:
            logger.exception("Listing expenses failed")
            raise QueryFailed(f"cannot list expenses: {exc}") from exc
        if df.empty:
            return []
        return [
            Expense(int(row.id), str(row.title), float(row.amount), str(row.date), str(row.category))
            for row in df[COLUMNS].itertuples(index=False)
        ]

    def add_expense(self, title: str, amount: float, category: str) -> None:
        conn = self._handle()
        date = format_timestamp(self._clock())
        try:
            with conn:
                conn.execute(
                    "INSERT INTO expenses (title, amount, date, category) VALUES (?, ?, ?, ?)",
                    (title, amount, date, category),
                )
        except sqlite3.Error as exc:
            logger.exception("Adding expense %r failed", title)
            raise WriteFailed(f"cannot add expense: {exc}") from exc
        logger.debug("Added expense %r (%s) at %s", title, amount, date)

    def delete_expense(self, expense_id: int) -> None:
        conn = self._handle()
        try:
            with conn:
                cur = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
        except sqlite3.Error as exc:
            logger.exception("Deleting expense %s failed", expense_id)
            raise WriteFailed(f"cannot delete expense {expense_id}: {exc}") from exc
        logger.debug("Deleted expense %s (%d row(s))", expense_id, cur.rowcount)

    def monthly_total(self) -> float:
        conn = self._handle()
        now = self._clock().astimezone(timezone.utc)
        try:
            row = conn.execute(
                "SELECT SUM(amount) FROM expenses "
                "WHERE strftime('%Y', date) = ? AND strftime('%m', date) = ?",
                (f"{now.year:04d}", f"{now.month:02d}"),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Monthly total query failed")
            raise QueryFailed(f"cannot compute monthly total: {exc}") from exc
        if row is None or row[0] is None:
            return 0.0
        return float(row[0])
