"""SQLite connection manager for the food ordering store.

One Database owns one connection for its lifetime. The application root
creates it, hands it to a StorageGateway and closes it when done.
"""
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterable, Optional, Tuple, Union

from foodorder.utilities.constants import SCHEMA_VERSION, SEED_FOOD_ITEMS

log = logging.getLogger(__name__)

MEMORY = ":memory:"

SCHEMA = (
    """
    CREATE TABLE food_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        cost REAL NOT NULL
    )
    """,
    """
    CREATE TABLE order_plans (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        date TEXT NOT NULL,
        targetCost REAL NOT NULL,
        foodItemId INTEGER NOT NULL,
        FOREIGN KEY (foodItemId) REFERENCES food_items(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX idx_order_plans_date ON order_plans(date)",
)


class Database:
    """
    Owns the SQLite connection, creates the schema on first open and
    provides the transaction boundary used by the gateway.
    """

    def __init__(self, path: Union[str, Path] = MEMORY,
                 seed_items: Optional[Iterable[Tuple[str, float]]] = None):
        self.path = str(path)
        self.seed_items = tuple(SEED_FOOD_ITEMS if seed_items is None else seed_items)
        self._conn: Optional[sqlite3.Connection] = None
        self._depth = 0

    def connect(self) -> sqlite3.Connection:
        """Open the connection lazily; the schema is created on the first open of a new file."""
        if self._conn is None:
            if self.path != MEMORY:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            # autocommit mode: transactions are opened explicitly in transaction()
            conn = sqlite3.connect(self.path, isolation_level=None, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            self._conn = conn
            self._ensure_schema()
        return self._conn

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Run the enclosed statements atomically.
        Nested use joins the outermost transaction; an exception anywhere
        rolls the whole transaction back and propagates.
        """
        conn = self.connect()
        if self._depth:
            self._depth += 1
            try:
                yield conn
            finally:
                self._depth -= 1
            return

        conn.execute("BEGIN")
        self._depth = 1
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        else:
            conn.execute("COMMIT")
        finally:
            self._depth = 0

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "Database":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_schema(self) -> None:
        version = self._conn.execute("PRAGMA user_version").fetchone()[0]
        if version >= SCHEMA_VERSION:
            return
        with self.transaction() as conn:
            for statement in SCHEMA:
                conn.execute(statement)
            # seeding only happens together with the first schema creation
            conn.executemany(
                "INSERT INTO food_items (name, cost) VALUES (?, ?)",
                [(name, float(cost)) for name, cost in self.seed_items],
            )
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        log.info(f"Created schema v{SCHEMA_VERSION} at {self.path} with {len(self.seed_items)} seed items")
