"""Storage gateway: typed access to the food_items and order_plans relations."""
import logging
import math
import sqlite3
from contextlib import contextmanager
from typing import Generator, List, Optional

from foodorder.domain.Errors import ConstraintError
from foodorder.domain.FoodItem import FoodItem
from foodorder.domain.OrderEntry import OrderEntry, JoinedOrderEntry
from foodorder.infra.Database import Database

logger = logging.getLogger(__name__)

_JOINED_ENTRY_SELECT = """
    SELECT
        op.id,
        op.date,
        op.targetCost,
        op.foodItemId,
        fi.name AS foodItemName,
        fi.cost AS foodItemCost
    FROM order_plans op
    INNER JOIN food_items fi ON op.foodItemId = fi.id
"""


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class StorageGateway:
    def __init__(self, database: Database):
        self.database = database

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Group several gateway calls into one atomic unit."""
        with self.database.transaction() as conn:
            yield conn

    @contextmanager
    def _write(self) -> Generator[sqlite3.Connection, None, None]:
        try:
            with self.database.transaction() as conn:
                yield conn
        except sqlite3.IntegrityError as e:
            raise ConstraintError(str(e)) from e

    def _query(self, sql: str, params=()) -> List[sqlite3.Row]:
        return self.database.connect().execute(sql, params).fetchall()

    # ==================== FOOD ITEMS ====================

    def insert_food_item(self, item: FoodItem) -> int:
        if not item.name or item.cost is None:
            raise ConstraintError("food_items.name and food_items.cost are required")
        with self._write() as conn:
            cur = conn.execute(
                "INSERT INTO food_items (name, cost) VALUES (?, ?)",
                (item.name, item.cost),
            )
        logger.debug(f"Inserted food item {item.name!r} as id {cur.lastrowid}")
        return cur.lastrowid

    def get_all_food_items(self) -> List[FoodItem]:
        rows = self._query("SELECT id, name, cost FROM food_items ORDER BY id")
        return [FoodItem.from_row(r) for r in rows]

    def get_food_item_by_id(self, item_id: int) -> Optional[FoodItem]:
        rows = self._query("SELECT id, name, cost FROM food_items WHERE id = ?", (item_id,))
        return FoodItem.from_row(rows[0]) if rows else None

    def update_food_item(self, item: FoodItem) -> int:
        '''Returns the number of rows affected; 0 means the id is unknown.'''
        if not item.name or item.cost is None:
            raise ConstraintError("food_items.name and food_items.cost are required")
        with self._write() as conn:
            cur = conn.execute(
                "UPDATE food_items SET name = ?, cost = ? WHERE id = ?",
                (item.name, item.cost, item.id),
            )
        return cur.rowcount

    def delete_food_item(self, item_id: int) -> int:
        '''Deletes the item; order entries referencing it go with it (ON DELETE CASCADE).'''
        with self._write() as conn:
            cur = conn.execute("DELETE FROM food_items WHERE id = ?", (item_id,))
        logger.debug(f"Deleted food item {item_id} ({cur.rowcount} rows)")
        return cur.rowcount

    def search_food_items(self, term: str) -> List[FoodItem]:
        '''Substring match on name; case-insensitive for ASCII like SQLite LIKE.'''
        rows = self._query(
            "SELECT id, name, cost FROM food_items WHERE name LIKE ? ESCAPE '\\' ORDER BY id",
            (f"%{_escape_like(term)}%",),
        )
        return [FoodItem.from_row(r) for r in rows]

    def count_food_items(self) -> int:
        return self._query("SELECT COUNT(*) FROM food_items")[0][0]

    # ==================== ORDER ENTRIES ====================

    def insert_order_entry(self, entry: OrderEntry) -> int:
        with self._write() as conn:
            cur = conn.execute(
                "INSERT INTO order_plans (date, targetCost, foodItemId) VALUES (?, ?, ?)",
                (entry.date, entry.target_cost, entry.food_item_id),
            )
        return cur.lastrowid

    def get_entries_for_date(self, date: str) -> List[JoinedOrderEntry]:
        rows = self._query(
            _JOINED_ENTRY_SELECT + " WHERE op.date = ? ORDER BY fi.name, op.id",
            (date,),
        )
        return [JoinedOrderEntry.from_row(r) for r in rows]

    def get_all_entries(self) -> List[JoinedOrderEntry]:
        '''Every joined entry, date descending then food name. Read path for exports.'''
        rows = self._query(_JOINED_ENTRY_SELECT + " ORDER BY op.date DESC, fi.name, op.id")
        return [JoinedOrderEntry.from_row(r) for r in rows]

    def get_all_order_dates(self) -> List[str]:
        rows = self._query("SELECT DISTINCT date FROM order_plans ORDER BY date DESC")
        return [r["date"] for r in rows]

    def count_order_dates(self) -> int:
        return self._query("SELECT COUNT(DISTINCT date) FROM order_plans")[0][0]

    def delete_entries_for_date(self, date: str) -> int:
        with self._write() as conn:
            cur = conn.execute("DELETE FROM order_plans WHERE date = ?", (date,))
        return cur.rowcount

    def total_cost_for_date(self, date: str) -> float:
        '''Sum of the joined item costs for `date`, 0.0 when there are none.

        Summed with math.fsum, as OrderPlan.actual_cost does, so both agree exactly
        whatever order the rows come back in.
        '''
        return math.fsum(e.food_item_cost for e in self.get_entries_for_date(date))

    def has_entries_for_date(self, date: str) -> bool:
        rows = self._query("SELECT 1 FROM order_plans WHERE date = ? LIMIT 1", (date,))
        return bool(rows)
