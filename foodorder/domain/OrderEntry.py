"""Order entry shapes.

OrderEntry is what gets written to the order_plans table: one row per selected
food item per date. JoinedOrderEntry is what join reads return; it carries the
food item's name and cost next to the stored columns.
"""
from typing import Any, Mapping, Optional


class OrderEntry:
    def __init__(self, date: str, target_cost: float, food_item_id: int, id: Optional[int] = None):
        self.id = id
        self.date = date
        self.target_cost = target_cost
        self.food_item_id = food_item_id

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self):
        return (self.id, self.date, self.target_cost, self.food_item_id)

    def __str__(self) -> str:
        return (f"OrderEntry{{id: {self.id}, date: {self.date}, targetCost: ${self.target_cost}, "
                f"foodItemId: {self.food_item_id}}}")

    __repr__ = __str__

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "OrderEntry":
        '''Creates an OrderEntry from an order_plans row. Join-only columns are ignored.'''
        return OrderEntry(
            id=row["id"],
            date=row["date"],
            target_cost=float(row["targetCost"]),
            food_item_id=row["foodItemId"],
        )

    def to_row(self) -> dict:
        '''Converts the entry to a row using the order_plans column names.'''
        return {
            "id": self.id,
            "date": self.date,
            "targetCost": self.target_cost,
            "foodItemId": self.food_item_id,
        }


class JoinedOrderEntry(OrderEntry):
    """Read-only shape built by the gateway's join queries; never written back.

    Use to_entry() to get the stored columns alone.
    """

    def __init__(self, date: str, target_cost: float, food_item_id: int, id: Optional[int] = None,
                 food_item_name: Optional[str] = None, food_item_cost: Optional[float] = None):
        super().__init__(date, target_cost, food_item_id, id)
        self.food_item_name = food_item_name
        self.food_item_cost = food_item_cost

    def _key(self):
        return super()._key() + (self.food_item_name, self.food_item_cost)

    def __str__(self) -> str:
        return (f"OrderEntry{{id: {self.id}, date: {self.date}, targetCost: ${self.target_cost}, "
                f"foodItemId: {self.food_item_id}, foodItemName: {self.food_item_name}, "
                f"foodItemCost: ${self.food_item_cost or 0.0}}}")

    __repr__ = __str__

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "JoinedOrderEntry":
        cost = row["foodItemCost"]
        return JoinedOrderEntry(
            id=row["id"],
            date=row["date"],
            target_cost=float(row["targetCost"]),
            food_item_id=row["foodItemId"],
            food_item_name=row["foodItemName"],
            food_item_cost=float(cost) if cost is not None else None,
        )

    def to_entry(self) -> OrderEntry:
        '''Drops the join-only fields.'''
        return OrderEntry(self.date, self.target_cost, self.food_item_id, id=self.id)
