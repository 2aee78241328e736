"""FoodItem domain entity: store-assigned id, name and cost."""
from typing import Any, Mapping, Optional


class FoodItem:
    def __init__(self, name: str = "", cost: float = 0.0, id: Optional[int] = None):
        self.id = id
        self.name = name
        self.cost = cost

    def copy_with(self, **changes) -> "FoodItem":
        '''Returns a copy of the item with the given fields replaced.'''
        data = {"id": self.id, "name": self.name, "cost": self.cost}
        data.update(changes)
        return FoodItem(**data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FoodItem):
            return NotImplemented
        return (self.id, self.name, self.cost) == (other.id, other.name, other.cost)

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.cost))

    def __str__(self) -> str:
        return f"FoodItem{{id: {self.id}, name: {self.name}, cost: ${self.cost}}}"

    __repr__ = __str__

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "FoodItem":
        '''Creates a FoodItem from a storage row (sqlite3.Row or dict).'''
        cost = row["cost"]
        return FoodItem(
            id=row["id"],
            name=row["name"],
            cost=float(cost) if cost is not None else None,
        )

    def to_row(self) -> dict:
        '''Converts the FoodItem to a storage row for the food_items table.'''
        return {
            "id": self.id,
            "name": self.name,
            "cost": self.cost,
        }
