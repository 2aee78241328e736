"""OrderPlan domain entity: all joined order entries sharing one date (never stored as a row)."""
import math
from typing import List, Optional

from foodorder.domain.OrderEntry import JoinedOrderEntry


class OrderPlan:
    def __init__(self, date: str, entries: List[JoinedOrderEntry], target_cost: Optional[float] = None):
        self.date = date
        self.entries = list(entries)
        # every entry of a date carries the same budget, so the first one is representative
        if target_cost is None:
            target_cost = self.entries[0].target_cost if self.entries else 0.0
        self.target_cost = target_cost

    @property
    def actual_cost(self) -> float:
        return math.fsum((e.food_item_cost or 0.0) for e in self.entries)

    @property
    def remaining(self) -> float:
        return self.target_cost - self.actual_cost

    @property
    def is_over_budget(self) -> bool:
        return self.actual_cost > self.target_cost

    @property
    def item_names(self) -> List[str]:
        return [e.food_item_name or "" for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __str__(self) -> str:
        return (f"OrderPlan {self.date} - {len(self.entries)} items - Target: ${self.target_cost:.2f} "
                f"- Actual: ${self.actual_cost:.2f} - Remaining: ${self.remaining:.2f}")

    __repr__ = __str__

    def to_dict(self):
        return {
            "date": self.date,
            "target_cost": self.target_cost,
            "actual_cost": round(self.actual_cost, 2),
            "remaining": round(self.remaining, 2),
            "entries": [
                {
                    "id": e.id,
                    "food_item_id": e.food_item_id,
                    "name": e.food_item_name,
                    "cost": e.food_item_cost,
                }
                for e in self.entries
            ],
        }
