"""Error taxonomy and refusal outcomes shared by the catalog, builder and storage layers."""
from dataclasses import dataclass
from typing import Optional

from foodorder.utilities.constants import REASON_WOULD_EXCEED_BUDGET, REASON_MESSAGES


class FoodOrderError(Exception):
    """Base class for every error raised by the planner core."""


class ValidationError(FoodOrderError):
    """Malformed input; `field` names the offending input."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ConstraintError(FoodOrderError):
    """A store-level constraint was violated (null field, dangling foreign key)."""


@dataclass(frozen=True)
class BudgetExceededRefusal:
    """Returned, never raised, when a selection or a commit would break the budget."""
    current_total: float
    attempted_total: float
    target_cost: float
    item_id: Optional[int] = None
    reason: str = REASON_WOULD_EXCEED_BUDGET

    @property
    def message(self) -> str:
        return REASON_MESSAGES.get(self.reason, self.reason)


__all__ = ['FoodOrderError', 'ValidationError', 'ConstraintError', 'BudgetExceededRefusal']
