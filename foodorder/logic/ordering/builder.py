"""Order plan builder: budget-constrained selection and atomic plan replacement.

A builder holds one plan-construction session in memory (date, budget,
catalog, selected item ids). Nothing reaches the store until commit();
dropping the builder abandons the session with no persisted effect.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from datetime import date as _date
from typing import Callable, Iterable, List, Optional, Set

from foodorder.domain.Errors import BudgetExceededRefusal, ValidationError
from foodorder.domain.FoodItem import FoodItem
from foodorder.domain.OrderEntry import OrderEntry
from foodorder.events.Event_Bus import EventBus
from foodorder.events.event_helpers import (
    publish_plan_saved, publish_selection_cleared, publish_selection_refused
)
from foodorder.infra.Storage_Gateway import StorageGateway
from foodorder.utilities.constants import (
    DATE_FORMAT, REASON_BUDGET_REQUIRED, REASON_NO_ITEMS_SELECTED, REASON_OVER_BUDGET, REASON_MESSAGES
)
from foodorder.utilities.validators import parse_budget, parse_plan_date

logger = logging.getLogger(__name__)

ConfirmReplace = Callable[[str], bool]


@dataclass
class SelectionResult:
    """Outcome of a select/deselect request. `refusal` is set only when the request was rejected."""
    item_id: Optional[int]
    selected: bool
    changed: bool
    refusal: Optional[BudgetExceededRefusal] = None

    @property
    def accepted(self) -> bool:
        return self.refusal is None


@dataclass
class CommitResult:
    saved: bool
    date: str
    reason: Optional[str] = None
    refusal: Optional[BudgetExceededRefusal] = None
    entry_ids: List[int] = field(default_factory=list)
    replaced: int = 0

    @property
    def message(self) -> str:
        if self.saved:
            return f"Order plan saved for {self.date}!"
        return REASON_MESSAGES.get(self.reason, self.reason or "")


class OrderPlanBuilder:
    def __init__(self, gateway: StorageGateway, catalog: Optional[Iterable[FoodItem]] = None,
                 date: Optional[str] = None, event_bus: Optional[EventBus] = None):
        self.gateway = gateway
        self._event_bus = event_bus
        self.date = parse_plan_date(date) if date is not None else _date.today().strftime(DATE_FORMAT)
        self.target_cost = 0.0
        self.catalog: List[FoodItem] = []
        self.selected: Set[int] = set()
        self.refresh_catalog(catalog)

    # --- Catalog -----------------------------------------------------------
    def refresh_catalog(self, items: Optional[Iterable[FoodItem]] = None) -> List[FoodItem]:
        """Reload the catalog; selected ids that disappeared are dropped."""
        self.catalog = list(items) if items is not None else self.gateway.get_all_food_items()
        known = {i.id for i in self.catalog}
        self.selected &= known
        return self.catalog

    def _catalog_item(self, item: FoodItem) -> FoodItem:
        for candidate in self.catalog:
            if candidate.id == item.id:
                return candidate
        raise ValidationError('item', f"Food item {item.id} is not in the catalog")

    # --- Queries -----------------------------------------------------------
    @property
    def selected_items(self) -> List[FoodItem]:
        return [i for i in self.catalog if i.id in self.selected]

    @property
    def current_total(self) -> float:
        return math.fsum(i.cost for i in self.selected_items)

    @property
    def remaining(self) -> float:
        return self.target_cost - self.current_total

    @property
    def is_over_budget(self) -> bool:
        return self.target_cost > 0 and self.current_total > self.target_cost

    @property
    def budget_ratio(self) -> float:
        if self.target_cost <= 0:
            return 0.0
        return min(max(self.current_total / self.target_cost, 0.0), 1.0)

    def is_selected(self, item: FoodItem) -> bool:
        return item.id in self.selected

    def can_select(self, item: FoodItem) -> bool:
        # deselecting is always allowed
        if item.id in self.selected:
            return True
        if self.target_cost <= 0:
            return False
        return self.current_total + item.cost <= self.target_cost

    # --- Commands ----------------------------------------------------------
    def select(self, item: FoodItem) -> SelectionResult:
        item = self._catalog_item(item)
        if item.id in self.selected:
            return SelectionResult(item.id, selected=True, changed=False)
        if not self.can_select(item):
            total = self.current_total
            refusal = BudgetExceededRefusal(
                current_total=total,
                attempted_total=total + item.cost,
                target_cost=self.target_cost,
                item_id=item.id,
            )
            logger.info(f"Refused {item.name}: {refusal.attempted_total:.2f} > budget {self.target_cost:.2f}")
            publish_selection_refused(item, refusal, self._event_bus)
            return SelectionResult(item.id, selected=False, changed=False, refusal=refusal)
        self.selected.add(item.id)
        return SelectionResult(item.id, selected=True, changed=True)

    def deselect(self, item: FoodItem) -> SelectionResult:
        changed = item.id in self.selected
        self.selected.discard(item.id)
        return SelectionResult(item.id, selected=False, changed=changed)

    def toggle(self, item: FoodItem, checked: bool) -> SelectionResult:
        return self.select(item) if checked else self.deselect(item)

    def clear_selection(self) -> int:
        cleared = len(self.selected)
        self.selected.clear()
        return cleared

    def set_budget(self, value) -> bool:
        """Adopt a new budget (0 = unset). Returns True when the selection had to be cleared.

        No partial eviction: if the current total no longer fits, every item is
        deselected and the user picks again.
        """
        budget = parse_budget(value)
        previous_total = self.current_total
        self.target_cost = budget
        if previous_total > budget:
            cleared = self.clear_selection()
            logger.info(f"Budget {budget:.2f} below selected total {previous_total:.2f}; cleared {cleared} items")
            publish_selection_cleared(budget, previous_total, cleared, self._event_bus)
            return True
        return False

    def set_date(self, new_date, confirm_replace: ConfirmReplace) -> bool:
        """Switch the session to another date. Returns True when the new date was adopted.

        If a plan already exists for the new date, confirm_replace(new_date) decides;
        a negative answer keeps the current date.

        The query, confirm_replace and the adoption run inside one store
        transaction, so confirm_replace is called while that transaction is
        open. On a file database this holds SQLite's shared lock until it
        returns: other connections can still read but cannot commit writes.
        An interactive prompt should therefore be answered promptly. The
        stored plan itself is only replaced by commit().
        """
        if isinstance(new_date, _date):
            new_date = new_date.strftime(DATE_FORMAT)
        new_date = parse_plan_date(new_date)
        if new_date == self.date:
            return True
        with self.gateway.transaction():
            if self.gateway.has_entries_for_date(new_date) and not confirm_replace(new_date):
                logger.info(f"Kept {self.date}; replacing the plan for {new_date} was declined")
                return False
            self.date = new_date
        return True

    def validate_commit(self) -> Optional[CommitResult]:
        """Check the commit preconditions in order; returns the refusal or None."""
        return self._check_commit(self.selected_items)

    def _check_commit(self, items: List[FoodItem]) -> Optional[CommitResult]:
        if self.target_cost <= 0:
            return CommitResult(False, self.date, reason=REASON_BUDGET_REQUIRED)
        if not items:
            return CommitResult(False, self.date, reason=REASON_NO_ITEMS_SELECTED)
        total = math.fsum(i.cost for i in items)
        if total > self.target_cost:
            refusal = BudgetExceededRefusal(total, total, self.target_cost, reason=REASON_OVER_BUDGET)
            return CommitResult(False, self.date, reason=REASON_OVER_BUDGET, refusal=refusal)
        return None

    def _stored_selection(self) -> List[FoodItem]:
        """Selected items as the store holds them now, in catalog order. Deleted ids are skipped."""
        items = []
        for item in self.selected_items:
            stored = self.gateway.get_food_item_by_id(item.id)
            if stored is None:
                logger.warning(f"Selected food item {item.id} no longer exists; left out of the plan")
                continue
            items.append(stored)
        return items

    def commit(self) -> CommitResult:
        """Replace the stored plan for self.date with the current selection, atomically.

        The budget is checked again against the stored prices inside the same
        transaction as the replacement, since the catalog may have changed
        since the items were selected.
        """
        refused = self.validate_commit()
        if refused is not None:
            logger.info(f"Commit for {self.date} refused: {refused.reason}")
            return refused

        entry_ids: List[int] = []
        replaced = 0
        with self.gateway.transaction():
            items = self._stored_selection()
            refused = self._check_commit(items)
            if refused is None:
                replaced = self.gateway.delete_entries_for_date(self.date)
                for item in items:
                    entry = OrderEntry(date=self.date, target_cost=self.target_cost, food_item_id=item.id)
                    entry_ids.append(self.gateway.insert_order_entry(entry))

        if refused is not None:
            self.refresh_catalog()
            logger.info(f"Commit for {self.date} refused after re-reading stored prices: {refused.reason}")
            return refused

        total = math.fsum(i.cost for i in items)
        logger.info(f"Saved plan for {self.date}: {len(entry_ids)} items, {total:.2f}/{self.target_cost:.2f}"
                    f" (replaced {replaced} entries)")
        publish_plan_saved(self.date, self.target_cost, total, entry_ids, replaced, self._event_bus)
        return CommitResult(True, self.date, entry_ids=entry_ids, replaced=replaced)


__all__ = ['OrderPlanBuilder', 'SelectionResult', 'CommitResult']
