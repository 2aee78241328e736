"""Order plan queries and reporting.

Rebuilds OrderPlan aggregates from the joined order entries and exposes the
per-date totals and date listings used by overviews.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional

from foodorder.domain.OrderPlan import OrderPlan
from foodorder.events.Event_Bus import EventBus
from foodorder.events.event_helpers import publish_plan_deleted
from foodorder.infra.Storage_Gateway import StorageGateway

logger = logging.getLogger(__name__)


class OrderPlanReporter:
    def __init__(self, gateway: StorageGateway, event_bus: Optional[EventBus] = None):
        self.gateway = gateway
        self._event_bus = event_bus

    def search(self, date: str) -> Optional[OrderPlan]:
        """Return the plan stored for `date`, or None when there is none.

        A stored plan always has at least one entry, so an empty join result
        means "not found", never "found with zero cost".
        """
        entries = self.gateway.get_entries_for_date(date)
        if not entries:
            return None
        return OrderPlan(date, entries)

    @staticmethod
    def actual_cost(plan: OrderPlan) -> float:
        return plan.actual_cost

    @staticmethod
    def remaining(plan: OrderPlan) -> float:
        # not clamped: a negative value means the plan was written outside the builder
        return plan.remaining

    def total_cost_for_date(self, date: str) -> float:
        return self.gateway.total_cost_for_date(date)

    def delete_plan(self, date: str) -> int:
        """Delete every entry for `date`. Deleting a missing plan is not an error and returns 0."""
        deleted = self.gateway.delete_entries_for_date(date)
        if deleted:
            logger.info(f"Deleted plan for {date} ({deleted} entries)")
            publish_plan_deleted(date, deleted, self._event_bus)
        return deleted

    def list_dates(self) -> List[str]:
        return self.gateway.get_all_order_dates()

    def all_plans(self) -> List[OrderPlan]:
        """Every stored plan, newest date first."""
        grouped = defaultdict(list)
        for entry in self.gateway.get_all_entries():
            grouped[entry.date].append(entry)
        return [OrderPlan(d, grouped[d]) for d in sorted(grouped, reverse=True)]

    def summary(self) -> Dict[str, int]:
        return {
            'food_items': self.gateway.count_food_items(),
            'order_dates': self.gateway.count_order_dates(),
        }


__all__ = ['OrderPlanReporter']
