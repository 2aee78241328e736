"""Simple Event Bus / Observer implementation for catalog and order plan changes.

Event names used so far:
  catalog.item_added -> payload {"item": FoodItem}
  catalog.item_updated -> payload {"item": FoodItem}
  catalog.item_deleted -> payload {"item_id": int, "deleted": int}
  plan.saved -> payload {"date": str, "target_cost": float, "total": float, "entry_ids": [int], "replaced": int}
  plan.deleted -> payload {"date": str, "deleted": int}
  builder.selection_cleared -> payload {"budget": float, "previous_total": float, "cleared": int}
  builder.selection_refused -> payload {"item": FoodItem, "refusal": BudgetExceededRefusal}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
CATALOG_ITEM_ADDED = "catalog.item_added"
CATALOG_ITEM_UPDATED = "catalog.item_updated"
CATALOG_ITEM_DELETED = "catalog.item_deleted"
PLAN_SAVED = "plan.saved"
PLAN_DELETED = "plan.deleted"
SELECTION_CLEARED = "builder.selection_cleared"
SELECTION_REFUSED = "builder.selection_refused"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception(f"Error delivering {event_name} to {cb}")


# Process-wide default bus; components accept their own bus in the constructor
GLOBAL_EVENT_BUS = EventBus()


def log_listener(event_name: str, payload: Any):
	logger.info(f"[EVENT] {event_name}: {payload}")


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'log_listener',
	'CATALOG_ITEM_ADDED', 'CATALOG_ITEM_UPDATED', 'CATALOG_ITEM_DELETED',
	'PLAN_SAVED', 'PLAN_DELETED', 'SELECTION_CLEARED', 'SELECTION_REFUSED'
]
