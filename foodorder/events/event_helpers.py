"""Event helper utilities.

Helpers for publishing catalog and order plan events on a given bus
(the global one when none is passed).

Quick import:
    from foodorder.events.event_helpers import (
        publish_plan_saved, publish_plan_deleted, subscribe_all
    )
"""
from __future__ import annotations
from typing import Any, Callable, Iterable, Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    CATALOG_ITEM_ADDED, CATALOG_ITEM_UPDATED, CATALOG_ITEM_DELETED,
    PLAN_SAVED, PLAN_DELETED, SELECTION_CLEARED, SELECTION_REFUSED
)

ALL_EVENTS = (
    CATALOG_ITEM_ADDED, CATALOG_ITEM_UPDATED, CATALOG_ITEM_DELETED,
    PLAN_SAVED, PLAN_DELETED, SELECTION_CLEARED, SELECTION_REFUSED,
)

__all__ = [
    'publish_item_added', 'publish_item_updated', 'publish_item_deleted',
    'publish_plan_saved', 'publish_plan_deleted',
    'publish_selection_cleared', 'publish_selection_refused',
    'subscribe_all', 'ALL_EVENTS'
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_item_added(item: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(CATALOG_ITEM_ADDED, {'item': item})


def publish_item_updated(item: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(CATALOG_ITEM_UPDATED, {'item': item})


def publish_item_deleted(item_id: int, deleted: int, bus: Optional[EventBus] = None):
    _bus(bus).publish(CATALOG_ITEM_DELETED, {'item_id': item_id, 'deleted': deleted})


def publish_plan_saved(date: str, target_cost: float, total: float, entry_ids: Iterable[int],
                       replaced: int, bus: Optional[EventBus] = None):
    """Publish a plan.saved event.

    Payload structure:
        {
          'date': 'YYYY-MM-DD',
          'target_cost': <float>,
          'total': <float>,
          'entry_ids': [<int>, ...],
          'replaced': <int>   # entries of the previous plan that were removed
        }
    """
    _bus(bus).publish(PLAN_SAVED, {
        'date': date,
        'target_cost': target_cost,
        'total': total,
        'entry_ids': list(entry_ids),
        'replaced': replaced
    })


def publish_plan_deleted(date: str, deleted: int, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_DELETED, {'date': date, 'deleted': deleted})


def publish_selection_cleared(budget: float, previous_total: float, cleared: int,
                              bus: Optional[EventBus] = None):
    _bus(bus).publish(SELECTION_CLEARED, {
        'budget': budget,
        'previous_total': previous_total,
        'cleared': cleared
    })


def publish_selection_refused(item: Any, refusal: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(SELECTION_REFUSED, {'item': item, 'refusal': refusal})


def subscribe_all(listener: Callable[[str, Any], None], bus: Optional[EventBus] = None):
    """Register one listener for every event the planner publishes."""
    target = _bus(bus)
    for name in ALL_EVENTS:
        target.subscribe(name, listener)
    return target
