"""Food catalog manager.

Validates catalog input and forwards to the storage gateway. Provides
FoodCatalogManager(gateway).add / update / delete / get / list_all / search.
"""
import logging
from typing import Any, List, Optional

from foodorder.domain.FoodItem import FoodItem
from foodorder.events.Event_Bus import EventBus
from foodorder.events.event_helpers import publish_item_added, publish_item_updated, publish_item_deleted
from foodorder.infra.Storage_Gateway import StorageGateway
from foodorder.utilities.validators import FoodItemInput, validate

logger = logging.getLogger(__name__)


class FoodCatalogManager:
    def __init__(self, gateway: StorageGateway, event_bus: Optional[EventBus] = None):
        self.gateway = gateway
        self._event_bus = event_bus

    def add(self, name: str, cost: Any) -> FoodItem:
        """Validate and insert a new item; returns it with its store-assigned id."""
        data = validate(FoodItemInput, name=name, cost=cost)
        item = FoodItem(data.name, data.cost)
        item.id = self.gateway.insert_food_item(item)
        logger.info(f"Added food item {item}")
        publish_item_added(item, self._event_bus)
        return item

    def update(self, item_id: int, name: str, cost: Any) -> bool:
        """Rename/re-price an item in place. Returns False when no item has this id."""
        data = validate(FoodItemInput, name=name, cost=cost)
        item = FoodItem(data.name, data.cost, id=item_id)
        affected = self.gateway.update_food_item(item)
        if not affected:
            logger.warning(f"Update skipped, no food item with id {item_id}")
            return False
        publish_item_updated(item, self._event_bus)
        return True

    def delete(self, item_id: int) -> int:
        """Delete unconditionally; confirmation is the caller's job. Cascades to order entries."""
        deleted = self.gateway.delete_food_item(item_id)
        if deleted:
            logger.info(f"Deleted food item {item_id}")
            publish_item_deleted(item_id, deleted, self._event_bus)
        return deleted

    def get(self, item_id: int) -> Optional[FoodItem]:
        return self.gateway.get_food_item_by_id(item_id)

    def list_all(self) -> List[FoodItem]:
        return self.gateway.get_all_food_items()

    def search(self, term: str) -> List[FoodItem]:
        if not term or not term.strip():
            return self.list_all()
        return self.gateway.search_food_items(term.strip())

    def find_by_name(self, name: str) -> Optional[FoodItem]:
        """Exact, case-insensitive name lookup (used by imports to skip duplicates)."""
        wanted = (name or '').strip().lower()
        for item in self.list_all():
            if item.name.lower() == wanted:
                return item
        return None


__all__ = ['FoodCatalogManager']
