"""
Pytest fixtures for food order planner tests.
"""
import pytest

from foodorder.events.Event_Bus import EventBus
from foodorder.infra.Database import Database
from foodorder.infra.Storage_Gateway import StorageGateway
from foodorder.logic.catalog.manager import FoodCatalogManager


@pytest.fixture
def database():
    """Empty in-memory database (no seed menu)."""
    db = Database(":memory:", seed_items=())
    yield db
    db.close()


@pytest.fixture
def gateway(database):
    return StorageGateway(database)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """List that receives (event_name, payload) for every planner event on `event_bus`."""
    from foodorder.events.event_helpers import subscribe_all
    events = []
    subscribe_all(lambda name, payload: events.append((name, payload)), event_bus)
    return events


@pytest.fixture
def menu(gateway, event_bus):
    """Pizza / Salad / Soda catalog used by the example scenarios."""
    catalog = FoodCatalogManager(gateway, event_bus=event_bus)
    return {
        "pizza": catalog.add("Pizza", 12.99),
        "salad": catalog.add("Salad", 8.50),
        "soda": catalog.add("Soda", 2.00),
    }
