import pytest

from foodorder.domain.OrderEntry import OrderEntry
from foodorder.events.Event_Bus import PLAN_DELETED
from foodorder.logic.catalog.manager import FoodCatalogManager
from foodorder.logic.ordering.builder import OrderPlanBuilder
from foodorder.logic.reporting.plans import OrderPlanReporter


@pytest.fixture
def reporter(gateway, event_bus):
    return OrderPlanReporter(gateway, event_bus=event_bus)


def _save(gateway, day, budget, *items):
    builder = OrderPlanBuilder(gateway, date=day)
    builder.set_budget(budget)
    for item in items:
        assert builder.select(item).accepted
    assert builder.commit().saved


def test_search_rebuilds_plan_with_totals(gateway, menu, reporter):
    _save(gateway, "2025-11-25", 15.0, menu["pizza"], menu["soda"])

    plan = reporter.search("2025-11-25")
    assert plan is not None
    assert plan.item_names == ["Pizza", "Soda"]
    assert plan.target_cost == 15.0
    assert reporter.actual_cost(plan) == pytest.approx(14.99)
    assert reporter.remaining(plan) == pytest.approx(0.01)
    assert reporter.actual_cost(plan) == pytest.approx(reporter.total_cost_for_date("2025-11-25"))
    assert not plan.is_over_budget


def test_actual_cost_equals_stored_total_exactly(gateway, reporter):
    catalog = FoodCatalogManager(gateway)
    # inserted in the reverse of their name order
    items = [catalog.add("Cola", 0.1), catalog.add("Bun", 0.2), catalog.add("Apple", 0.3)]
    _save(gateway, "2025-11-28", 1.0, *items)

    plan = reporter.search("2025-11-28")
    assert plan.item_names == ["Apple", "Bun", "Cola"]
    assert reporter.actual_cost(plan) == reporter.total_cost_for_date("2025-11-28")
    assert plan.to_dict()["actual_cost"] == 0.6


def test_search_missing_date_returns_none(reporter):
    assert reporter.search("2030-01-01") is None


def test_remaining_is_not_clamped(gateway, menu, reporter):
    # written straight to the store, bypassing the builder's budget checks
    gateway.insert_order_entry(OrderEntry("2025-11-30", 10.0, menu["pizza"].id))
    plan = reporter.search("2025-11-30")
    assert plan.remaining == pytest.approx(-2.99)
    assert plan.is_over_budget


def test_delete_missing_plan_returns_zero_without_event(reporter, recorded_events):
    assert reporter.delete_plan("2099-01-01") == 0
    assert [name for name, _ in recorded_events if name == PLAN_DELETED] == []


def test_delete_plan_removes_every_entry(gateway, menu, reporter, recorded_events):
    _save(gateway, "2025-11-25", 30.0, menu["pizza"], menu["salad"], menu["soda"])
    assert reporter.delete_plan("2025-11-25") == 3
    assert reporter.search("2025-11-25") is None
    assert (PLAN_DELETED, {"date": "2025-11-25", "deleted": 3}) in recorded_events


def test_deleting_food_item_shrinks_every_plan(gateway, menu, reporter, event_bus):
    _save(gateway, "2025-11-25", 15.0, menu["pizza"], menu["soda"])
    _save(gateway, "2025-11-27", 13.0, menu["pizza"])

    FoodCatalogManager(gateway, event_bus=event_bus).delete(menu["pizza"].id)

    assert reporter.search("2025-11-25").item_names == ["Soda"]
    assert reporter.search("2025-11-27") is None
    assert reporter.list_dates() == ["2025-11-25"]


def test_all_plans_newest_first_and_summary(gateway, menu, reporter):
    _save(gateway, "2025-11-25", 15.0, menu["pizza"])
    _save(gateway, "2025-12-01", 10.0, menu["salad"], menu["soda"])

    plans = reporter.all_plans()
    assert [p.date for p in plans] == ["2025-12-01", "2025-11-25"]
    assert [len(p) for p in plans] == [2, 1]
    assert plans[0].to_dict()["actual_cost"] == 10.5
    assert reporter.summary() == {"food_items": 3, "order_dates": 2}
