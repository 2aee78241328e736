import unittest
from foodorder.domain.FoodItem import FoodItem
from foodorder.domain.OrderEntry import OrderEntry, JoinedOrderEntry


class TestFoodItem(unittest.TestCase):

    def test_row_round_trip(self):
        item = FoodItem("Pizza", 12.99, id=3)
        self.assertEqual(FoodItem.from_row(item.to_row()), item)

    def test_equality_uses_id_name_and_cost(self):
        self.assertEqual(FoodItem("Soda", 2.0, id=1), FoodItem("Soda", 2.0, id=1))
        self.assertNotEqual(FoodItem("Soda", 2.0, id=1), FoodItem("Soda", 2.0, id=2))
        self.assertNotEqual(FoodItem("Soda", 2.0, id=1), FoodItem("Soda", 2.5, id=1))
        self.assertEqual(len({FoodItem("Soda", 2.0, id=1), FoodItem("Soda", 2.0, id=1)}), 1)

    def test_copy_with_keeps_other_fields(self):
        item = FoodItem("Salad", 8.5, id=7)
        changed = item.copy_with(cost=9.0)
        self.assertEqual(changed, FoodItem("Salad", 9.0, id=7))
        self.assertEqual(item.cost, 8.5)

    def test_str(self):
        self.assertEqual(str(FoodItem("Pizza", 12.99, id=1)), "FoodItem{id: 1, name: Pizza, cost: $12.99}")


class TestOrderEntry(unittest.TestCase):

    def test_row_round_trip(self):
        entry = OrderEntry("2025-11-25", 15.0, 4, id=9)
        row = entry.to_row()
        self.assertEqual(set(row), {"id", "date", "targetCost", "foodItemId"})
        self.assertEqual(OrderEntry.from_row(row), entry)

    def test_joined_entry_drops_join_fields(self):
        joined = JoinedOrderEntry.from_row({
            "id": 1, "date": "2025-11-25", "targetCost": 15.0, "foodItemId": 4,
            "foodItemName": "Pizza", "foodItemCost": 12.99,
        })
        self.assertEqual(joined.food_item_name, "Pizza")
        self.assertEqual(joined.to_entry(), OrderEntry("2025-11-25", 15.0, 4, id=1))
        self.assertEqual(OrderEntry.from_row(joined.to_row()), joined.to_entry())

    def test_write_and_read_shapes_are_distinct(self):
        entry = OrderEntry("2025-11-25", 15.0, 4, id=1)
        joined = JoinedOrderEntry("2025-11-25", 15.0, 4, id=1, food_item_name="Pizza", food_item_cost=12.99)
        self.assertFalse(hasattr(entry, "food_item_name"))
        self.assertNotEqual(entry, joined)


if __name__ == '__main__':
    unittest.main()
