
from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DISPLAY_DATE_FORMAT: Final[str] = "%B %d, %Y"
SCHEMA_VERSION: Final[int] = 1

# Reasons reported by the order plan builder
REASON_BUDGET_REQUIRED: Final[str] = "budget_required"
REASON_NO_ITEMS_SELECTED: Final[str] = "no_items_selected"
REASON_OVER_BUDGET: Final[str] = "over_budget"
REASON_WOULD_EXCEED_BUDGET: Final[str] = "would_exceed_budget"

REASON_MESSAGES: Final[dict[str, str]] = {
    REASON_BUDGET_REQUIRED: "Please enter a valid target budget",
    REASON_NO_ITEMS_SELECTED: "Please select at least one food item",
    REASON_OVER_BUDGET: "Total cost exceeds target budget",
    REASON_WOULD_EXCEED_BUDGET: "Adding this item would exceed your budget",
}

# Menu inserted when the database is created for the first time
SEED_FOOD_ITEMS: Final[tuple[tuple[str, float], ...]] = (
    ("Margherita Pizza", 12.99),
    ("Caesar Salad", 8.50),
    ("Cheeseburger", 10.25),
    ("Chicken Tacos", 9.75),
    ("Salmon Sushi Roll", 14.00),
    ("Spaghetti Carbonara", 11.50),
    ("Pad Thai", 10.95),
    ("Tonkotsu Ramen", 13.25),
    ("Club Sandwich", 7.80),
    ("French Fries", 3.50),
    ("Garlic Bread", 4.25),
    ("Chocolate Brownie", 4.75),
    ("Vanilla Ice Cream", 3.95),
    ("Iced Coffee", 3.25),
    ("Lemonade", 2.75),
    ("Soda", 2.00),
)
