"""Core business logic layer.

Subpackages:
- catalog: food item management with input validation
- ordering: budget-constrained order plan builder
- reporting: order plan queries and totals
"""
__all__ = ["catalog", "ordering", "reporting"]
