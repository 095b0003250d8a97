"""
Stockroom SQLAlchemy Models
"""

# Import all models to ensure they are registered with SQLAlchemy
from .auth import User, ROLE_ADMIN, ROLE_STAFF
from .inventory import (
    Category, Item, StockMovement, MOVEMENT_IN, MOVEMENT_OUT, reorder_suggestion
)

__all__ = [
    "User",
    "ROLE_ADMIN",
    "ROLE_STAFF",
    "Category",
    "Item",
    "StockMovement",
    "MOVEMENT_IN",
    "MOVEMENT_OUT",
    "reorder_suggestion",
]
