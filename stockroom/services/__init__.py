"""Stockroom business services"""

from .auth_service import AuthService
from .category_service import CategoryService
from .item_service import ItemService
from .stock_movements import StockMovementsService
from .export_service import ExportService

__all__ = [
    "AuthService",
    "CategoryService",
    "ItemService",
    "StockMovementsService",
    "ExportService",
]
