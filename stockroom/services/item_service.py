"""
Item Service
Item maintenance, filtered listing and the low-stock reorder query
"""
from typing import List, Optional, Dict, Any, Tuple
from sqlalchemy.orm import Session
import logging

from stockroom.models.inventory import Item, Category
from stockroom.core.database import utc_now
from stockroom.core.exceptions import NotFoundError

logger = logging.getLogger("stockroom.business")


def item_to_dict(item: Item, category: Optional[Category]) -> Dict[str, Any]:
    """Flatten an item and its joined category for the API"""
    return {
        "id": item.id,
        "name": item.name,
        "category_id": item.category_id,
        "category": {"id": category.id, "name": category.name} if category else None,
        "unit": item.unit,
        "quantity": item.quantity,
        "min_quantity": item.min_quantity,
        "max_quantity": item.max_quantity,
        "supplier": item.supplier,
        "expiry_date": item.expiry_date,
        "low_stock": item.is_low_stock,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ItemService:
    """Inventory item records"""

    def __init__(self, db: Session):
        self.db = db

    def _joined_query(self):
        return self.db.query(Item, Category).outerjoin(Category, Category.id == Item.category_id)

    def search_items(
        self,
        category_id: Optional[str] = None,
        low_stock: bool = False,
        search: Optional[str] = None,
    ) -> List[Tuple[Item, Optional[Category]]]:
        """
        Items joined with their category, ordered by name

        Args:
            category_id: Only items in this category
            low_stock: Only items with quantity <= minimum quantity
            search: Case-insensitive substring of the item name
        """
        query = self._joined_query()

        if category_id:
            query = query.filter(Item.category_id == category_id)
        if low_stock:
            query = query.filter(Item.quantity <= Item.min_quantity)
        if search and search.strip():
            pattern = f"%{_escape_like(search.strip())}%"
            query = query.filter(Item.name.ilike(pattern, escape="\\"))

        return query.order_by(Item.name).all()

    def list_items(self, **filters) -> List[Dict[str, Any]]:
        return [item_to_dict(item, category) for item, category in self.search_items(**filters)]

    def get_reorder_list(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Low-stock items with the suggested order quantity"""
        rows = []
        for item, category in self.search_items(category_id=category_id, low_stock=True, search=search):
            row = item_to_dict(item, category)
            row["suggested_quantity"] = item.suggested_reorder
            rows.append(row)
        return rows

    def get_item(self, item_id: str) -> Item:
        item = self.db.query(Item).filter(Item.id == item_id).first()
        if not item:
            raise NotFoundError("Item not found")
        return item

    def get_item_detail(self, item_id: str) -> Dict[str, Any]:
        row = self._joined_query().filter(Item.id == item_id).first()
        if not row:
            raise NotFoundError("Item not found")
        return item_to_dict(*row)

    def _require_category(self, category_id: str) -> None:
        if not self.db.query(Category.id).filter(Category.id == category_id).first():
            raise NotFoundError("Category not found")

    def create_item(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._require_category(data["category_id"])

        item = Item(**data)
        self.db.add(item)
        self.db.commit()

        logger.info(f"Item created: {item.name} (qty {item.quantity:g} {item.unit})")
        return self.get_item_detail(item.id)

    def update_item(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update

        A quantity edit here bypasses the movement ledger; it is kept as a
        manual correction path and logged.
        """
        item = self.get_item(item_id)
        if "category_id" in data:
            self._require_category(data["category_id"])

        if "quantity" in data and data["quantity"] != item.quantity:
            logger.warning(
                f"Direct quantity edit on {item.name} ({item_id}): "
                f"{item.quantity:g} -> {data['quantity']:g}, no ledger entry recorded"
            )

        for field, value in data.items():
            setattr(item, field, value)
        item.updated_at = utc_now()
        self.db.commit()

        return self.get_item_detail(item_id)

    def delete_item(self, item_id: str) -> None:
        item = self.get_item(item_id)
        name = item.name
        self.db.delete(item)
        self.db.commit()
        logger.info(f"Item deleted: {name}")
