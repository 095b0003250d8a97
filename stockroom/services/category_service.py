"""
Category Service
Category maintenance with the in-use delete guard
"""
from typing import List, Dict, Any
from sqlalchemy.orm import Session
import logging

from stockroom.models.inventory import Category, Item
from stockroom.core.exceptions import NotFoundError, CategoryInUseError

logger = logging.getLogger("stockroom.business")


class CategoryService:
    """Create, read, update and delete item categories"""

    def __init__(self, db: Session):
        self.db = db

    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def get_category(self, category_id: str) -> Category:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, data: Dict[str, Any]) -> Category:
        category = Category(name=data["name"], description=data.get("description"))
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)

        logger.info(f"Category created: {category.name}")
        return category

    def update_category(self, category_id: str, data: Dict[str, Any]) -> Category:
        category = self.get_category(category_id)
        for field, value in data.items():
            setattr(category, field, value)
        self.db.commit()
        self.db.refresh(category)
        return category

    def is_in_use(self, category_id: str) -> bool:
        """True while any item still references the category"""
        return self.db.query(Item.id).filter(Item.category_id == category_id).first() is not None

    def delete_category(self, category_id: str) -> None:
        category = self.get_category(category_id)
        if self.is_in_use(category_id):
            raise CategoryInUseError(
                "Cannot delete category that has items. Move or delete the items first."
            )

        name = category.name
        self.db.delete(category)
        self.db.commit()
        logger.info(f"Category deleted: {name}")

    def ensure_category(self, name: str) -> Category:
        """Fetch a category by name, creating it when missing"""
        category = self.db.query(Category).filter(Category.name == name).first()
        if category:
            return category
        return self.create_category({"name": name})
