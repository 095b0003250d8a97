"""
Inventory Models
Categories, items and the stock movement ledger

References between records (item -> category, movement -> item,
movement -> user) are plain id columns. The query layer joins them
explicitly at read time.
"""
from sqlalchemy import Column, String, Float, Date, DateTime, Index, CheckConstraint

from stockroom.core.database import Base, generate_id, utc_now

MOVEMENT_IN = "in"
MOVEMENT_OUT = "out"


class Category(Base):
    """Named grouping for items"""
    __tablename__ = "categories"

    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False)
    description = Column(String(500))

    created_at = Column(DateTime, default=utc_now, nullable=False)


class Item(Base):
    """Inventory record with on-hand quantity and reorder threshold"""
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="quantity_non_negative"),
        CheckConstraint("min_quantity >= 0", name="min_quantity_non_negative"),
    )

    id = Column(String(24), primary_key=True, default=generate_id)
    name = Column(String(200), nullable=False, index=True)
    category_id = Column(String(24), nullable=False, index=True)
    unit = Column(String(50), nullable=False)

    # Quantities
    quantity = Column(Float, nullable=False, default=0)
    min_quantity = Column(Float, nullable=False, default=0)  # reorder threshold
    max_quantity = Column(Float)

    supplier = Column(String(200))
    expiry_date = Column(Date)

    # Timestamps
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_quantity

    @property
    def suggested_reorder(self) -> float:
        return reorder_suggestion(self.quantity, self.min_quantity)


class StockMovement(Base):
    """Immutable ledger entry for one stock-in or stock-out event"""
    __tablename__ = "stock_movements"
    __table_args__ = (
        CheckConstraint("type IN ('in', 'out')", name="type_valid"),
        CheckConstraint("quantity > 0", name="quantity_positive"),
        Index("ix_stock_movements_item_created", "item_id", "created_at"),
    )

    id = Column(String(24), primary_key=True, default=generate_id)
    item_id = Column(String(24), nullable=False)
    type = Column(String(3), nullable=False)  # in / out
    quantity = Column(Float, nullable=False)
    reason = Column(String(200))
    created_by = Column(String(24))

    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)

    @property
    def signed_quantity(self) -> float:
        return self.quantity if self.type == MOVEMENT_IN else -self.quantity


def reorder_suggestion(quantity: float, min_quantity: float) -> float:
    """Amount to order so the item rises above its minimum"""
    return max(0, min_quantity - quantity + 1)
