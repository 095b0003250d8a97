"""
Stock Movements Service
Posts stock-in/stock-out movements against items and queries the ledger
"""
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from sqlalchemy.orm import Session
import logging

from stockroom.models.inventory import Item, StockMovement, MOVEMENT_IN, MOVEMENT_OUT
from stockroom.models.auth import User
from stockroom.core.config import settings
from stockroom.core.database import utc_now
from stockroom.core.exceptions import (
    StockroomException,
    ValidationError,
    NotFoundError,
    InsufficientStockError,
)

logger = logging.getLogger("stockroom.business")


def movement_to_dict(movement: StockMovement, item: Optional[Item]) -> Dict[str, Any]:
    """Ledger entry enriched with the item's display name and unit"""
    return {
        "id": movement.id,
        "item_id": movement.item_id,
        "item": {"id": item.id, "name": item.name, "unit": item.unit} if item else None,
        "type": movement.type,
        "quantity": movement.quantity,
        "reason": movement.reason,
        "created_by": movement.created_by,
        "created_at": movement.created_at,
    }


def parse_date_bound(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a from/to filter value as a naive UTC datetime

    Unparseable values yield None and the bound is not applied.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Ignoring unparseable date bound: {value!r}")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class StockMovementsService:
    """
    Stock movement processing

    Every quantity change made here is paired with exactly one ledger entry
    in the same transaction.
    """

    def __init__(self, db: Session, current_user: Optional[User] = None):
        self.db = db
        self.current_user = current_user

    def post_movement(
        self,
        item_id: str,
        movement_type: str,
        quantity: float,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Adjust an item's quantity and append a ledger entry

        The quantity is changed with one conditional UPDATE
        (quantity = quantity + delta, guarded by quantity >= requested for
        outbound movements), so concurrent postings cannot lose updates or
        take the item below zero. The UPDATE and the ledger INSERT commit
        together or not at all.

        Raises:
            ValidationError: quantity not positive or unknown movement type
            NotFoundError: the item does not exist
            InsufficientStockError: outbound quantity exceeds stock on hand
        """
        if movement_type not in (MOVEMENT_IN, MOVEMENT_OUT):
            raise ValidationError(f"Invalid movement type: {movement_type}")
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero")

        item = self.db.query(Item).filter(Item.id == item_id).first()
        if not item:
            raise NotFoundError("Item not found")

        if movement_type == MOVEMENT_OUT and item.quantity < quantity:
            raise InsufficientStockError(item.quantity, quantity)

        delta = quantity if movement_type == MOVEMENT_IN else -quantity
        now = utc_now()

        try:
            query = self.db.query(Item).filter(Item.id == item_id)
            if movement_type == MOVEMENT_OUT:
                query = query.filter(Item.quantity >= quantity)
            updated = query.update(
                {Item.quantity: Item.quantity + delta, Item.updated_at: now},
                synchronize_session=False,
            )

            if updated == 0:
                # Another request drained or removed the item in between
                self.db.rollback()
                available = self.db.query(Item.quantity).filter(Item.id == item_id).scalar()
                if available is None:
                    raise NotFoundError("Item not found")
                raise InsufficientStockError(available, quantity)

            movement = StockMovement(
                item_id=item_id,
                type=movement_type,
                quantity=quantity,
                reason=reason,
                created_by=self.current_user.id if self.current_user else None,
                created_at=now,
            )
            self.db.add(movement)
            self.db.commit()

        except StockroomException:
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"Stock movement failed for item {item_id}: {e}")
            raise

        self.db.refresh(item)
        logger.info(
            f"Stock {movement_type} {quantity:g} {item.unit} of {item.name}: "
            f"on hand now {item.quantity:g}"
        )
        return movement_to_dict(movement, item)

    def receive(self, item_id: str, quantity: float, reason: Optional[str] = None) -> Dict[str, Any]:
        """Stock in"""
        return self.post_movement(item_id, MOVEMENT_IN, quantity, reason)

    def issue(self, item_id: str, quantity: float, reason: Optional[str] = None) -> Dict[str, Any]:
        """Stock out"""
        return self.post_movement(item_id, MOVEMENT_OUT, quantity, reason)

    def get_movements(
        self,
        item_id: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Ledger entries, newest first, joined with their item

        Args:
            item_id: Only movements of this item
            date_from: Inclusive lower bound on the creation time (ISO-8601)
            date_to: Inclusive upper bound on the creation time (ISO-8601)
            limit: Maximum rows returned
        """
        query = (
            self.db.query(StockMovement, Item)
            .outerjoin(Item, Item.id == StockMovement.item_id)
        )

        if item_id:
            query = query.filter(StockMovement.item_id == item_id)

        start = parse_date_bound(date_from)
        if start is not None:
            query = query.filter(StockMovement.created_at >= start)
        end = parse_date_bound(date_to)
        if end is not None:
            query = query.filter(StockMovement.created_at <= end)

        rows = (
            query.order_by(StockMovement.created_at.desc())
            .limit(limit or settings.MOVEMENT_LIST_DEFAULT_LIMIT)
            .all()
        )
        return [movement_to_dict(movement, item) for movement, item in rows]

    def get_item_balance(self, item_id: str) -> float:
        """Net ledger quantity for an item: sum(in) - sum(out)"""
        movements = self.db.query(StockMovement).filter(StockMovement.item_id == item_id).all()
        return sum(m.signed_quantity for m in movements)
