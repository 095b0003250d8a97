"""Stock Movement API endpoints"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stockroom.api import deps
from stockroom.api.responses import csv_response
from stockroom.core.config import settings
from stockroom.models.auth import User
from stockroom.schemas.common import OBJECT_ID_PATTERN
from stockroom.schemas.inventory import StockMovementCreate, StockMovementResponse
from stockroom.services.stock_movements import StockMovementsService
from stockroom.services.export_service import ExportService

router = APIRouter()


@router.get("", response_model=List[StockMovementResponse])
def list_movements(
    item_id: Optional[str] = Query(None, alias="itemId", pattern=OBJECT_ID_PATTERN),
    date_from: Optional[str] = Query(None, alias="from", description="Earliest creation time (ISO-8601)"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest creation time (ISO-8601)"),
    limit: int = Query(
        settings.MOVEMENT_LIST_DEFAULT_LIMIT, ge=1, le=settings.MOVEMENT_LIST_MAX_LIMIT
    ),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    List stock movements, newest first.
    """
    return StockMovementsService(db, current_user).get_movements(
        item_id=item_id, date_from=date_from, date_to=date_to, limit=limit
    )


@router.get("/export")
def export_movements(
    item_id: Optional[str] = Query(None, alias="itemId", pattern=OBJECT_ID_PATTERN),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    limit: int = Query(
        settings.MOVEMENT_EXPORT_MAX_LIMIT, ge=1, le=settings.MOVEMENT_EXPORT_MAX_LIMIT
    ),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Download the filtered movement ledger as CSV."""
    movements = StockMovementsService(db, current_user).get_movements(
        item_id=item_id, date_from=date_from, date_to=date_to, limit=limit
    )
    return csv_response(ExportService().export_movements(movements), "movements.csv")


@router.post("", response_model=StockMovementResponse, status_code=status.HTTP_201_CREATED)
def create_movement(
    movement_in: StockMovementCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Post a stock movement.

    Adjusts the item's quantity and records the ledger entry. Outbound
    movements larger than the quantity on hand are rejected with
    INSUFFICIENT_STOCK.
    """
    return StockMovementsService(db, current_user).post_movement(
        item_id=movement_in.item_id,
        movement_type=movement_in.type.value,
        quantity=movement_in.quantity,
        reason=movement_in.reason,
    )
