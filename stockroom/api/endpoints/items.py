"""
Stock Items API endpoints
"""

from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from stockroom.api import deps
from stockroom.api.responses import csv_response
from stockroom.schemas.common import OBJECT_ID_PATTERN
from stockroom.schemas.inventory import (
    ItemCreate, ItemUpdate, ItemResponse, ReorderListResponse
)
from stockroom.services.item_service import ItemService
from stockroom.services.export_service import ExportService

router = APIRouter(dependencies=[Depends(deps.get_current_user)])


class ItemFilters:
    """Query parameters shared by the list and export endpoints"""

    def __init__(
        self,
        category_id: Optional[str] = Query(None, alias="categoryId", pattern=OBJECT_ID_PATTERN),
        low_stock: Literal["true", "false"] = Query("false", alias="lowStock"),
        search: Optional[str] = Query(None, max_length=100),
    ):
        self.category_id = category_id
        self.low_stock = low_stock == "true"
        self.search = search

    def as_dict(self) -> dict:
        return {
            "category_id": self.category_id,
            "low_stock": self.low_stock,
            "search": self.search,
        }


@router.get("", response_model=List[ItemResponse])
def list_items(
    filters: ItemFilters = Depends(),
    db: Session = Depends(deps.get_db),
):
    """
    Retrieve items with optional filtering.

    lowStock=true keeps only items at or below their minimum quantity.
    """
    return ItemService(db).list_items(**filters.as_dict())


@router.get("/export")
def export_items(
    filters: ItemFilters = Depends(),
    db: Session = Depends(deps.get_db),
):
    """Download the filtered item list as CSV."""
    items = ItemService(db).list_items(**filters.as_dict())
    return csv_response(ExportService().export_items(items), "items.csv")


@router.get("/reorder", response_model=ReorderListResponse)
def reorder_list(
    category_id: Optional[str] = Query(None, alias="categoryId", pattern=OBJECT_ID_PATTERN),
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(deps.get_db),
):
    """Low-stock items with a suggested order quantity."""
    items = ItemService(db).get_reorder_list(category_id=category_id, search=search)
    return {"items": items, "total": len(items)}


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item_in: ItemCreate,
    db: Session = Depends(deps.get_db),
):
    return ItemService(db).create_item(item_in.model_dump())


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    return ItemService(db).get_item_detail(item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(
    item_in: ItemUpdate,
    item_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    """
    Update an item.

    Editing quantity here does not create a ledger entry; use the
    movements API for stock in/out.
    """
    return ItemService(db).update_item(item_id, item_in.model_dump(exclude_unset=True))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    ItemService(db).delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
