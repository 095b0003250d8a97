"""Inventory Schemas: categories, items and stock movements"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from enum import Enum

from stockroom.schemas.common import APIModel, OBJECT_ID_PATTERN


class MovementType(str, Enum):
    IN = "in"
    OUT = "out"


# Category Schemas
class CategoryCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)


class CategoryUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("name may not be null")
        return v


class CategoryResponse(APIModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class CategorySummary(APIModel):
    id: str
    name: str


# Item Schemas
class ItemBase(APIModel):
    name: str = Field(..., min_length=1, max_length=200)
    category_id: str = Field(..., alias="categoryId", pattern=OBJECT_ID_PATTERN)
    unit: str = Field(..., min_length=1, max_length=50)
    quantity: float = Field(..., ge=0)
    min_quantity: float = Field(..., alias="minQuantity", ge=0)
    max_quantity: Optional[float] = Field(None, alias="maxQuantity", ge=0)
    supplier: Optional[str] = Field(None, max_length=200)
    expiry_date: Optional[date] = Field(None, alias="expiryDate")

    @field_validator("expiry_date", mode="before")
    @classmethod
    def blank_expiry_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ItemCreate(ItemBase):
    pass


class ItemUpdate(APIModel):
    """Partial item update; omitted fields are left untouched"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category_id: Optional[str] = Field(None, alias="categoryId", pattern=OBJECT_ID_PATTERN)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    quantity: Optional[float] = Field(None, ge=0)
    min_quantity: Optional[float] = Field(None, alias="minQuantity", ge=0)
    max_quantity: Optional[float] = Field(None, alias="maxQuantity", ge=0)
    supplier: Optional[str] = Field(None, max_length=200)
    expiry_date: Optional[date] = Field(None, alias="expiryDate")

    @field_validator("name", "category_id", "unit", "quantity", "min_quantity")
    @classmethod
    def required_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v

    @field_validator("expiry_date", mode="before")
    @classmethod
    def blank_expiry_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ItemResponse(APIModel):
    id: str
    name: str
    category_id: str = Field(..., alias="categoryId")
    category: Optional[CategorySummary] = None
    unit: str
    quantity: float
    min_quantity: float = Field(..., alias="minQuantity")
    max_quantity: Optional[float] = Field(None, alias="maxQuantity")
    supplier: Optional[str] = None
    expiry_date: Optional[date] = Field(None, alias="expiryDate")
    low_stock: bool = Field(False, alias="lowStock")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class ReorderItem(ItemResponse):
    suggested_quantity: float = Field(..., alias="suggestedQuantity")


class ItemSummary(APIModel):
    id: str
    name: str
    unit: str


# Movement Schemas
class StockMovementCreate(APIModel):
    item_id: str = Field(..., alias="itemId", pattern=OBJECT_ID_PATTERN)
    type: MovementType
    quantity: float = Field(..., gt=0)
    reason: Optional[str] = Field(None, max_length=200)


class StockMovementResponse(APIModel):
    id: str
    item_id: str = Field(..., alias="itemId")
    item: Optional[ItemSummary] = None
    type: MovementType
    quantity: float
    reason: Optional[str] = None
    created_by: Optional[str] = Field(None, alias="createdBy")
    created_at: datetime = Field(..., alias="createdAt")


class ReorderListResponse(APIModel):
    items: List[ReorderItem]
    total: int
