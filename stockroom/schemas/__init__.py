"""
Stockroom Pydantic Schemas
Request/response validation models for the API
"""

from .common import APIModel, ErrorResponse, MessageResponse, OBJECT_ID_PATTERN
from .auth import (
    Role, LoginRequest, PasswordChange, UserCreate, UserSummary, UserResponse, Token
)
from .inventory import (
    MovementType,
    CategoryCreate, CategoryUpdate, CategoryResponse, CategorySummary,
    ItemCreate, ItemUpdate, ItemResponse, ItemSummary, ReorderItem, ReorderListResponse,
    StockMovementCreate, StockMovementResponse,
)

__all__ = [
    "APIModel",
    "ErrorResponse",
    "MessageResponse",
    "OBJECT_ID_PATTERN",
    "Role",
    "LoginRequest",
    "PasswordChange",
    "UserCreate",
    "UserSummary",
    "UserResponse",
    "Token",
    "MovementType",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategorySummary",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemSummary",
    "ReorderItem",
    "ReorderListResponse",
    "StockMovementCreate",
    "StockMovementResponse",
]
