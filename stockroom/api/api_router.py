"""
Main API Router - Consolidates all module routes
"""

from fastapi import APIRouter
from stockroom.api.endpoints import auth, categories, items, movements, users
from stockroom.schemas.common import ErrorResponse

# Error bodies shared by every endpoint, for the OpenAPI document
error_responses = {
    400: {"model": ErrorResponse, "description": "Validation or business rule failure"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"},
    404: {"model": ErrorResponse, "description": "Record not found"},
}

api_router = APIRouter(responses=error_responses)

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(items.router, prefix="/items", tags=["items"])
api_router.include_router(movements.router, prefix="/movements", tags=["movements"])
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
    responses={403: {"model": ErrorResponse, "description": "Admin only"}},
)
