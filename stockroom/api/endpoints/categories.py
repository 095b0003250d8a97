"""Category Management API endpoints"""

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session
from typing import List

from stockroom.api import deps
from stockroom.schemas.common import OBJECT_ID_PATTERN
from stockroom.schemas.inventory import CategoryCreate, CategoryUpdate, CategoryResponse
from stockroom.services.category_service import CategoryService

router = APIRouter(dependencies=[Depends(deps.get_current_user)])


@router.get("", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(deps.get_db)):
    """List all categories, ordered by name."""
    return CategoryService(db).get_categories()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(deps.get_db),
):
    return CategoryService(db).create_category(category_in.model_dump())


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    return CategoryService(db).get_category(category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_in: CategoryUpdate,
    category_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    return CategoryService(db).update_category(
        category_id, category_in.model_dump(exclude_unset=True)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str = Path(..., pattern=OBJECT_ID_PATTERN),
    db: Session = Depends(deps.get_db),
):
    """
    Delete a category.

    Rejected with CATEGORY_IN_USE while any item references it.
    """
    CategoryService(db).delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
