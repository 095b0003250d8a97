"""
User administration API endpoints (admin only)
"""
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockroom.api import deps
from stockroom.models.auth import User
from stockroom.schemas.auth import UserCreate, UserResponse
from stockroom.services.auth_service import AuthService

router = APIRouter()


@router.get("", response_model=List[UserResponse])
def list_users(
    current_user: User = Depends(deps.get_current_admin_user),
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    List all users, newest first
    """
    return AuthService(db).get_users()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: UserCreate,
    current_user: User = Depends(deps.get_current_admin_user),
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    Create new user
    """
    return AuthService(db).create_user(user_in, created_by=current_user)
