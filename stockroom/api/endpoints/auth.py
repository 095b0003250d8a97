"""
Authentication API endpoints
Login, password change, current user
"""
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.api import deps
from stockroom.models.auth import User
from stockroom.schemas.auth import Token, LoginRequest, PasswordChange, UserResponse
from stockroom.schemas.common import MessageResponse
from stockroom.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    credentials: LoginRequest,
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    Exchange email and password for a bearer token
    """
    return AuthService(db).login(credentials.email, credentials.password)


@router.patch("/change-password", response_model=MessageResponse)
def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    Change current user's password
    """
    AuthService(db).change_password(
        current_user,
        password_data.current_password,
        password_data.new_password,
    )
    return {"message": "Password updated"}


@router.get("/me", response_model=UserResponse)
def read_current_user(
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """
    Get current user info
    """
    return current_user
