"""
Authentication schemas for request/response validation
"""
from typing import Optional
from enum import Enum
from pydantic import EmailStr, Field
from datetime import datetime

from stockroom.core.config import settings
from stockroom.schemas.common import APIModel


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class LoginRequest(APIModel):
    """User login request"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class PasswordChange(APIModel):
    """Password change request"""
    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(
        ...,
        alias="newPassword",
        min_length=settings.MIN_PASSWORD_LENGTH,
        description=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "currentPassword": "current_password",
                "newPassword": "new_secure_password",
            }
        }
    }


class UserCreate(APIModel):
    """User provisioning request (admin only)"""
    email: EmailStr
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH)
    name: str = Field(..., min_length=1, max_length=200)
    role: Role = Role.STAFF

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "email": "jane.doe@example.com",
                "password": "secret123",
                "name": "Jane Doe",
                "role": "staff",
            }
        }
    }


class UserSummary(APIModel):
    """Account fields returned with a login token"""
    id: str
    email: str
    name: str
    role: Role


class UserResponse(UserSummary):
    """Account as listed by the users API"""
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class Token(APIModel):
    """Login response"""
    token: str
    user: UserSummary
