"""
API Dependencies
Common dependencies for API endpoints
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.core.security import verify_token
from stockroom.core.exceptions import UnauthorizedError
from stockroom.models.auth import User
from stockroom.services.auth_service import AuthService

# Security scheme; missing headers are reported as 401 by get_current_user
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from the bearer token.
    """
    if credentials is None:
        raise UnauthorizedError("Missing or invalid authorization header")

    payload = verify_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError("Invalid or expired token")

    user = AuthService(db).get_user_by_id(payload["sub"])
    if not user:
        raise UnauthorizedError("User not found")

    return user


def get_current_admin_user(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """
    Require the admin role, read from the account store.
    """
    return AuthService(db).require_admin(current_user.id)
