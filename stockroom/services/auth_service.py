"""
Authentication Service
User authentication, password management and account provisioning
"""

from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
import logging

from stockroom.models.auth import User
from stockroom.schemas.auth import UserCreate
from stockroom.core.config import settings
from stockroom.core.database import utc_now
from stockroom.core.security import hash_password, verify_password, create_access_token
from stockroom.core.exceptions import (
    UnauthorizedError,
    InsufficientPermissionsError,
    ValidationError,
    EmailInUseError,
    NotFoundError,
)

logger = logging.getLogger("stockroom.business")
security_logger = logging.getLogger("stockroom.security")

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Service for authentication and user management operations"""

    def __init__(self, db: Session):
        self.db = db

    # User lookups

    def get_users(self) -> List[User]:
        """All accounts, newest first"""
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    # Authentication

    def authenticate_user(self, email: str, password: str) -> User:
        """
        Verify credentials

        Raises UnauthorizedError with an identical message whether the
        email is unknown or the password is wrong.
        """
        user = self.get_user_by_email(email)
        if not user:
            security_logger.warning(f"Failed login for {email}: unknown email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            security_logger.warning(f"Failed login for {email}: incorrect password")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        return user

    def create_user_session(self, user: User) -> Dict[str, Any]:
        """Issue a bearer token for an authenticated user"""
        token = create_access_token(data={"sub": user.id, "email": user.email})
        return {
            "token": token,
            "user": {
                "id": user.id,
                "email": user.email,
                "name": user.name,
                "role": user.role,
            },
        }

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.authenticate_user(email, password)
        security_logger.info(f"Login: {user.email}")
        return self.create_user_session(user)

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """Replace the stored hash after re-verifying the current password"""
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")
        self._check_password_policy(new_password)

        user.password_hash = hash_password(new_password)
        self.db.commit()

        security_logger.info(f"Password changed: {user.email}")

    def reset_password(self, email: str, new_password: str) -> User:
        """Set a new password without the old one (operator tooling)"""
        self._check_password_policy(new_password)
        user = self.get_user_by_email(email)
        if not user:
            raise NotFoundError(f"User not found: {email}")

        user.password_hash = hash_password(new_password)
        self.db.commit()

        security_logger.info(f"Password reset: {email}")
        return user

    # Provisioning

    def create_user(self, user_data: UserCreate, created_by: Optional[User] = None) -> User:
        """Create new account; email must not be registered yet"""
        if self.get_user_by_email(user_data.email):
            raise EmailInUseError("Email already registered")

        db_user = User(
            email=user_data.email,
            name=user_data.name,
            password_hash=hash_password(user_data.password),
            role=user_data.role.value,
            created_at=utc_now(),
        )

        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)

        actor = created_by.email if created_by else "system"
        logger.info(f"User created: {db_user.email} ({db_user.role}) by {actor}")
        return db_user

    def require_admin(self, user_id: str) -> User:
        """
        Load the account fresh and require the admin role

        The role claim is never taken from the token.
        """
        user = self.get_user_by_id(user_id)
        if not user:
            raise UnauthorizedError("Unauthorized")
        if not user.is_admin:
            raise InsufficientPermissionsError("Admin only")
        return user

    @staticmethod
    def _check_password_policy(password: str) -> None:
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )
