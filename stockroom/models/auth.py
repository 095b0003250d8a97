"""
Account Models
Maps to the users table
"""
from sqlalchemy import Column, String, DateTime, CheckConstraint

from stockroom.core.database import Base, generate_id, utc_now

ROLE_ADMIN = "admin"
ROLE_STAFF = "staff"


class User(Base):
    """System users"""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'staff')", name="role_valid"),
    )

    id = Column(String(24), primary_key=True, default=generate_id)
    email = Column(String(254), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(10), nullable=False, default=ROLE_STAFF)

    created_at = Column(DateTime, default=utc_now, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
