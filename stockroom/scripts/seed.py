#!/usr/bin/env python3
"""
Stockroom Seed Script
Creates the tables, a default admin account and the starter categories
"""
import argparse
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from stockroom.core.database import SessionLocal, init_db
from stockroom.core.logging import setup_logging
from stockroom.schemas.auth import Role, UserCreate
from stockroom.services.auth_service import AuthService
from stockroom.services.category_service import CategoryService

logger = logging.getLogger("stockroom.business")

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "Admin"
DEFAULT_CATEGORIES = ["Dairy", "Dry goods", "Beverages", "Produce", "Meat"]


def seed_database(
    db: Session,
    admin_email: str = DEFAULT_ADMIN_EMAIL,
    admin_password: str = DEFAULT_ADMIN_PASSWORD,
    categories: Optional[List[str]] = None,
) -> Dict[str, int]:
    """
    Insert the admin account and starter categories when missing

    Safe to run repeatedly; existing rows are left untouched.
    """
    created = {"users": 0, "categories": 0}

    auth_service = AuthService(db)
    if auth_service.get_user_by_email(admin_email):
        logger.info(f"Admin account already exists: {admin_email}")
    else:
        auth_service.create_user(UserCreate(
            email=admin_email,
            password=admin_password,
            name=DEFAULT_ADMIN_NAME,
            role=Role.ADMIN,
        ))
        created["users"] += 1

    category_service = CategoryService(db)
    existing = {category.name for category in category_service.get_categories()}
    for name in categories if categories is not None else DEFAULT_CATEGORIES:
        if name in existing:
            continue
        category_service.ensure_category(name)
        created["categories"] += 1

    return created


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the stockroom database")
    parser.add_argument("--admin-email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--admin-password", default=DEFAULT_ADMIN_PASSWORD)
    args = parser.parse_args(argv)

    setup_logging(log_to_file=False)
    init_db()

    db = SessionLocal()
    try:
        created = seed_database(db, args.admin_email, args.admin_password)
    finally:
        db.close()

    print(f"Seed complete: {created['users']} user(s), {created['categories']} category(ies) created")
    if created["users"]:
        print(f"Admin login: {args.admin_email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
