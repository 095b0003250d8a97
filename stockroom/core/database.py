"""
Stockroom Database Configuration
SQLAlchemy engine, session factory and declarative base
"""
from sqlalchemy import create_engine, MetaData, text
from sqlalchemy.orm import declarative_base, sessionmaker
from datetime import datetime, timezone
from typing import Generator
import secrets
import logging

from .config import settings

logger = logging.getLogger("stockroom.database")


def _engine_options(url: str) -> dict:
    """Connection options for the configured backend"""
    if url.startswith("sqlite"):
        # SQLite connections are shared across the request threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_pre_ping": True,
    }


# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    **_engine_options(settings.DATABASE_URL),
)

# Create SessionLocal class for database sessions
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Metadata with naming convention for constraints
Base = declarative_base(metadata=MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}))


def generate_id() -> str:
    """New 24-character hexadecimal record identifier"""
    return secrets.token_hex(12)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db() -> Generator:
    """
    Dependency function to get database session

    Yields:
        Database session
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """
    Initialize database tables

    This function creates all tables defined in models
    """
    try:
        # Import all models to ensure they are registered with Base
        from stockroom.models import auth, inventory  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")

    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def check_db_connection() -> bool:
    """
    Check if database connection is working

    Returns:
        True if connection is successful, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
