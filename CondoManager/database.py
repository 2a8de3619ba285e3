"""
Database configuration and session management.

This module builds the single connection pool used by the application and
provides the session dependency for FastAPI path operations.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from CondoManager.config import DatabaseSettings, load_env
from CondoManager.models import Base

load_env()

settings = DatabaseSettings.from_env()

# Create the SQLAlchemy engine
engine = create_engine(
    settings.sqlalchemy_url(),
    pool_pre_ping=True,
    connect_args=settings.connect_args(),
)

# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency for getting the database session
def get_db():
    """
    Get a database session.

    This function is designed to be used as a FastAPI dependency. It yields a
    database session and ensures it is closed after the request is processed.

    Yields:
        sqlalchemy.orm.Session: A database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "engine", "SessionLocal", "get_db"]
