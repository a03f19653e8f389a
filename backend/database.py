"""
TalentFit Database Connection Setup
Provides the sync database engine and session factory.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from backend.core.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine with connection pooling.

    Args:
        settings: Application settings.

    Returns:
        Configured Engine.
    """
    return create_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Build a session factory bound to the engine.

    Usage:
        SessionLocal = create_session_factory(engine)
        with SessionLocal() as session:
            profile = session.get(EmployeeProfile, user_id)
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
