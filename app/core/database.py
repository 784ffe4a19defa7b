# =====================================================
# FILE: app/core/database.py
# Database Connection and Session Management
# =====================================================

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from typing import Generator
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, applying the SQLite options the app needs"""
    engine_args = {"echo": echo}

    if database_url.startswith("sqlite"):
        # Sessions are used across FastAPI's threadpool workers
        engine_args["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            engine_args["poolclass"] = StaticPool
    else:
        engine_args["pool_pre_ping"] = settings.DB_POOL_PRE_PING

    return create_engine(database_url, **engine_args)


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_session():
    """
    Context manager for database operations outside of FastAPI requests
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as e:
        logger.error(f"Database operation failed: {str(e)}")
        session.rollback()
        raise
    finally:
        session.close()


def check_connection(bind: Engine = None) -> bool:
    """
    Test database connection
    """
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection test failed: {str(e)}")
        return False


def init_db(bind: Engine = None):
    """
    Create all tables that do not exist yet
    """
    # Register every model with Base.metadata
    import app.models  # noqa: F401

    target = bind or engine
    try:
        Base.metadata.create_all(bind=target, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create database tables: {str(e)}")
        raise


def drop_all_tables(bind: Engine = None):
    """
    Drop all tables from the database
    WARNING: This will delete all data!
    """
    import app.models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)
    logger.info("All database tables dropped")
