#!/usr/bin/env python
"""
userapi/database.py

Sets up the async SQLAlchemy engine, session management, and helper functions
for creating tables. Every User row is treated as a document keyed by an
opaque string id that the store assigns on first insert.

Key Features:
- Loads environment variables from .env at project root
- Handles a default SQLite (aiosqlite) file or a custom async DB URL
- Provides get_db() for FastAPI dependency injection
- create_tables() is idempotent and safe to call on every startup
"""

import os
import logging
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 1) Environment Setup
# ------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

dotenv_path = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(dotenv_path=dotenv_path)
logger.debug(f"Loaded .env from: {dotenv_path}")

DATABASE_FILE_ENV = os.getenv("DATABASE_FILE", "userapi/users.db")
DATABASE_FILE = (
    DATABASE_FILE_ENV if os.path.isabs(DATABASE_FILE_ENV)
    else os.path.join(PROJECT_ROOT, DATABASE_FILE_ENV)
)

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite+aiosqlite:///{DATABASE_FILE}")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")
logger.debug(f"DATABASE_URL: {DATABASE_URL}")


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite URL if missing."""
    if not url.startswith("sqlite") or ":memory:" in url:
        return
    db_path = url.split(":///", 1)[-1]
    db_dir = os.path.dirname(db_path)
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir)
        logger.debug(f"Created directory for database: {db_dir}")


# ------------------------------------------------------------------
# 2) SQLAlchemy Engine and Session Setup
# ------------------------------------------------------------------
def build_engine(url: str = DATABASE_URL) -> AsyncEngine:
    """
    Create an async engine for the given URL. SQLite files get their
    directory created up front so the first connection doesn't fail.
    """
    _ensure_sqlite_dir(url)
    return create_async_engine(url, echo=SQL_ECHO)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory used by the app and the tests. expire_on_commit is off
    so entities stay readable after commit (e.g. a just-removed document).
    """
    return async_sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = build_engine()
logger.debug("SQLAlchemy async engine created")

SessionLocal = build_sessionmaker(engine)
logger.debug("SessionLocal factory created")


class Base(DeclarativeBase):
    pass


# ------------------------------------------------------------------
# 3) FastAPI Dependency Injection
# ------------------------------------------------------------------
async def get_db():
    """
    Provides a DB session for FastAPI routes. Yields an AsyncSession and
    closes it after the response is produced.
    """
    async with SessionLocal() as db:
        logger.debug("Created new database session for get_db")
        yield db
    logger.debug("Closed database session in get_db")


# ------------------------------------------------------------------
# 4) Table Initialization
# ------------------------------------------------------------------
async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    Initializes all database tables. This won't delete or overwrite
    existing data.
    """
    logger.debug("Starting create_tables()")

    # Import models to register with Base.metadata
    from userapi.models import user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created or verified.")
