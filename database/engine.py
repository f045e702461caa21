"""
Database Persistence Layer - Core Engine.

============================================================
PURPOSE
============================================================
Engine, session and transaction helpers for the PostgreSQL
tables behind the metrics dashboard.

- Configuration comes from the environment (.env supported)
  into an explicit DatabaseConfig
- The engine and session factory are built by the caller at
  process start and passed down; nothing is pooled globally
- Persistence failures raise, they are never swallowed

============================================================
ENVIRONMENT
============================================================
DATABASE_URL_SYNC   preferred, sync SQLAlchemy URL
DATABASE_URL        accepted; postgresql+asyncpg is converted
DB_HOST / DB_PORT / DB_USER / DB_PASS / DB_NAME
                    used when no URL is set

============================================================
"""

import os
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Generator, Iterable, Optional

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, URL
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# =============================================================
# DECLARATIVE BASE
# =============================================================

Base = declarative_base()


# =============================================================
# CUSTOM EXCEPTIONS
# =============================================================


class DatabasePersistenceError(Exception):
    """Raised when database persistence fails."""
    pass


class DatabaseConnectionError(DatabasePersistenceError):
    """Raised when database connection fails."""
    pass


class DatabaseInitializationError(DatabasePersistenceError):
    """Raised when database initialization fails."""
    pass


class DatabaseConfigurationError(DatabasePersistenceError):
    """Raised when no usable database URL can be built."""
    pass


# =============================================================
# CONFIGURATION
# =============================================================


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the metrics database."""

    url: str
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 1800
    echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "DatabaseConfig":
        """
        Build configuration from environment variables.

        Raises:
            DatabaseConfigurationError: if neither a URL nor the
                DB_* variables are present
        """
        env = os.environ if environ is None else environ

        url = env.get("DATABASE_URL_SYNC")
        if not url:
            url = env.get("DATABASE_URL")
            if url and url.startswith("postgresql+asyncpg"):
                # Convert async URL to sync
                url = url.replace("postgresql+asyncpg", "postgresql", 1)

        if not url and env.get("DB_HOST") and env.get("DB_NAME"):
            url = URL.create(
                "postgresql",
                username=env.get("DB_USER"),
                password=env.get("DB_PASS"),
                host=env.get("DB_HOST"),
                port=int(env.get("DB_PORT", "5432")),
                database=env.get("DB_NAME"),
            ).render_as_string(hide_password=False)

        if not url:
            raise DatabaseConfigurationError(
                "DATABASE_URL (or DB_HOST/DB_NAME) must be set"
            )

        return cls(
            url=url,
            pool_size=int(env.get("DB_POOL_SIZE", "10")),
            max_overflow=int(env.get("DB_MAX_OVERFLOW", "20")),
            echo=env.get("DB_ECHO", "false").lower() == "true",
        )

    @property
    def safe_url(self) -> str:
        """URL without credentials, for logging."""
        return self.url.split("@")[-1]


# =============================================================
# DATABASE ENGINE
# =============================================================


def create_database_engine(config: DatabaseConfig) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    Args:
        config: Connection settings

    Returns:
        SQLAlchemy Engine
    """
    logger.info(f"Creating database engine for: {config.safe_url}")

    engine = create_engine(
        config.url,
        poolclass=QueuePool,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        pool_recycle=config.pool_recycle,
        echo=config.echo,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        logger.debug("Database connection established")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to an engine."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


# =============================================================
# SESSION MANAGEMENT
# =============================================================


@contextmanager
def transaction_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for explicit transaction boundaries.

    Commits only if no exception occurs.
    Rolls back on ANY exception.

    Usage:
        with transaction_scope(factory) as session:
            repository = ProjectMetricsRepository(session)
            repository.upsert_metrics(scored)
            # Commits automatically at end
    """
    session = session_factory()
    try:
        yield session
        session.commit()
        logger.debug("Database transaction committed successfully")
    except SQLAlchemyError as e:
        logger.error(f"Database transaction failed, rolling back: {e}")
        session.rollback()
        raise DatabasePersistenceError(f"Transaction failed: {e}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# =============================================================
# DATABASE INITIALIZATION
# =============================================================


REQUIRED_TABLES = [
    "bi_contract_index",
    "mc_transaction_details",
    "project_metrics_realtime",
]


def verify_database_connection(engine: Engine) -> bool:
    """
    Verify database connection is working.

    Raises:
        DatabaseConnectionError if connection fails
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
            logger.info("Database connection verified successfully")
            return True
    except OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        raise DatabaseConnectionError(f"Cannot connect to database: {e}") from e


def verify_required_tables(engine: Engine) -> None:
    """
    Check that every table in REQUIRED_TABLES exists.

    Raises:
        DatabaseInitializationError listing the missing tables
    """
    try:
        existing = set(inspect(engine).get_table_names())
    except SQLAlchemyError as e:
        raise DatabaseConnectionError(f"Cannot inspect database: {e}") from e

    missing = [name for name in REQUIRED_TABLES if name not in existing]
    if missing:
        logger.error(f"Missing tables: {missing}")
        raise DatabaseInitializationError(f"Missing required tables: {', '.join(missing)}")

    logger.info(f"All {len(REQUIRED_TABLES)} required tables present")


def create_all_tables(engine: Engine, tables: Optional[Iterable[str]] = None) -> None:
    """
    Create ORM tables that do not exist yet.

    Raises:
        DatabaseInitializationError if table creation fails
    """
    from . import models  # noqa: F401

    selected = None
    if tables is not None:
        wanted = set(tables)
        selected = [t for name, t in Base.metadata.tables.items() if name in wanted]

    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine, tables=selected)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create database tables: {e}")
        raise DatabaseInitializationError(f"Table creation failed: {e}") from e


__all__ = [
    "Base",
    "DatabaseConfig",
    "create_database_engine",
    "create_session_factory",
    "transaction_scope",
    "verify_database_connection",
    "verify_required_tables",
    "create_all_tables",
    "REQUIRED_TABLES",
    "DatabasePersistenceError",
    "DatabaseConnectionError",
    "DatabaseInitializationError",
    "DatabaseConfigurationError",
]
