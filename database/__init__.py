"""
Database Package Initialization.

============================================================
PERSISTENCE LAYER
============================================================

Engine/session helpers and ORM models for the metrics
dashboard tables. Every failure raises a hard exception and
every transaction is explicit with commit/rollback.

============================================================
"""

# Core engine and session management
from .engine import (
    # Declarative base
    Base,

    # Configuration and engine creation
    DatabaseConfig,
    create_database_engine,
    create_session_factory,

    # Session management
    transaction_scope,

    # Database initialization
    verify_database_connection,
    verify_required_tables,
    create_all_tables,
    REQUIRED_TABLES,

    # Exceptions
    DatabasePersistenceError,
    DatabaseConnectionError,
    DatabaseInitializationError,
    DatabaseConfigurationError,
)

# ORM Models
from .models import (
    ContractIndex,
    TransactionDetail,
    ProjectMetricsRealtime,
)


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
    "ContractIndex",
    "TransactionDetail",
    "ProjectMetricsRealtime",
]
