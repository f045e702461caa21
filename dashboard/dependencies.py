"""
Shared FastAPI dependencies.

The session factory lives on app.state. Tests inject one through
create_app(); otherwise it is built from the environment on first use.
"""
import logging
from typing import Generator

from fastapi import HTTPException, Request
from sqlalchemy.orm import Session, sessionmaker

from database.engine import (
    DatabaseConfig,
    DatabaseConfigurationError,
    create_database_engine,
    create_session_factory,
)

logger = logging.getLogger(__name__)


def get_session_factory(request: Request) -> sessionmaker:
    factory = request.app.state.session_factory
    if factory is None:
        try:
            engine = create_database_engine(DatabaseConfig.from_env())
        except DatabaseConfigurationError as e:
            logger.error(f"Database not configured: {e}")
            raise HTTPException(status_code=503, detail=str(e))
        factory = create_session_factory(engine)
        request.app.state.session_factory = factory
    return factory


def get_db(request: Request) -> Generator[Session, None, None]:
    db = get_session_factory(request)()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
