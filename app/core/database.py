import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from . import messages
from .config import settings
from .errors import DomainValidationError, StorageUnavailableError


logger = logging.getLogger("app.database")


def get_database_url() -> str:
    """Get database URL with SSL support for production databases."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    base_url = (
        f"postgresql+psycopg2://{settings.POSTGRES_USER}:"
        f"{settings.POSTGRES_PASSWORD}@{settings.POSTGRES_HOST}:"
        f"{settings.POSTGRES_PORT}/{settings.POSTGRES_DB}"
    )

    # Hosted PostgreSQL requires SSL connections
    if settings.ENVIRONMENT.lower() in ("production", "staging"):
        base_url += "?sslmode=require"

    return base_url


def _create_engine(url: str):
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            # Profiles and prompts cascade when their identity row is removed
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine
    return create_engine(url, pool_pre_ping=True)


engine = _create_engine(get_database_url())
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_call(db: Session, operation: str) -> Iterator[None]:
    """Translate backend failures into domain errors for one storage operation."""
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Constraint violation during %s: %s", operation, exc.orig)
        raise DomainValidationError(messages.DB_CONSTRAINT_VIOLATION) from exc
    except (OperationalError, InterfaceError) as exc:
        db.rollback()
        logger.error("Storage unavailable during %s: %s", operation, exc)
        raise StorageUnavailableError() from exc
    except DBAPIError as exc:
        db.rollback()
        if not exc.connection_invalidated:
            raise
        logger.error("Connection lost during %s: %s", operation, exc)
        raise StorageUnavailableError() from exc
