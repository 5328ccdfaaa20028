from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from showcase.core.logging import get_logger
from showcase.core.settings import get_settings

logger = get_logger(__name__)

Base = declarative_base()

# Global engine instance
_engine = None
_SessionLocal = None


def init_db():
    """Initialize database engine, session factory and tables."""
    global _engine, _SessionLocal

    if _engine is not None:
        return

    settings = get_settings()

    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    _engine = create_engine(
        settings.database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        echo=settings.debug,  # Log SQL in debug mode
    )
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

    # Register models before creating tables
    from showcase.models import schema  # noqa: F401

    Base.metadata.create_all(bind=_engine)
    logger.info("Database initialized successfully")


def get_engine():
    """Get the database engine, initializing if necessary."""
    if _engine is None:
        init_db()
    return _engine


def get_session_factory():
    """Get the session factory, initializing if necessary."""
    if _SessionLocal is None:
        init_db()
    return _SessionLocal


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db() as db:
            rows = db.query(LessonRow).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
