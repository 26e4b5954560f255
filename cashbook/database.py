"""Database engine and session management."""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from .config import DATABASE_URL
from .errors import CashbookError

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """Build an engine, adjusting connection arguments for SQLite."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, future=True, pool_pre_ping=True)

    # SQLite connections are shared across threads by the MCP runtime.
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, future=True, **kwargs)


def create_session_factory(bind: Engine | str) -> sessionmaker[Session]:
    """Return a session factory bound to an engine or database URL."""
    engine_ = create_db_engine(bind) if isinstance(bind, str) else bind
    return sessionmaker(
        bind=engine_,
        autoflush=False,
        autocommit=False,
        future=True,
        expire_on_commit=False,
    )


engine = create_db_engine(DATABASE_URL)
SessionLocal = create_session_factory(engine)


@contextmanager
def session_scope(session_factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    factory = session_factory or SessionLocal
    session: Session = factory()
    try:
        yield session
        session.commit()
    except CashbookError:
        session.rollback()
        raise
    except Exception as exc:  # noqa: BLE001
        session.rollback()
        logger.exception("Database session failed: %s", exc)
        raise
    finally:
        session.close()


def init_database(bind: Engine | None = None) -> None:
    """Create the database tables."""
    from .models import Base  # noqa: WPS433 - deferred to avoid a circular import

    Base.metadata.create_all(bind=bind or engine)
