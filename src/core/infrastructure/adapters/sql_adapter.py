"""Thin adapter owning the SQLAlchemy engine and sessions."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import Session, sessionmaker

from core.config import Settings, settings as default_settings
from core.utils.constants import (
    ENV_APP_DB_HOST,
    ENV_APP_DB_NAME,
    ENV_APP_DB_PASSWORD,
    ENV_APP_DB_URL,
    ENV_APP_DB_USER,
)

_engine: Engine | None = None
_engine_lock = threading.Lock()


def database_url(settings: Settings | None = None) -> str | URL:
    """Build the connection URL from settings.

    ``APP_DB_URL`` wins when set; otherwise a MySQL URL is assembled from
    the host, user, password and database name settings.
    """
    current = settings or default_settings

    explicit = current.get(ENV_APP_DB_URL)
    if explicit:
        return explicit

    return URL.create(
        "mysql+pymysql",
        username=current.get(ENV_APP_DB_USER),
        password=current.get(ENV_APP_DB_PASSWORD),
        host=current.get(ENV_APP_DB_HOST),
        database=current.get(ENV_APP_DB_NAME),
    )


def shared_engine() -> Engine:
    """Process-wide engine, created on first use after bootstrap."""
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                default_settings.bootstrap()
                _engine = create_engine(database_url(), pool_pre_ping=True)
    return _engine


def configure_engine(engine: Engine | None) -> None:
    """Replace the shared engine (tests and local tooling)."""
    global _engine

    with _engine_lock:
        _engine = engine


class SqlAdapter:
    """Low-level session handling (mechanical, no error translation).

    This adapter:
    - Opens one session per unit of work
    - Commits on success, rolls back on any exception
    - Does NOT translate SQLAlchemy errors (lets them bubble up)
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or shared_engine()
        self._sessions = sessionmaker(bind=self._engine, expire_on_commit=False)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
