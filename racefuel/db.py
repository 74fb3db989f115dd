# -*- coding: utf-8 -*-
"""App database: SQLAlchemy engine, session factory and FastAPI helpers.

One engine (and so one connection pool) is built per process by `init_db` and
shared by every request through the `get_db` dependency.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

_engine: Optional[Engine] = None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys = ON;")
    cur.close()


def create_db_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    connect_args = {}
    is_sqlite = url.get_backend_name() == "sqlite"
    if is_sqlite:
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_db(database_url: Optional[str] = None) -> Engine:
    """Build the shared engine (once) and create any missing tables."""
    global _engine
    if _engine is None:
        _engine = create_db_engine(database_url or settings.database_url)
        SessionLocal.configure(bind=_engine)
        logger.info("Database engine ready: %s", _engine.url.render_as_string(hide_password=True))

    from . import db_models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=_engine)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        return init_db()
    return _engine


def dispose_db() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


@contextmanager
def session_scope() -> Iterator[Session]:
    get_engine()
    db = SessionLocal()
    try:
        with transaction(db):
            yield db
    finally:
        db.close()
