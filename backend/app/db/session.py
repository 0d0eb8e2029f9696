"""
Database engine and session management.

The engine is built once per process and shared by every request through
the record store.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from app.core.config import settings
from app.db.base import Base


def build_engine(database_url: str, timeout: float, **kwargs) -> Engine:
    """
    Create an engine that applies a per-call timeout.

    SQLite gets a busy timeout, PostgreSQL a connect and statement timeout.
    Every backend gets a pool checkout timeout.

    Args:
        database_url: SQLAlchemy database URL
        timeout: Timeout in seconds
        **kwargs: Extra arguments passed to create_engine

    Returns:
        The SQLAlchemy engine
    """
    url = make_url(database_url)
    connect_args = kwargs.pop("connect_args", {})

    if url.get_backend_name() == "sqlite":
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", timeout)
    else:
        kwargs.setdefault("pool_timeout", timeout)
        if url.get_backend_name() == "postgresql":
            connect_args.setdefault("connect_timeout", max(1, int(timeout)))
            connect_args.setdefault("options", f"-c statement_timeout={int(timeout * 1000)}")

    return create_engine(url, connect_args=connect_args, **kwargs)


engine = build_engine(settings.DATABASE_URL, settings.STORE_TIMEOUT_SECONDS)


def init_db(bind: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    from app.models import User, Job  # noqa: F401

    Base.metadata.create_all(bind=bind)
