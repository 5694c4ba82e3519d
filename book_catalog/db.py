from collections.abc import Generator
from typing import Any, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

Base = declarative_base()

_engine = None
_SessionLocal = None


def engine_options(url: str) -> dict[str, Any]:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # a private in-memory database per connection would lose the schema
        options["poolclass"] = StaticPool
    return options


def get_engine(url: Optional[str] = None):
    global _engine
    if _engine is None:
        url = url or get_settings().database_url
        _engine = create_engine(url, future=True, **engine_options(url))
    return _engine


def get_session_factory():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False)
    return _SessionLocal


def get_session() -> Generator:
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    # registers the mapped tables on Base.metadata
    from . import entities  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
