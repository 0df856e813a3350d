from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from immoauto.core.config import get_settings


class Base(DeclarativeBase):
    pass


def _engine_kwargs(uri: str) -> dict:
    if not uri.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory SQLite lives in a single connection; share it across sessions.
    if uri in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


_uri = get_settings().SQLALCHEMY_DATABASE_URI
engine = create_engine(_uri, **_engine_kwargs(_uri))
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
