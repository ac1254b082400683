import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..settings import settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    # sqlite connections are shared with the threadpool that serves sync routes
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

Base = declarative_base()


def init_db() -> None:
    from . import tables  # noqa: F401  registers the mappings on Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
