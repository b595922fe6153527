from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import Settings


@lru_cache(maxsize=4)
def session_factory(database_url: str) -> sessionmaker:
    engine = create_engine(database_url, future=True, pool_pre_ping=True)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def open_session(settings: Settings) -> Session:
    """One session per request. Use as a context manager so it is closed on every path."""
    return session_factory(settings.require_database_url())()
