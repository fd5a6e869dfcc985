#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from sqlalchemy.orm import Session

from core.app_context import AppContext
from database.database import SessionLocal, get_engine
from pipeline.queue import PostingEventQueue
from .config import get_config


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    get_engine(get_config().database.url)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@lru_cache()
def get_app_context() -> AppContext:
    """Wired services shared by all requests (no DB session inside)."""
    get_engine(get_config().database.url)
    return AppContext.build(get_config())


@lru_cache()
def get_posting_queue() -> PostingEventQueue:
    return PostingEventQueue(get_config().queue)
