"""Database helpers: engines, session factories and DB initialization.

Reads and writes go through separate session factories. In production set
WRITE_DATABASE_URL and READ_DATABASE_URL to the primary and a replica; by
default both point at the same SQLite file.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base

WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///forms.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)


def _engine_for(url: str):
    """Create an engine, relaxing SQLite's same-thread check for FastAPI workers."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


# Engines
write_engine = _engine_for(WRITE_DATABASE_URL)
read_engine = _engine_for(READ_DATABASE_URL)

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db(engine=None):
    """Create all tables that do not exist yet.

    Args:
        engine: Engine to initialize; defaults to the write engine.
    """
    Base.metadata.create_all(bind=engine or write_engine)


def get_write_session():
    """Yield a write-enabled session, closed when the request completes."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only session, possibly bound to a replica."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
