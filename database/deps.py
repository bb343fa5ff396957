"""FastAPI dependencies exposing DB sessions and the form repository.

`get_db_write` / `get_db_read` yield raw sessions; `get_form_repository`
wraps a write session in the `FormRepository` used by submission
handlers. Lookups that never write use `get_read_repository`.
"""

from .database import get_read_session, get_write_session
from core.repository import FormRepository


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()


def get_form_repository():
    for session in get_db_write():
        yield FormRepository(session)


def get_read_repository():
    for session in get_db_read():
        yield FormRepository(session)
