"""Database package: profile, check-in and contact models plus session helpers."""

from .database import (
    WriteSessionLocal,
    ReadSessionLocal,
    init_db,
    get_write_session,
    get_read_session,
)
from . import models
from .models import Base, Profile, CheckIn, ContactSubmission

__all__ = [
    "WriteSessionLocal",
    "ReadSessionLocal",
    "init_db",
    "get_write_session",
    "get_read_session",
    "models",
    "Base",
    "Profile",
    "CheckIn",
    "ContactSubmission",
]
