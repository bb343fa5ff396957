"""Repository layer for the forms service.

`FormStore` is the small capability the submission handlers depend on:
point lookups of a profile and single-row inserts. `FormRepository`
implements it over a SQLAlchemy session and translates driver failures
into `core.exceptions` so handlers never see SQLAlchemy types.
"""

import re

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import TypeVar, Generic, Type, Optional, Any, Protocol
from database.models import Base, Profile, CheckIn, ContactSubmission
from core.exceptions import DatabaseError, UniqueViolationError
from core.logger import get_logger

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)

# Unique constraints on profiles, by name (PostgreSQL, MySQL) or by the
# `table.column` form SQLite reports, mapped to the conflicting field.
UNIQUE_CONSTRAINTS = re.compile(r"uq_profiles_(profile_code|email)|profiles\.(profile_code|email)")


class BaseRepository(Generic[T]):
    """Generic repository for a single model.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        return save(self.session, obj)

    def find_one_by(self, **filters: Any) -> Optional[T]:
        """Return the first row matching all equality filters, or None.

        Args:
            **filters: Column name / value pairs.

        Returns:
            Model instance or None if no row matches.
        """
        return self.session.query(self.model).filter_by(**filters).first()

    def count(self) -> int:
        return self.session.query(self.model).count()


class FormStore(Protocol):
    """Persistence capability used by the submission handlers.

    Lookups return None when no row matches and raise `DatabaseError` when
    the backend cannot answer. Inserts raise `UniqueViolationError` on a
    uniqueness conflict and `DatabaseError` on any other failure.
    """

    def find_profile_by_code(self, code: str) -> Optional[Any]: ...

    def find_profile_by_email(self, email: str) -> Optional[Any]: ...

    def insert_profile(self, **values: Any) -> Any: ...

    def insert_check_in(self, **values: Any) -> Any: ...

    def insert_contact(self, **values: Any) -> Any: ...


class FormRepository:
    """`FormStore` backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session
        self.profiles = BaseRepository(Profile, session)
        self.check_ins = BaseRepository(CheckIn, session)
        self.contacts = BaseRepository(ContactSubmission, session)

    def find_profile_by_code(self, code: str) -> Optional[Profile]:
        return self._lookup(self.profiles, "find_profile_by_code", profile_code=code)

    def find_profile_by_email(self, email: str) -> Optional[Profile]:
        """Look up a profile by email; callers pass the normalized (lowercased) address."""
        return self._lookup(self.profiles, "find_profile_by_email", email=email)

    def insert_profile(self, **values: Any) -> Profile:
        return self._insert(self.profiles, Profile(**values), "insert_profile")

    def insert_check_in(self, **values: Any) -> CheckIn:
        return self._insert(self.check_ins, CheckIn(**values), "insert_check_in")

    def insert_contact(self, **values: Any) -> ContactSubmission:
        return self._insert(self.contacts, ContactSubmission(**values), "insert_contact")

    def _lookup(self, repo: BaseRepository, operation: str, **filters: Any):
        try:
            return repo.find_one_by(**filters)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("%s failed: %s", operation, exc, exc_info=True)
            raise DatabaseError("Database lookup failed", operation=operation) from exc

    def _insert(self, repo: BaseRepository, obj, operation: str):
        try:
            return repo.create(obj)
        except IntegrityError as exc:
            self.session.rollback()
            field = conflicting_field(exc)
            if field is None:
                logger.error("%s violated a constraint: %s", operation, exc.orig)
                raise DatabaseError("Database constraint violated", operation=operation) from exc
            logger.warning("%s conflicts on %s", operation, field)
            raise UniqueViolationError(
                f"Duplicate value for {field}", operation=operation, field=field
            ) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("%s failed: %s", operation, exc, exc_info=True)
            raise DatabaseError("Database write failed", operation=operation) from exc


def conflicting_field(exc: IntegrityError) -> Optional[str]:
    """Name the unique column an IntegrityError refers to, if it is a uniqueness conflict.

    Uses the constraint name psycopg exposes on `diag` when present. Otherwise
    it reads the first line of the driver message, where the constraint
    (PostgreSQL, MySQL) or column (SQLite) is named after the offending
    value, so the last match wins. Later lines such as PostgreSQL's DETAIL
    echo the value itself and are ignored.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        match = UNIQUE_CONSTRAINTS.fullmatch(constraint.lower())
        return (match.group(1) or match.group(2)) if match else None

    lines = str(exc.orig).lower().splitlines()
    text = lines[0] if lines else ""
    if "unique" not in text and "duplicate" not in text:
        return None
    matches = list(UNIQUE_CONSTRAINTS.finditer(text))
    if not matches:
        return None
    last = matches[-1]
    return last.group(1) or last.group(2)


def save(session: Session, obj: Base) -> Base:
    """Add, commit and refresh an object.

    Args:
        session: Database session.
        obj: Model instance to persist.

    Returns:
        The persisted object with refreshed attributes.
    """
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj
