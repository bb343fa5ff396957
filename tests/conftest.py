"""Shared fixtures: an in-memory SQLite database and an in-memory form store."""

import random
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.exceptions import DatabaseError, UniqueViolationError
from core.repository import FormRepository
from database import init_db
from services.profile_codes import ProfileCodeGenerator
from services.submissions import FormSubmissionService


@pytest.fixture
def engine():
    """A fresh in-memory database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session):
    return FormRepository(db_session)


class FakeFormStore:
    """In-memory stand-in for `FormRepository`.

    Attributes:
        failing: Operation names that raise `DatabaseError`.
        all_codes_taken: Report every profile code as already in use.
        code_races: Number of upcoming profile inserts that lose a race on
            their code (the code is then recorded as taken).
    """

    def __init__(self):
        self.profiles = []
        self.check_ins = []
        self.contacts = []
        self.code_lookups = []
        self.profile_inserts = []
        self.failing = set()
        self.all_codes_taken = False
        self.code_races = 0
        self._claimed = set()

    def _maybe_fail(self, operation):
        if operation in self.failing:
            raise DatabaseError("connection refused", operation=operation)

    def add_profile(self, **values):
        profile = SimpleNamespace(id=len(self.profiles) + 1, **values)
        self.profiles.append(profile)
        return profile

    def find_profile_by_code(self, code):
        self._maybe_fail("find_profile_by_code")
        self.code_lookups.append(code)
        if self.all_codes_taken or code in self._claimed:
            return SimpleNamespace(id=0, profile_code=code)
        return next((p for p in self.profiles if p.profile_code == code), None)

    def find_profile_by_email(self, email):
        self._maybe_fail("find_profile_by_email")
        return next((p for p in self.profiles if p.email == email), None)

    def insert_profile(self, **values):
        self._maybe_fail("insert_profile")
        self.profile_inserts.append(values)
        code = values["profile_code"]
        if self.code_races > 0:
            self.code_races -= 1
            self._claimed.add(code)
            raise UniqueViolationError("Duplicate value for profile_code", field="profile_code")
        if any(p.profile_code == code for p in self.profiles):
            raise UniqueViolationError("Duplicate value for profile_code", field="profile_code")
        if any(p.email == values["email"] for p in self.profiles):
            raise UniqueViolationError("Duplicate value for email", field="email")
        return self.add_profile(**values)

    def insert_check_in(self, **values):
        self._maybe_fail("insert_check_in")
        self.check_ins.append(values)
        return SimpleNamespace(id=len(self.check_ins), **values)

    def insert_contact(self, **values):
        self._maybe_fail("insert_contact")
        self.contacts.append(values)
        return SimpleNamespace(id=len(self.contacts), **values)


@pytest.fixture
def store():
    return FakeFormStore()


@pytest.fixture
def service():
    """Submission service with a seeded random source."""
    return FormSubmissionService(ProfileCodeGenerator(rng=random.Random(1234), max_attempts=10))


@pytest.fixture
def profile_fields():
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "Jane.Doe@Example.com",
        "phone": "(555) 123-4567",
        "currentHeight": "165",
        "currentWeight": "72.5",
        "goalWeight": "65",
    }


@pytest.fixture
def check_in_fields():
    return {
        "profileCode": "4821",
        "currentWeight": "71.8",
        "cravingsScale": "3",
        "calorieGoalMet": "yes",
    }
