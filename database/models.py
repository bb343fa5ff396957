"""SQLAlchemy ORM models for the forms service.

Profiles, check-ins and contact submissions are written once and never
updated. Uniqueness of the profile code and email is enforced here so that
concurrent submissions cannot both claim the same value.
"""

from sqlalchemy import (
    Column, Integer, String, Float, DateTime, ForeignKey, Text,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Profile(Base):
    """A user profile, reachable by its 4-digit code or its email."""

    __tablename__ = "profiles"
    __table_args__ = (
        UniqueConstraint("profile_code", name="uq_profiles_profile_code"),
        UniqueConstraint("email", name="uq_profiles_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), nullable=False)
    profile_code = Column(String(4), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String, nullable=False)  # stored lowercased
    phone = Column(String, nullable=False)
    current_height = Column(Float, nullable=False)
    current_weight = Column(Float, nullable=False)
    goal_weight = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class CheckIn(Base):
    """A periodic self-report tied to a profile."""

    __tablename__ = "check_ins"
    __table_args__ = (
        CheckConstraint("cravings_scale BETWEEN 1 AND 5", name="ck_check_ins_cravings_scale"),
    )

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey('profiles.id'), nullable=False)
    current_weight = Column(Float, nullable=False)
    cravings_scale = Column(Integer, nullable=False)  # 1-5
    calorie_goal_met = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class ContactSubmission(Base):
    __tablename__ = "contact_submissions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
