"""Pydantic schema package for form payloads and results."""

from .form_schema import (
    CalorieGoalStatus,
    CheckInForm,
    ContactForm,
    FieldErrorsResponse,
    FormState,
    ProfileForm,
    UserLookupForm,
)

__all__ = [
    "CalorieGoalStatus",
    "CheckInForm",
    "ContactForm",
    "FieldErrorsResponse",
    "FormState",
    "ProfileForm",
    "UserLookupForm",
]
