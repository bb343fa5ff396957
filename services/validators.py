"""Field validation for every form the service accepts.

The same rules back the submission handlers and the `/api/validate`
endpoint the pages call while the user is typing, so the two can never
disagree. All functions are pure: they take the raw strings the browser
posted and return error messages, never raising.

Form validators return a mapping of field name to a non-empty list of
messages. A field that passes is absent from the mapping.
"""

import math
import re
from typing import Callable, Dict, List, Mapping, Optional

from schemas.form_schema import CalorieGoalStatus

FieldErrors = Dict[str, List[str]]
Fields = Mapping[str, Optional[str]]

PROFILE_CODE_PATTERN = re.compile(r"[0-9]{4}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9\s\-+()]+")
NON_DIGITS = re.compile(r"[^0-9]")

MIN_PHONE_DIGITS = 10
CRAVINGS_MIN, CRAVINGS_MAX = 1, 5
CALORIE_GOAL_VALUES = frozenset(status.value for status in CalorieGoalStatus)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_measurement(value: Optional[str]) -> Optional[float]:
    """Parse a weight or height; None unless it is a finite number above zero."""
    if is_blank(value):
        return None
    text = value.strip()
    if not text.isascii():
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def parse_cravings_scale(value: Optional[str]) -> Optional[int]:
    """Parse the craving scale; None unless it is an integer in [1, 5]."""
    if is_blank(value):
        return None
    text = value.strip()
    if not text.isascii():
        return None
    try:
        scale = int(text)
    except ValueError:
        return None
    if scale < CRAVINGS_MIN or scale > CRAVINGS_MAX:
        return None
    return scale


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value.strip()) is not None


def is_valid_phone(value: str) -> bool:
    """Digits, spaces, hyphens, parentheses and plus only, with at least 10 digits."""
    value = value.strip()
    if PHONE_PATTERN.fullmatch(value) is None:
        return False
    return len(NON_DIGITS.sub("", value)) >= MIN_PHONE_DIGITS


# Field rules. Each returns the messages for one field, first failure only.

def check_text_length(value: Optional[str], label: str, min_length: int, max_length: int) -> List[str]:
    if is_blank(value):
        return [f"{label} is required"]
    length = len(value.strip())
    if length < min_length:
        return [f"{label} must be at least {min_length} characters"]
    if length > max_length:
        return [f"{label} must be at most {max_length} characters"]
    return []


def check_profile_code(value: Optional[str]) -> List[str]:
    if is_blank(value):
        return ["Profile code is required"]
    if PROFILE_CODE_PATTERN.fullmatch(value.strip()) is None:
        return ["Profile code must be a 4-digit number"]
    return []


def check_measurement(value: Optional[str], label: str, kind: str) -> List[str]:
    """Check a weight or height field.

    Args:
        value: Raw input.
        label: Field label used in the "is required" message.
        kind: Noun used in the "Please enter a valid ..." message.
    """
    if is_blank(value):
        return [f"{label} is required"]
    if parse_measurement(value) is None:
        return [f"Please enter a valid {kind}"]
    return []


def check_cravings_scale(value: Optional[str]) -> List[str]:
    if is_blank(value):
        return ["Cravings scale is required"]
    if parse_cravings_scale(value) is None:
        return [f"Cravings scale must be between {CRAVINGS_MIN} and {CRAVINGS_MAX}"]
    return []


def check_calorie_goal_status(value: Optional[str]) -> List[str]:
    if is_blank(value):
        return ["Calorie goal status is required"]
    if value.strip() not in CALORIE_GOAL_VALUES:
        return ["Invalid calorie goal status"]
    return []


def check_email(value: Optional[str]) -> List[str]:
    if is_blank(value):
        return ["Email is required"]
    if not is_valid_email(value):
        return ["Please enter a valid email address"]
    return []


def check_phone(value: Optional[str]) -> List[str]:
    if is_blank(value):
        return ["Phone number is required"]
    if not is_valid_phone(value):
        return ["Please enter a valid phone number"]
    return []


def _collect(results: Mapping[str, List[str]]) -> FieldErrors:
    return {field: messages for field, messages in results.items() if messages}


# Form validators

def validate_profile_form(fields: Fields) -> FieldErrors:
    return _collect({
        "firstName": check_text_length(fields.get("firstName"), "First name", 2, 50),
        "lastName": check_text_length(fields.get("lastName"), "Last name", 2, 50),
        "email": check_email(fields.get("email")),
        "phone": check_phone(fields.get("phone")),
        "currentHeight": check_measurement(fields.get("currentHeight"), "Current height", "height"),
        "currentWeight": check_measurement(fields.get("currentWeight"), "Current weight", "weight"),
        "goalWeight": check_measurement(fields.get("goalWeight"), "Goal weight", "weight"),
    })


def validate_check_in_form(fields: Fields) -> FieldErrors:
    return _collect({
        "profileCode": check_profile_code(fields.get("profileCode")),
        "currentWeight": check_measurement(fields.get("currentWeight"), "Current weight", "weight"),
        "cravingsScale": check_cravings_scale(fields.get("cravingsScale")),
        "calorieGoalMet": check_calorie_goal_status(fields.get("calorieGoalMet")),
    })


def validate_contact_form(fields: Fields) -> FieldErrors:
    return _collect({
        "name": check_text_length(fields.get("name"), "Name", 2, 100),
        "email": check_email(fields.get("email")),
        "message": check_text_length(fields.get("message"), "Message", 10, 1000),
    })


def validate_lookup_form(fields: Fields) -> FieldErrors:
    return _collect({"email": check_email(fields.get("email"))})


FORM_VALIDATORS: Dict[str, Callable[[Fields], FieldErrors]] = {
    "profile": validate_profile_form,
    "check-in": validate_check_in_form,
    "contact": validate_contact_form,
    "user-lookup": validate_lookup_form,
}


__all__ = [
    "FORM_VALIDATORS",
    "FieldErrors",
    "parse_cravings_scale",
    "parse_measurement",
    "validate_check_in_form",
    "validate_contact_form",
    "validate_lookup_form",
    "validate_profile_form",
]
