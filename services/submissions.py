"""Submission handlers for the four forms.

Each handler validates the raw fields, performs one persistence operation
through a `FormStore`, and maps the outcome to a `FormState` plus the HTTP
status the router should answer with. Persistence failures never leak
details to the caller: they are logged and replaced by a generic `_form`
message.
"""

import uuid
from typing import NamedTuple

from core.exceptions import CodeGenerationError, DatabaseError, UniqueViolationError
from core.logger import get_logger
from core.repository import FormStore
from schemas.form_schema import FormState
from services.profile_codes import ProfileCodeGenerator, max_attempts_from_env
from services.validators import (
    FieldErrors,
    Fields,
    parse_cravings_scale,
    parse_measurement,
    validate_check_in_form,
    validate_contact_form,
    validate_lookup_form,
    validate_profile_form,
)

logger = get_logger("services.submissions")

FORM_ERROR_KEY = "_form"

FORM_SUBMIT_FAILED = "Failed to submit form. Please try again."
CHECK_IN_SUBMIT_FAILED = "Failed to submit check-in. Please try again."
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."
CODE_GENERATION_FAILED = "Unable to generate a unique profile code. Please try again later."
EMAIL_TAKEN = "A profile with this email address already exists"
PROFILE_CODE_NOT_FOUND = "Profile code not found. Please check your code and try again."
EMAIL_NOT_FOUND = "No profile found with this email address. Please check your email and try again."


class Submission(NamedTuple):
    """A handler outcome: the body to render and the HTTP status to send."""

    state: FormState
    status_code: int


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _invalid(errors: FieldErrors) -> Submission:
    return Submission(FormState(success=False, errors=errors), 422)


def _field_error(field: str, message: str, status_code: int) -> Submission:
    return Submission(FormState(success=False, errors={field: [message]}), status_code)


def _form_error(message: str) -> Submission:
    return _field_error(FORM_ERROR_KEY, message, 503)


class FormSubmissionService:
    """Validate-then-persist orchestration for every form.

    Args:
        code_generator: Source of unused profile codes.
    """

    def __init__(self, code_generator: ProfileCodeGenerator):
        self.code_generator = code_generator

    def submit_profile(self, fields: Fields, store: FormStore) -> Submission:
        """Create a profile and hand back its new 4-digit code.

        A code that loses a race to a concurrent insert is treated like any
        other collision and the next candidate is tried.
        """
        errors = validate_profile_form(fields)
        if errors:
            return _invalid(errors)

        values = {
            "user_id": str(uuid.uuid4()),
            "first_name": fields["firstName"].strip(),
            "last_name": fields["lastName"].strip(),
            "email": normalize_email(fields["email"]),
            "phone": fields["phone"].strip(),
            "current_height": parse_measurement(fields["currentHeight"]),
            "current_weight": parse_measurement(fields["currentWeight"]),
            "goal_weight": parse_measurement(fields["goalWeight"]),
        }

        def is_taken(code: str) -> bool:
            return store.find_profile_by_code(code) is not None

        try:
            for code in self.code_generator.candidates(is_taken):
                try:
                    store.insert_profile(profile_code=code, **values)
                except UniqueViolationError as exc:
                    if exc.field == "profile_code":
                        logger.info("Profile code %s claimed concurrently, drawing again", code)
                        continue
                    if exc.field == "email":
                        return _field_error("email", EMAIL_TAKEN, 409)
                    raise
                logger.info("Profile created with code %s", code)
                return Submission(
                    FormState(
                        success=True,
                        message=(
                            f"Profile created successfully! Your profile code is: {code}. "
                            "Please save this code for future reference."
                        ),
                        profile_code=code,
                    ),
                    201,
                )
        except CodeGenerationError as exc:
            logger.error("Profile creation failed: %s after %s attempts", exc.message, exc.attempts)
            return _form_error(CODE_GENERATION_FAILED)
        except DatabaseError as exc:
            logger.error("Profile creation failed: %s (%s)", exc.message, exc.details)
            return _form_error(FORM_SUBMIT_FAILED)

    def submit_check_in(self, fields: Fields, store: FormStore) -> Submission:
        errors = validate_check_in_form(fields)
        if errors:
            return _invalid(errors)

        code = fields["profileCode"].strip()
        try:
            profile = store.find_profile_by_code(code)
        except DatabaseError as exc:
            logger.error("Check-in profile lookup failed: %s", exc.message)
            return _form_error(UNEXPECTED_ERROR)
        if profile is None:
            return _field_error("profileCode", PROFILE_CODE_NOT_FOUND, 404)

        try:
            store.insert_check_in(
                profile_id=profile.id,
                current_weight=parse_measurement(fields["currentWeight"]),
                cravings_scale=parse_cravings_scale(fields["cravingsScale"]),
                calorie_goal_met=fields["calorieGoalMet"].strip(),
            )
        except DatabaseError as exc:
            logger.error("Check-in insert failed: %s (%s)", exc.message, exc.details)
            return _form_error(CHECK_IN_SUBMIT_FAILED)

        logger.info("Check-in recorded for profile %s", profile.id)
        return Submission(
            FormState(success=True, message="Check-in submitted successfully! Keep up the great work!"),
            201,
        )

    def submit_contact(self, fields: Fields, store: FormStore) -> Submission:
        errors = validate_contact_form(fields)
        if errors:
            return _invalid(errors)

        try:
            store.insert_contact(
                name=fields["name"].strip(),
                email=fields["email"].strip(),
                message=fields["message"].strip(),
            )
        except DatabaseError as exc:
            logger.error("Contact insert failed: %s (%s)", exc.message, exc.details)
            return _form_error(FORM_SUBMIT_FAILED)

        return Submission(
            FormState(success=True, message="Thank you for your message! We will get back to you soon."),
            201,
        )

    def lookup_profile(self, fields: Fields, store: FormStore) -> Submission:
        """Find a profile by email and return its code and display name.

        "No such profile" is a correctable field error; a backend that
        cannot answer is a form-level failure.
        """
        errors = validate_lookup_form(fields)
        if errors:
            return _invalid(errors)

        try:
            profile = store.find_profile_by_email(normalize_email(fields["email"]))
        except DatabaseError as exc:
            logger.error("Profile lookup failed: %s", exc.message)
            return _form_error(UNEXPECTED_ERROR)
        if profile is None:
            return _field_error("email", EMAIL_NOT_FOUND, 404)

        display_name = f"{profile.first_name} {profile.last_name}"
        return Submission(
            FormState(
                success=True,
                message=f"Found profile for {display_name}",
                profile_code=profile.profile_code,
                display_name=display_name,
            ),
            200,
        )


# export singleton
form_service = FormSubmissionService(ProfileCodeGenerator(max_attempts=max_attempts_from_env()))
__all__ = ["FormSubmissionService", "Submission", "form_service"]
