"""Profile API router.

Profile creation hands back the generated 4-digit code; the lookup form
recovers a forgotten code from the profile's email.
"""

from fastapi import APIRouter, Depends, Response
from core.logger import get_logger
from core.repository import FormRepository
from database.deps import get_form_repository, get_read_repository
from schemas import FormState, ProfileForm, UserLookupForm
from services.submissions import form_service

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api", tags=["profiles"])


@router.post("/profile", response_model=FormState, response_model_exclude_none=True, status_code=201)
def submit_profile(payload: ProfileForm, response: Response, store: FormRepository = Depends(get_form_repository)):
    """Create a profile from the profile form.

    Returns:
        `FormState` with `profileCode` on success (201), field errors on
        invalid input (422) or a duplicate email (409), or a `_form` error
        when the profile could not be stored (503).
    """
    logger.info("Profile submission received")
    result = form_service.submit_profile(payload.to_fields(), store)
    response.status_code = result.status_code
    return result.state


@router.post("/user-lookup", response_model=FormState, response_model_exclude_none=True)
def lookup_user(payload: UserLookupForm, response: Response, store: FormRepository = Depends(get_read_repository)):
    """Return the profile code and name registered for an email address."""
    result = form_service.lookup_profile(payload.to_fields(), store)
    response.status_code = result.status_code
    return result.state
