"""Check-in API router."""

from fastapi import APIRouter, Depends, Response
from core.logger import get_logger
from core.repository import FormRepository
from database.deps import get_form_repository
from schemas import CheckInForm, FormState
from services.submissions import form_service

logger = get_logger("api.check_ins")
router = APIRouter(prefix="/api", tags=["check-ins"])


@router.post("/check-in", response_model=FormState, response_model_exclude_none=True, status_code=201)
def submit_check_in(payload: CheckInForm, response: Response, store: FormRepository = Depends(get_form_repository)):
    """Record a check-in against the profile identified by its code.

    An unknown code is reported on the `profileCode` field (404) and
    nothing is written.
    """
    logger.info("Check-in submission received")
    result = form_service.submit_check_in(payload.to_fields(), store)
    response.status_code = result.status_code
    return result.state
