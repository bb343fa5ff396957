"""Contact form API router."""

from fastapi import APIRouter, Depends, Response
from core.repository import FormRepository
from database.deps import get_form_repository
from schemas import ContactForm, FormState
from services.submissions import form_service

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=FormState, response_model_exclude_none=True, status_code=201)
def submit_contact(payload: ContactForm, response: Response, store: FormRepository = Depends(get_form_repository)):
    result = form_service.submit_contact(payload.to_fields(), store)
    response.status_code = result.status_code
    return result.state
