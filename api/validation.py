"""Field validation endpoint.

Pages call this while the user fills a form, so inline messages come from
the same rules the submission handlers apply. The body is read through the
same payload model as the matching form endpoint, so values are coerced
identically. Nothing is persisted.
"""

from fastapi import APIRouter, Body
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PayloadValidationError
from typing import Any, Dict
from core.exceptions import NotFoundError
from schemas import CheckInForm, ContactForm, FieldErrorsResponse, ProfileForm, UserLookupForm
from services.validators import FORM_VALIDATORS

router = APIRouter(prefix="/api/validate", tags=["validation"])

FORM_PAYLOADS = {
    "profile": ProfileForm,
    "check-in": CheckInForm,
    "contact": ContactForm,
    "user-lookup": UserLookupForm,
}


@router.post("/{form}", response_model=FieldErrorsResponse)
def validate_form(form: str, fields: Dict[str, Any] = Body(...)):
    """Validate a partial or complete form.

    Only fields present in the body are reported, so a page can validate
    the field the user just left without flagging the ones still empty.

    Raises:
        NotFoundError: If `form` is not one of the known forms.
        RequestValidationError: If a value cannot be read as text at all.
    """
    validator = FORM_VALIDATORS.get(form)
    if validator is None:
        raise NotFoundError("Form", form)
    try:
        payload = FORM_PAYLOADS[form].model_validate(fields)
    except PayloadValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    errors = {field: messages for field, messages in validator(payload.to_fields()).items() if field in fields}
    return FieldErrorsResponse(valid=not errors, errors=errors)
