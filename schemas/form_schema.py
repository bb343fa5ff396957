"""Schemas for form payloads and the shared form result.

Every field of a form payload is an optional string: the browser posts
whatever the user typed and the validators in `services.validators`
decide what is acceptable. Wire names are camelCase.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class CalorieGoalStatus(str, Enum):
    """Answer to "did you meet your calorie goal?" on a check-in."""

    YES = "yes"
    NO = "no"
    DID_NOT_TRACK = "did_not_track"
    NO_CALORIE_GOAL = "no_calorie_goal"


class FormPayload(BaseModel):
    """Base for raw form submissions."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    def to_fields(self) -> Dict[str, Optional[str]]:
        """Return the submitted values keyed by their wire (camelCase) names."""
        return self.model_dump(by_alias=True)


class ProfileForm(FormPayload):
    first_name: Optional[str] = Field(None, alias="firstName", examples=["Jane"])
    last_name: Optional[str] = Field(None, alias="lastName", examples=["Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    phone: Optional[str] = Field(None, examples=["(555) 123-4567"])
    current_height: Optional[str] = Field(None, alias="currentHeight", examples=["165"], description="Height as typed by the user")
    current_weight: Optional[str] = Field(None, alias="currentWeight", examples=["72.5"])
    goal_weight: Optional[str] = Field(None, alias="goalWeight", examples=["65"])


class CheckInForm(FormPayload):
    profile_code: Optional[str] = Field(None, alias="profileCode", examples=["4821"], description="4-digit profile code")
    current_weight: Optional[str] = Field(None, alias="currentWeight", examples=["71.8"])
    cravings_scale: Optional[str] = Field(None, alias="cravingsScale", examples=["3"], description="Craving intensity from 1 to 5")
    calorie_goal_met: Optional[str] = Field(None, alias="calorieGoalMet", examples=["yes"], description="yes, no, did_not_track or no_calorie_goal")


class ContactForm(FormPayload):
    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    message: Optional[str] = Field(None, examples=["I would like to know more about coaching."])


class UserLookupForm(FormPayload):
    email: Optional[str] = Field(None, examples=["jane@example.com"])


class FormState(BaseModel):
    """Result of a form submission, rendered back into the page.

    `errors` maps a field name to its messages; `_form` holds errors that
    belong to no single field.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None
    profile_code: Optional[str] = Field(None, alias="profileCode")
    display_name: Optional[str] = Field(None, alias="displayName")


class FieldErrorsResponse(BaseModel):
    """Result of validating a form without submitting it."""

    valid: bool
    errors: Dict[str, List[str]] = {}
