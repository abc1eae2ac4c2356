from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormField(BaseModel):
    """
    One named value from a Squarespace form.
    Names are free text chosen by the site owner; values may be a scalar, a list
    (checkboxes, multi-selects) or null.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Any = None
    value: Any = None


class FormSubmission(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Any = None
    form_name: Any = Field(default=None, alias="formName")
    timestamp: Any = None
    fields: List[FormField] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def _null_fields_as_empty(cls, value):
        return [] if value is None else value


class Website(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Any = None


class SquarespaceWebhook(BaseModel):
    """Envelope posted by Squarespace on every form submission."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    form_submission: Optional[FormSubmission] = Field(default=None, alias="formSubmission")
    website: Optional[Website] = None
