"""
PayloadService: Validates incoming Squarespace webhook bodies and derives the
contact data Chatwoot needs from them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.models.webhook_models import SquarespaceWebhook
from app.utils.data_extraction import (
    EMAIL_ALIASES,
    MESSAGE_ALIASES,
    NAME_ALIASES,
    PHONE_ALIASES,
    extract_field,
)

logger = logging.getLogger(__name__)


@dataclass
class ContactDraft:
    """Contact data derived from one submission. Used once, then discarded."""
    name: Optional[Any] = None
    email: Optional[Any] = None
    phone: Optional[Any] = None
    message: Optional[Any] = None
    identifier: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_contact_payload(self) -> dict:
        """Body for POST /contacts."""
        return {
            "name": self.name,
            "email": self.email,
            "identifier": self.identifier,
            "phone_number": self.phone,
            "custom_attributes": self.metadata,
        }


def parse_webhook(raw_body: Any) -> Optional[SquarespaceWebhook]:
    """
    Validate a decoded request body.
    Returns None when the body is not an object, fails validation, or carries
    no formSubmission; the caller answers 400 without touching Chatwoot.
    """
    if not isinstance(raw_body, dict):
        logger.warning("Received non-object payload: %r", raw_body)
        return None

    try:
        webhook = SquarespaceWebhook.model_validate(raw_body)
    except ValidationError as e:
        logger.warning("Received malformed Squarespace payload: %s", e)
        return None

    if webhook.form_submission is None:
        logger.warning("Received payload without formSubmission: %s", raw_body)
        return None

    return webhook


def build_contact_draft(webhook: SquarespaceWebhook) -> ContactDraft:
    """
    Pull email/phone/name/message out of the form fields and pick the lookup
    identifier: email, else phone, else the submission's own id.
    """
    submission = webhook.form_submission
    fields = submission.fields

    draft = ContactDraft(
        email=extract_field(fields, *EMAIL_ALIASES),
        phone=extract_field(fields, *PHONE_ALIASES),
        name=extract_field(fields, *NAME_ALIASES),
        message=extract_field(fields, *MESSAGE_ALIASES),
    )
    draft.identifier = draft.email or draft.phone or submission.id
    draft.metadata = {
        "squarespace_form_id": submission.id,
        "squarespace_form_name": submission.form_name,
        "squarespace_submission_timestamp": submission.timestamp,
        "squarespace_site_id": webhook.website.id if webhook.website else None,
    }

    logger.info(
        "Submission %s parsed: name=%s, email=%s, phone=%s, identifier=%s",
        submission.id, draft.name, draft.email, draft.phone, draft.identifier,
    )
    return draft
