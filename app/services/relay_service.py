"""
SubmissionRelay: contact -> conversation -> message pipeline for one Squarespace
submission, decoupled from HTTP.
"""

import logging

from app.models.webhook_models import SquarespaceWebhook
from app.services.chatwoot_service import ChatwootService
from app.services.message_composer import build_message_content
from app.services.payload_service import build_contact_draft
from app.utils.helpers import resolve_entity_id

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Chatwoot accepted a call but the response is unusable."""


class SubmissionRelay:
    """Runs the three Chatwoot calls in order; each needs the id from the previous one."""

    def __init__(self, chatwoot_service: ChatwootService):
        self.chatwoot = chatwoot_service

    async def relay(self, webhook: SquarespaceWebhook) -> dict:
        """
        Relay one validated submission.
        Returns the created message; raises on the first failing step.
        """
        submission = webhook.form_submission
        draft = build_contact_draft(webhook)

        # --- STEP 1: CONTACT ---
        contact_result = await self.chatwoot.create_or_find_contact(draft)
        contact_id = resolve_entity_id(contact_result, ["payload", "id"], ["id"])
        if not contact_id:
            raise RelayError("Chatwoot contact response did not include an id")
        logger.info("Contact resolved: %s", contact_id)

        # --- STEP 2: CONVERSATION ---
        conversation_result = await self.chatwoot.create_conversation(contact_id)
        conversation_id = resolve_entity_id(conversation_result, ["id"], ["payload", "id"])
        if not conversation_id:
            raise RelayError("Chatwoot conversation response did not include an id")
        logger.info("Conversation created: %s", conversation_id)

        # --- STEP 3: MESSAGE ---
        content = build_message_content(
            submission.fields,
            message=draft.message,
            name=draft.name,
            email=draft.email,
            phone=draft.phone,
        )
        message_result = await self.chatwoot.create_message(conversation_id, content)

        logger.info("Submission %s relayed to conversation %s", submission.id, conversation_id)
        return message_result
