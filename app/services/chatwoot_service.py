import json
import logging
from typing import Any, Optional

import httpx

from app.config import Settings
from app.utils.helpers import safe_json

logger = logging.getLogger(__name__)

# Chatwoot answers 422 when a contact with the same identifier/email already exists.
CONTACT_CONFLICT_STATUS = 422


class ChatwootError(Exception):
    """A Chatwoot API call did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def is_contact_conflict(status_code: int, identifier: Any) -> bool:
    """
    True when a failed contact creation should fall back to a search.
    Only a 422 with a usable identifier qualifies; anything else is terminal.
    """
    return status_code == CONTACT_CONFLICT_STATUS and bool(identifier)


def _describe(body: Any) -> str:
    return json.dumps(body, default=str)


class ChatwootService:
    """
    Async client for the three Chatwoot calls a submission needs.
    Holds only the static Settings; every call opens its own client.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport
        self.headers = {
            "Content-Type": "application/json",
            "api_access_token": settings.api_token,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.account_url,
            headers=self.headers,
            transport=self._transport,
            timeout=None,
        )

    async def create_or_find_contact(self, draft) -> dict:
        """
        Create the contact; on a conflict, look the existing one up by identifier.

        Returns the raw Chatwoot response. A found contact is wrapped as
        {"payload": <contact>} so callers read the id the same way either way.
        Raises ChatwootError if neither path yields a contact.
        """
        async with self._client() as client:
            logger.info("Creating Chatwoot contact (identifier=%s)...", draft.identifier)
            response = await client.post("/contacts", json=draft.to_contact_payload())

            if response.is_success:
                return response.json()

            error_body = safe_json(response)

            if is_contact_conflict(response.status_code, draft.identifier):
                logger.info("Contact already exists, searching by identifier %s", draft.identifier)
                search = await client.get("/contacts/search", params={"q": str(draft.identifier)})

                if search.is_success:
                    result = safe_json(search)
                    matches = result.get("payload") if isinstance(result, dict) else None
                    if isinstance(matches, list) and matches and isinstance(matches[0], dict):
                        logger.info("Existing contact found: %s", matches[0].get("id"))
                        return {"payload": matches[0]}
                    logger.warning("Contact search returned no matches for %s", draft.identifier)
                else:
                    logger.warning("Contact search failed with status %s", search.status_code)

        raise ChatwootError(
            f"Unable to create or find contact: {_describe(error_body)}",
            status_code=response.status_code,
            body=error_body,
        )

    async def create_conversation(self, contact_id) -> dict:
        """Open a conversation for the contact in the configured inbox."""
        payload = {
            "contact_id": contact_id,
            "inbox_id": self.settings.inbox_id,
            "source_id": self.settings.source_id,
            "status": "open",
        }

        async with self._client() as client:
            logger.info("Creating Chatwoot conversation for contact %s...", contact_id)
            response = await client.post("/conversations", json=payload)

            if not response.is_success:
                body = safe_json(response)
                raise ChatwootError(
                    f"Unable to create conversation: {_describe(body)}",
                    status_code=response.status_code,
                    body=body,
                )

            return response.json()

    async def create_message(self, conversation_id, content: str) -> dict:
        """Append an incoming message to the conversation."""
        payload = {
            "content": content,
            "message_type": "incoming",
        }

        async with self._client() as client:
            logger.info("Appending message to conversation %s...", conversation_id)
            response = await client.post(f"/conversations/{conversation_id}/messages", json=payload)

            if not response.is_success:
                body = safe_json(response)
                raise ChatwootError(
                    f"Unable to append message: {_describe(body)}",
                    status_code=response.status_code,
                    body=body,
                )

            return response.json()
