"""
Webhooks Router — Thin HTTP layer
=================================
Receives Squarespace form submissions and hands them to SubmissionRelay.
Internal error detail never reaches the webhook sender.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_relay
from app.services.payload_service import parse_webhook
from app.services.relay_service import SubmissionRelay

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_PAYLOAD_BYTES = 1024 * 1024


@router.post("/webhooks/squarespace")
async def receive_squarespace_submission(request: Request, relay: SubmissionRelay = Depends(get_relay)):
    """
    Squarespace form-submission webhook.
    Validates the payload, then resolves the contact, opens a conversation and posts the message.
    """
    raw = await request.body()
    if len(raw) > MAX_PAYLOAD_BYTES:
        logger.warning("Rejected payload of %d bytes", len(raw))
        return JSONResponse(status_code=413, content={"error": "Payload too large"})

    try:
        raw_body = json.loads(raw) if raw else None
    except ValueError:
        logger.warning("Received body that is not valid JSON")
        raw_body = None

    webhook = parse_webhook(raw_body)
    if webhook is None:
        return JSONResponse(status_code=400, content={"error": "Invalid Squarespace payload"})

    try:
        await relay.relay(webhook)
    except Exception:
        logger.exception("Failed to relay Squarespace submission to Chatwoot")
        return JSONResponse(status_code=500, content={"error": "Failed to relay to Chatwoot"})

    return {"status": "ok"}
