"""
WhatsApp Webhook Handler

Receives WhatsApp Cloud API webhooks and hands messages to the dispatcher.

Security:
  - Subscription challenge checked against WEBHOOK_VERIFY_TOKEN
  - X-Hub-Signature-256 verified when WHATSAPP_APP_SECRET is set

Update Flow:
  webhook → ack 200 → (background) extract → mark read → dispatcher
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from bot import MessageDispatcher, create_dispatcher
from config import Config
from transport.whatsapp import extract_message_parts, verify_signature, verify_webhook_challenge

# Setup logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/webhook", tags=["WhatsApp"])

# Dispatcher (initialized once)
_dispatcher: Optional[MessageDispatcher] = None


def get_dispatcher() -> MessageDispatcher:
    """Get or create the message dispatcher (singleton)."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = create_dispatcher()
    return _dispatcher


@router.get("/whatsapp", response_class=PlainTextResponse)
async def whatsapp_webhook_verification(
    hub_mode: Optional[str] = Query(None, alias="hub.mode"),
    hub_verify_token: Optional[str] = Query(None, alias="hub.verify_token"),
    hub_challenge: Optional[str] = Query(None, alias="hub.challenge"),
) -> str:
    """
    Verify webhook subscription challenge from Meta.

    Returns:
        The challenge string (plain text) with 200

    Raises:
        HTTPException(403): mode is not "subscribe" or the token does not match
    """
    return verify_webhook_challenge(hub_mode, hub_verify_token, hub_challenge)


@router.post("/whatsapp")
async def receive_message_webhook(
    request: Request, background_tasks: BackgroundTasks
) -> dict[str, str]:
    """
    Receive WhatsApp message events.

    The event is acknowledged straight away; processing runs after the
    response has been sent, so vendor latency never delays the 200.

    Raises:
        HTTPException(401): Missing signature (app secret configured)
        HTTPException(403): Invalid signature
        HTTPException(422): Body is not JSON
    """
    body = await request.body()
    await verify_signature(request, body)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid JSON payload"
        )

    background_tasks.add_task(process_webhook_body, payload)
    return {"status": "ok"}


async def process_webhook_body(
    payload: Any, dispatcher: Optional[MessageDispatcher] = None
) -> None:
    """
    Handle one webhook delivery after it has been acknowledged.

    Never raises: failures are logged because WhatsApp has already been
    told the event was received.
    """
    try:
        logger.info("Original Body Received", extra={"webhook_body": payload})

        parts = extract_message_parts(payload)
        dispatcher = dispatcher or get_dispatcher()

        if parts.message and parts.message.id and parts.business_phone_number_id:
            await dispatcher.whatsapp.mark_message_as_read(
                parts.business_phone_number_id, parts.message.id
            )

        logger.info(
            "Extracted message parts",
            extra={
                "business_phone_number_id": parts.business_phone_number_id,
                "message_id": parts.message.id if parts.message else None,
                "display_name": parts.display_name,
            },
        )

        if parts.is_dispatchable:
            await dispatcher.message_type_check(
                parts.message,
                parts.business_phone_number_id,
                parts.display_name,
            )
        else:
            logger.info("Message object not found")

    except Exception as e:
        logger.error(f"Error in receiving message webhook: {e}", exc_info=True)


@router.get("/whatsapp/health")
async def whatsapp_health():
    """Health check for the WhatsApp webhook."""
    return {
        "status": "ok",
        "access_token_loaded": bool(Config.WHATSAPP_ACCESS_TOKEN),
        "verify_token_loaded": bool(Config.WEBHOOK_VERIFY_TOKEN),
        "signature_check": bool(Config.WHATSAPP_APP_SECRET),
    }
