"""
WhatsApp Message Extraction

PURE CONVERSION - NO LOGIC, NO API CALLS

Reads the first entry -> first change -> value of a webhook delivery and
returns the business phone number id, the first message and the sender's
display name. A malformed envelope yields an empty MessageParts instead of
raising: the webhook has already been acknowledged and there is nothing to
retry.
"""

import logging
from typing import Any

from pydantic import ValidationError

from .schemas import InboundMessage, MessageParts

logger = logging.getLogger(__name__)


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def extract_message_parts(body: Any) -> MessageParts:
    """
    Extract message parts from a raw WhatsApp webhook body.

    Args:
        body: Decoded JSON body of the POST /webhook/whatsapp request

    Returns:
        MessageParts; empty when entry/changes/value is missing.
        Status-only deliveries (no messages) come back without a message.
    """
    if not isinstance(body, dict):
        logger.info("Un-extracted request body", extra={"webhook_body": body})
        return MessageParts()

    first_entry = _first(body.get("entry"))
    first_change = _first(first_entry.get("changes")) if isinstance(first_entry, dict) else None
    value = first_change.get("value") if isinstance(first_change, dict) else None

    if not isinstance(value, dict):
        logger.info("Un-extracted request body", extra={"webhook_body": body})
        return MessageParts()

    metadata = value.get("metadata") or {}
    business_phone_number_id = metadata.get("phone_number_id")

    message = None
    raw_message = _first(value.get("messages"))
    if isinstance(raw_message, dict):
        try:
            message = InboundMessage.model_validate(raw_message)
        except ValidationError as e:
            logger.warning(f"Unreadable message object: {e}")

    display_name = None
    contact = _first(value.get("contacts"))
    if isinstance(contact, dict):
        display_name = (contact.get("profile") or {}).get("name")

    return MessageParts(
        business_phone_number_id=business_phone_number_id,
        message=message,
        display_name=display_name,
    )


def extract_sender_id(body: Any) -> str | None:
    """
    Sender phone number, or None.

    Useful for routing/logging without full extraction.
    """
    parts = extract_message_parts(body)
    return parts.message.from_ if parts.message else None
