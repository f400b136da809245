"""WhatsApp Transport Layer - Module Exports"""

from .client import WhatsAppClient, WhatsAppSenderError
from .extract import extract_message_parts, extract_sender_id
from .schemas import (
    ButtonReply,
    InboundMessage,
    Interactive,
    ListReply,
    MessageParts,
    OutboundMessage,
    TextBody,
    WhatsAppInteractiveMessage,
    WhatsAppMessageResponse,
    WhatsAppMessageType,
    WhatsAppTextMessage,
)
from .security import (
    compute_signature,
    verify_signature,
    verify_webhook_challenge,
)

__all__ = [
    # Schemas
    "InboundMessage",
    "TextBody",
    "Interactive",
    "ButtonReply",
    "ListReply",
    "MessageParts",
    "OutboundMessage",
    "WhatsAppMessageType",
    "WhatsAppTextMessage",
    "WhatsAppInteractiveMessage",
    "WhatsAppMessageResponse",
    # Extraction
    "extract_message_parts",
    "extract_sender_id",
    # Security
    "verify_signature",
    "verify_webhook_challenge",
    "compute_signature",
    # Client
    "WhatsAppClient",
    "WhatsAppSenderError",
]
