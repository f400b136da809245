"""
WhatsApp Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the inbound webhook shapes the bot reads and the outbound
Cloud API message bodies it sends.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


# ============================================================================
# INBOUND MESSAGE (WEBHOOK)
# ============================================================================

class TextBody(BaseModel):
    """{"body": "..."} of a text message."""
    body: str


class ButtonReply(BaseModel):
    """User tapped a reply button."""
    id: str
    title: str = ""


class ListReply(BaseModel):
    """User picked a row from a list message."""
    id: str
    title: str = ""
    description: Optional[str] = None


class Interactive(BaseModel):
    """Interactive reply: button_reply or list_reply."""
    type: str
    button_reply: Optional[ButtonReply] = None
    list_reply: Optional[ListReply] = None

    class Config:
        extra = "allow"


class InboundMessage(BaseModel):
    """A single message from the webhook `messages` array."""
    id: str
    from_: str = Field(..., alias="from")
    type: str
    timestamp: Optional[str] = None

    text: Optional[TextBody] = None
    interactive: Optional[Interactive] = None

    class Config:
        populate_by_name = True
        extra = "allow"


@dataclass(frozen=True)
class MessageParts:
    """
    What the bot needs out of one webhook delivery.

    All fields are None when the envelope could not be read.
    """

    business_phone_number_id: Optional[str] = None
    message: Optional[InboundMessage] = None
    display_name: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.business_phone_number_id is None
            and self.message is None
            and self.display_name is None
        )

    @property
    def is_dispatchable(self) -> bool:
        return bool(
            self.message
            and self.message.id
            and self.business_phone_number_id
            and self.display_name
        )


# ============================================================================
# OUTBOUND MESSAGES (CLOUD API)
# ============================================================================

class WhatsAppMessageType(str, Enum):
    TEXT = "text"
    INTERACTIVE = "interactive"


class OutboundMessage(BaseModel):
    """Fields shared by every message the bot sends."""
    messaging_product: Literal["whatsapp"] = "whatsapp"
    recipient_type: Literal["individual"] = "individual"
    to: str


class TextContent(BaseModel):
    body: str
    preview_url: bool = False


class WhatsAppTextMessage(OutboundMessage):
    type: Literal[WhatsAppMessageType.TEXT] = WhatsAppMessageType.TEXT
    text: TextContent


class WhatsAppInteractiveMessage(OutboundMessage):
    type: Literal[WhatsAppMessageType.INTERACTIVE] = WhatsAppMessageType.INTERACTIVE
    interactive: dict[str, Any]


class WhatsAppMessageResponse(BaseModel):
    """Response from WhatsApp Cloud API when sending a message."""

    messaging_product: str = Field(default="whatsapp")
    contacts: list[dict[str, str]] = Field(default_factory=list)
    messages: list[dict[str, str]] = Field(default_factory=list)

    @property
    def message_id(self) -> Optional[str]:
        return self.messages[0].get("id") if self.messages else None
