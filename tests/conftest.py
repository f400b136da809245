"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from transport.whatsapp.schemas import InboundMessage  # noqa: E402


def build_webhook_body(message=None, phone_number_id="109876543210", display_name="Ada"):
    """WhatsApp Cloud API webhook envelope around one message."""
    value = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550001111",
            "phone_number_id": phone_number_id,
        },
        "contacts": [{"profile": {"name": display_name}, "wa_id": "2348012345678"}],
    }
    if message is not None:
        value["messages"] = [message]

    return {
        "object": "whatsapp_business_account",
        "entry": [{
            "id": "WABA_ID",
            "changes": [{"field": "messages", "value": value}],
        }],
    }


def text_message(body="hi", sender="2348012345678", message_id="wamid.text_1"):
    return {
        "from": sender,
        "id": message_id,
        "timestamp": "1717000000",
        "type": "text",
        "text": {"body": body},
    }


def button_message(button_id, sender="2348012345678", message_id="wamid.button_1"):
    return {
        "from": sender,
        "id": message_id,
        "timestamp": "1717000000",
        "type": "interactive",
        "interactive": {
            "type": "button_reply",
            "button_reply": {"id": button_id, "title": "Tapped"},
        },
    }


def list_message(row_id, sender="2348012345678", message_id="wamid.list_1"):
    return {
        "from": sender,
        "id": message_id,
        "timestamp": "1717000000",
        "type": "interactive",
        "interactive": {
            "type": "list_reply",
            "list_reply": {"id": row_id, "title": "Row", "description": "desc"},
        },
    }


@pytest.fixture
def payloads():
    """Builders for raw webhook bodies and message objects."""
    return SimpleNamespace(
        body=build_webhook_body,
        text=text_message,
        button=button_message,
        list=list_message,
    )


@pytest.fixture
def make_message():
    """Build an InboundMessage from a raw message dict."""
    return InboundMessage.model_validate
