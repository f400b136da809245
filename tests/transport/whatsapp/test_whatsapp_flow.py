"""
WhatsApp Webhook Integration Tests

End-to-end flow: POST /webhook/whatsapp → ack → extract → mark read → dispatcher

The dispatcher is mocked; these tests pin down what reaches it.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from config import Config
from main import app
from transport.whatsapp.security import compute_signature
from webhook.whatsapp import process_webhook_body


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def dispatcher():
    mock = MagicMock()
    mock.whatsapp.mark_message_as_read = AsyncMock()
    mock.message_type_check = AsyncMock()
    return mock


@pytest.fixture(autouse=True)
def no_signature_check():
    with patch.object(Config, "WHATSAPP_APP_SECRET", ""):
        yield


class TestVerification:
    """GET /webhook/whatsapp subscription challenge."""

    def test_valid_challenge(self, client):
        with patch.object(Config, "WEBHOOK_VERIFY_TOKEN", "verify-me"):
            response = client.get(
                "/webhook/whatsapp",
                params={
                    "hub.mode": "subscribe",
                    "hub.verify_token": "verify-me",
                    "hub.challenge": "1158201444",
                },
            )

        assert response.status_code == 200
        assert response.text == "1158201444"

    def test_wrong_token(self, client):
        with patch.object(Config, "WEBHOOK_VERIFY_TOKEN", "verify-me"):
            response = client.get(
                "/webhook/whatsapp",
                params={
                    "hub.mode": "subscribe",
                    "hub.verify_token": "nope",
                    "hub.challenge": "1158201444",
                },
            )

        assert response.status_code == 403

    def test_missing_params(self, client):
        with patch.object(Config, "WEBHOOK_VERIFY_TOKEN", "verify-me"):
            response = client.get("/webhook/whatsapp")

        assert response.status_code == 403


class TestMessageFlow:
    """POST /webhook/whatsapp."""

    def test_text_message_reaches_dispatcher(self, client, dispatcher, payloads):
        body = payloads.body(payloads.text("hello"))

        with patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post("/webhook/whatsapp", json=body)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

        dispatcher.whatsapp.mark_message_as_read.assert_awaited_once_with(
            "109876543210", "wamid.text_1"
        )
        dispatcher.message_type_check.assert_awaited_once()
        message, business_phone_number_id, display_name = dispatcher.message_type_check.call_args.args
        assert message.text.body == "hello"
        assert message.from_ == "2348012345678"
        assert business_phone_number_id == "109876543210"
        assert display_name == "Ada"

    def test_status_update_is_acknowledged_only(self, client, dispatcher, payloads):
        """Delivery receipts carry no messages: 200, nothing dispatched."""
        body = payloads.body()
        body["entry"][0]["changes"][0]["value"]["statuses"] = [{"id": "wamid.out_1", "status": "delivered"}]

        with patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post("/webhook/whatsapp", json=body)

        assert response.status_code == 200
        dispatcher.whatsapp.mark_message_as_read.assert_not_awaited()
        dispatcher.message_type_check.assert_not_awaited()

    def test_missing_display_name_not_dispatched(self, client, dispatcher, payloads):
        body = payloads.body(payloads.text("hello"), display_name="")

        with patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post("/webhook/whatsapp", json=body)

        assert response.status_code == 200
        dispatcher.whatsapp.mark_message_as_read.assert_awaited_once()
        dispatcher.message_type_check.assert_not_awaited()

    def test_garbage_object_still_acknowledged(self, client, dispatcher):
        with patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post("/webhook/whatsapp", json={"unexpected": True})

        assert response.status_code == 200
        dispatcher.message_type_check.assert_not_awaited()

    def test_invalid_json_rejected(self, client):
        response = client.post(
            "/webhook/whatsapp",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    def test_dispatcher_failure_does_not_change_ack(self, client, dispatcher, payloads):
        dispatcher.message_type_check.side_effect = RuntimeError("vendor down")

        with patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post("/webhook/whatsapp", json=payloads.body(payloads.text()))

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestSignedDelivery:
    """Signature check when WHATSAPP_APP_SECRET is configured."""

    def test_signed_body_accepted(self, client, dispatcher, payloads):
        raw = json.dumps(payloads.body(payloads.text())).encode()

        with patch.object(Config, "WHATSAPP_APP_SECRET", "app-secret"), \
             patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post(
                "/webhook/whatsapp",
                content=raw,
                headers={
                    "Content-Type": "application/json",
                    "X-Hub-Signature-256": compute_signature(raw, "app-secret"),
                },
            )

        assert response.status_code == 200
        dispatcher.message_type_check.assert_awaited_once()

    def test_bad_signature_rejected(self, client, dispatcher, payloads):
        with patch.object(Config, "WHATSAPP_APP_SECRET", "app-secret"), \
             patch("webhook.whatsapp.get_dispatcher", return_value=dispatcher):
            response = client.post(
                "/webhook/whatsapp",
                json=payloads.body(payloads.text()),
                headers={"X-Hub-Signature-256": "sha256=deadbeef"},
            )

        assert response.status_code == 403
        dispatcher.message_type_check.assert_not_awaited()

    def test_unsigned_body_rejected(self, client, payloads):
        with patch.object(Config, "WHATSAPP_APP_SECRET", "app-secret"):
            response = client.post("/webhook/whatsapp", json=payloads.body(payloads.text()))

        assert response.status_code == 401


class TestProcessWebhookBody:
    """Background processing, called directly."""

    @pytest.mark.asyncio
    async def test_button_reply_dispatched(self, dispatcher, payloads):
        await process_webhook_body(payloads.body(payloads.button("create-wallet")), dispatcher)

        message = dispatcher.message_type_check.call_args.args[0]
        assert message.interactive.button_reply.id == "create-wallet"

    @pytest.mark.asyncio
    async def test_mark_read_failure_is_logged(self, dispatcher, payloads):
        dispatcher.whatsapp.mark_message_as_read.side_effect = RuntimeError("graph down")

        # Must not raise
        await process_webhook_body(payloads.body(payloads.text()), dispatcher)

        dispatcher.message_type_check.assert_not_awaited()


class TestHealth:
    def test_live(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_ready_reports_missing_settings(self, client):
        with patch.object(Config, "WALLET_KIT_API_TOKEN", ""):
            body = client.get("/health/ready").json()

        assert body["status"] == "not_ready"
        assert "WALLET_KIT_API_TOKEN" in body["missing"]

    def test_whatsapp_health(self, client):
        body = client.get("/webhook/whatsapp/health").json()

        assert body["status"] == "ok"
        assert body["signature_check"] is False
