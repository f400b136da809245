"""
WhatsApp Cloud API client

Sends bot replies and read receipts through the Graph API.
No formatting intelligence (see messages.py). No retries.
"""

import logging
from typing import Any, Optional, Sequence

import httpx

from config import Config
from services.api_client import JSONAPIClient, ServiceError
from services.fiat_ramp import Beneficiary, Rate
from services.users import AccountState, AssetInfo, UserAsset

from . import messages
from .schemas import OutboundMessage, WhatsAppMessageResponse

logger = logging.getLogger(__name__)


class WhatsAppSenderError(ServiceError):
    """Failed to send a message to WhatsApp."""
    pass


class WhatsAppClient(JSONAPIClient):
    """
    WhatsApp Cloud API client.

    Paths are relative to https://graph.facebook.com/<version>/, so a send is
    `<business_phone_number_id>/messages`.
    """

    error_class = WhatsAppSenderError
    service_name = "WhatsApp"

    def __init__(
        self,
        access_token: Optional[str] = None,
        api_version: Optional[str] = None,
        graph_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        api_version = api_version or Config.WHATSAPP_API_VERSION
        graph_url = (graph_url or Config.WHATSAPP_GRAPH_URL).rstrip("/")
        super().__init__(
            base_url=f"{graph_url}/{api_version}",
            timeout=timeout or Config.HTTP_TIMEOUT_S,
            transport=transport,
        )
        self.access_token = access_token if access_token is not None else Config.WHATSAPP_ACCESS_TOKEN

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    async def send_whatsapp_message(
        self, method: str, path: str, payload: dict[str, Any]
    ) -> Any:
        """Raw Graph API call; returns the decoded JSON response."""
        if not self.access_token:
            raise WhatsAppSenderError("WHATSAPP_ACCESS_TOKEN not configured")

        return await self.request(method, path, json=payload)

    async def send_message(
        self, business_phone_number_id: str, message: OutboundMessage
    ) -> WhatsAppMessageResponse:
        result = await self.send_whatsapp_message(
            "POST",
            f"{business_phone_number_id}/messages",
            message.model_dump(mode="json", exclude_none=True),
        )
        response = WhatsAppMessageResponse.model_validate(result or {})

        logger.info(
            f"Message sent to {message.to}",
            extra={"recipient": message.to, "response_id": response.message_id},
        )
        return response

    async def mark_message_as_read(self, business_phone_number_id: str, message_id: str) -> Any:
        return await self.send_whatsapp_message(
            "POST",
            f"{business_phone_number_id}/messages",
            {
                "messaging_product": "whatsapp",
                "status": "read",
                "message_id": message_id,
            },
        )

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def send_text(
        self, business_phone_number_id: str, to: str, body: str
    ) -> WhatsAppMessageResponse:
        return await self.send_message(business_phone_number_id, messages.text_message(to, body))

    async def create_wallet_message(
        self, business_phone_number_id: str, display_name: str, to: str
    ) -> WhatsAppMessageResponse:
        return await self.send_message(
            business_phone_number_id,
            messages.create_wallet_message(to, display_name),
        )

    async def list_wallet_address_message(
        self,
        business_phone_number_id: str,
        display_name: str,
        to: str,
        assets: Sequence[UserAsset],
        account_state: AccountState,
    ) -> WhatsAppMessageResponse:
        # A button message needs at least one button
        if not assets:
            return await self.create_wallet_message(business_phone_number_id, display_name, to)

        return await self.send_message(
            business_phone_number_id,
            messages.wallet_address_list_message(to, display_name, assets, account_state),
        )

    async def wallet_details_message(
        self,
        business_phone_number_id: str,
        to: str,
        asset_info: Optional[AssetInfo],
    ) -> WhatsAppMessageResponse:
        if asset_info is None:
            message = messages.missing_wallet_message(to)
        else:
            message = messages.wallet_details_message(to, asset_info)
        return await self.send_message(business_phone_number_id, message)

    async def list_beneficiary_message(
        self,
        business_phone_number_id: str,
        to: str,
        beneficiaries: Sequence[Beneficiary],
    ) -> WhatsAppMessageResponse:
        return await self.send_message(
            business_phone_number_id,
            messages.beneficiary_list_message(to, beneficiaries),
        )

    async def rates_message(
        self, business_phone_number_id: str, to: str, rates: Sequence[Rate]
    ) -> WhatsAppMessageResponse:
        return await self.send_message(business_phone_number_id, messages.rates_message(to, rates))
