"""
WalletKit client

Typed pass-through wrapper around the WalletKit wallet-as-a-service REST API.
Wallets are owned by the user's phone number (owner_id).
"""

import asyncio
import logging
from typing import Optional

import httpx

from config import Config
from services.api_client import JSONAPIClient, ServiceError

from .endpoints import (
    GET_TOKEN_BALANCES,
    GET_WALLET_BY_OWNER_ID,
    SIGN_AND_SEND_TRANSACTION,
    TRANSACTION_STATUS_BY_ID,
    TRANSFER_TOKEN,
    WALLETS,
)
from .schemas import (
    SUPPORTED_CHAINS,
    CreateWalletKitWalletParams,
    SignAndSendTransactionParams,
    SupportedChain,
    TokenBalance,
    TransactionResponse,
    TransferTokenParams,
    WalletKitWallet,
)

logger = logging.getLogger(__name__)


class WalletKitError(ServiceError):
    """WalletKit API call failed."""
    pass


class WalletKitService(JSONAPIClient):
    """
    WalletKit API client.

    Every request carries the bearer token and the project id header.
    Parameters are validated with pydantic before the request is sent,
    so a bad call raises pydantic.ValidationError without touching the network.
    """

    error_class = WalletKitError
    service_name = "WalletKit"

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_token: Optional[str] = None,
        project_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=api_url or Config.WALLET_KIT_API_URL,
            timeout=timeout or Config.HTTP_TIMEOUT_S,
            transport=transport,
        )
        self.api_token = api_token or Config.WALLET_KIT_API_TOKEN
        self.project_id = project_id or Config.WALLET_KIT_PROJECT_ID

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_token}",
            "X-WalletKit-Project-ID": self.project_id,
        }

    # ------------------------------------------------------------------
    # Wallets
    # ------------------------------------------------------------------

    async def create_user_wallet(
        self, params: CreateWalletKitWalletParams | dict
    ) -> WalletKitWallet:
        validated = CreateWalletKitWalletParams.model_validate(params)
        data = await self.post(WALLETS, json=validated.model_dump())

        logger.info(
            "WalletKit wallet created",
            extra={"owner_id": validated.owner_id, "network": validated.network},
        )
        return WalletKitWallet.model_validate(data)

    async def get_user_wallet_by_network(
        self, owner_id: str, network: SupportedChain
    ) -> WalletKitWallet:
        data = await self.get(
            GET_WALLET_BY_OWNER_ID,
            params={"ownerID": owner_id, "network": network},
        )
        return WalletKitWallet.model_validate(data)

    async def get_user_wallets(self, owner_id: str) -> list[WalletKitWallet]:
        """
        Fetch the owner's wallet on every supported chain in parallel.

        Chains where the lookup fails (no wallet yet, vendor error) are
        skipped; the rest come back in SUPPORTED_CHAINS order.
        """
        results = await asyncio.gather(
            *(self.get_user_wallet_by_network(owner_id, network) for network in SUPPORTED_CHAINS),
            return_exceptions=True,
        )

        wallets = []
        for network, result in zip(SUPPORTED_CHAINS, results):
            if isinstance(result, Exception):
                logger.info(
                    f"No wallet for {owner_id} on {network}: {result}",
                    extra={"owner_id": owner_id, "network": network},
                )
                continue
            if isinstance(result, BaseException):
                raise result
            wallets.append(result)
        return wallets

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def sign_and_send_transaction(
        self, params: SignAndSendTransactionParams | dict
    ) -> TransactionResponse:
        validated = SignAndSendTransactionParams.model_validate(params)
        data = await self.post(
            SIGN_AND_SEND_TRANSACTION,
            json=validated.model_dump(by_alias=True, exclude_none=True),
        )
        return TransactionResponse.model_validate(data)

    async def transfer_token(self, params: TransferTokenParams | dict) -> TransactionResponse:
        validated = TransferTokenParams.model_validate(params)
        data = await self.post(
            TRANSFER_TOKEN,
            json=validated.model_dump(by_alias=True, exclude_none=True),
        )

        logger.info(
            "WalletKit token transfer submitted",
            extra={"network": validated.network, "token": validated.token},
        )
        return TransactionResponse.model_validate(data)

    async def get_transaction_by_id(self, transaction_id: str) -> TransactionResponse:
        data = await self.get(TRANSACTION_STATUS_BY_ID, params={"id": transaction_id})
        return TransactionResponse.model_validate(data)

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    async def get_token_balances(
        self, wallet_address: str, network: SupportedChain
    ) -> list[TokenBalance]:
        data = await self.get(
            GET_TOKEN_BALANCES,
            params={"wallet_address": wallet_address, "network": network},
        )
        return [TokenBalance.model_validate(row) for row in data or []]

    async def get_balance(
        self,
        wallet_address: str,
        network: SupportedChain,
        contract_address: str,
    ) -> str:
        """Display balance of one token in the wallet, "0" when it holds none."""
        balances = await self.get_token_balances(wallet_address, network)

        for balance in balances:
            if balance.contract_address.lower() == contract_address.lower():
                return balance.display_balance
        return "0"
