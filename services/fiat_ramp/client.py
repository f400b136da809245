"""
Fiat ramp client

Typed pass-through wrapper around the fiat on/off-ramp aggregator REST API:
reference data (currencies, fees, rates, quotes, payment channels, payout
networks), beneficiary CRUD and onramp/offramp transaction submission.
"""

import asyncio
import logging
from typing import Optional

import httpx

from config import Config
from services.api_client import JSONAPIClient, ServiceError

from .endpoints import (
    BENEFICIARIES,
    CHANNELS,
    CURRENCIES,
    FEES,
    HOT_WALLETS,
    NETWORKS,
    OFFRAMP,
    ONRAMP,
    QUOTES,
    RATES,
    TRANSACTIONS,
)
from .schemas import (
    AccountType,
    Beneficiary,
    CreateBeneficiaryPayload,
    Currency,
    DataEnvelope,
    HotWallet,
    OfframpTransactionPayload,
    OnrampTransactionPayload,
    PaymentMethods,
    PaymentMethodsData,
    PayoutNetwork,
    Quote,
    RampTransaction,
    Rate,
    TransactionFee,
    TransactionType,
)

logger = logging.getLogger(__name__)


class FiatRampError(ServiceError):
    """Fiat ramp API call failed."""
    pass


class FiatRampService(JSONAPIClient):
    """
    Fiat ramp API client.

    Authentication is a bearer header passthrough of FIAT_RAMP_API_KEY.
    """

    error_class = FiatRampError
    service_name = "FiatRamp"

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=api_url or Config.FIAT_RAMP_API_URL,
            timeout=timeout or Config.HTTP_TIMEOUT_S,
            transport=transport,
        )
        self.api_key = api_key or Config.FIAT_RAMP_API_KEY

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def _get_data(self, path: str, params: Optional[dict] = None):
        body = await self.get(path, params=params)
        return self._unwrap(body, path)

    async def _post_data(self, path: str, json: dict):
        body = await self.post(path, json=json)
        return self._unwrap(body, path)

    def _unwrap(self, body, path: str):
        if not isinstance(body, dict) or "data" not in body:
            raise FiatRampError(f"FiatRamp response for {path} has no data envelope", body=body)
        return body["data"]

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    async def get_supported_currencies(self) -> list[Currency]:
        data = await self._get_data(CURRENCIES)
        return DataEnvelope[list[Currency]](data=data).data

    async def get_transaction_fee(
        self, country: str, transaction_type: TransactionType
    ) -> TransactionFee:
        data = await self._get_data(FEES, params={"country": country, "type": transaction_type})
        return TransactionFee.model_validate(data)

    async def get_rate(self, currency_code: str) -> Rate:
        data = await self._get_data(RATES, params={"currency": currency_code})
        return Rate.model_validate(data)

    async def get_multiple_rates(self, currency_codes: list[str]) -> list[Rate]:
        """
        Fetch several rates in parallel.

        Currencies whose lookup fails are left out; the rest keep the
        order of currency_codes.
        """
        results = await asyncio.gather(
            *(self.get_rate(code) for code in currency_codes),
            return_exceptions=True,
        )

        rates = []
        for code, result in zip(currency_codes, results):
            if isinstance(result, Exception):
                logger.warning(f"Rate lookup failed for {code}: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            rates.append(result)
        return rates

    async def get_quotes(
        self, currency_code: str, country: str, transaction_type: TransactionType
    ) -> list[Quote]:
        data = await self._get_data(
            QUOTES,
            params={"currency": currency_code, "country": country, "type": transaction_type},
        )
        return DataEnvelope[list[Quote]](data=data).data

    async def get_payment_methods(
        self, country: str, transaction_type: TransactionType
    ) -> PaymentMethods:
        data = await self._get_data(CHANNELS, params={"country": country, "type": transaction_type})
        parsed = PaymentMethodsData.model_validate(data)
        return PaymentMethods(
            payment_channels=parsed.channels,
            country_fiat_limits=parsed.limits,
        )

    async def _get_networks(self, channel_id: str, network_type: str) -> list[PayoutNetwork]:
        data = await self._get_data(
            NETWORKS,
            params={"channelId": channel_id, "type": network_type},
        )
        return DataEnvelope[list[PayoutNetwork]](data=data).data

    async def get_supported_mobile_providers(self, channel_id: str) -> list[PayoutNetwork]:
        return await self._get_networks(channel_id, "mobile")

    async def get_supported_banks(self, channel_id: str) -> list[PayoutNetwork]:
        return await self._get_networks(channel_id, "bank")

    async def get_hot_wallet_for_network(self, network: str) -> str:
        """Deposit address the ramp watches for offramp transfers on `network`."""
        data = await self._get_data(HOT_WALLETS, params={"network": network})
        return HotWallet.model_validate(data).address

    # ------------------------------------------------------------------
    # Beneficiaries
    # ------------------------------------------------------------------

    async def create_beneficiary(
        self,
        owner_id: str,
        country: str,
        account_type: AccountType,
        payload: CreateBeneficiaryPayload | dict,
    ) -> str:
        """Save a payout destination and return its id."""
        validated = CreateBeneficiaryPayload.model_validate(payload)
        body = {
            "ownerId": owner_id,
            "country": country,
            "accountType": account_type,
            **validated.to_wire(),
        }
        data = await self._post_data(BENEFICIARIES, json=body)

        beneficiary_id = data.get("id") if isinstance(data, dict) else data
        if not beneficiary_id:
            raise FiatRampError("FiatRamp did not return a beneficiary id", body=data)

        logger.info(
            "Beneficiary created",
            extra={"owner_id": owner_id, "country": country, "account_type": account_type},
        )
        return str(beneficiary_id)

    async def get_beneficiaries(
        self, owner_id: str, country: str, account_type: AccountType
    ) -> list[Beneficiary]:
        data = await self._get_data(
            BENEFICIARIES,
            params={"ownerId": owner_id, "country": country, "accountType": account_type},
        )
        return DataEnvelope[list[Beneficiary]](data=data or []).data

    async def get_beneficiary(self, beneficiary_id: str) -> Beneficiary:
        data = await self._get_data(f"{BENEFICIARIES}/{beneficiary_id}")
        return Beneficiary.model_validate(data)

    async def delete_beneficiary(self, beneficiary_id: str) -> None:
        await self.delete(f"{BENEFICIARIES}/{beneficiary_id}")
        logger.info("Beneficiary deleted", extra={"beneficiary_id": beneficiary_id})

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def post_onramp_transaction(
        self, payload: OnrampTransactionPayload | dict
    ) -> RampTransaction:
        validated = OnrampTransactionPayload.model_validate(payload)
        data = await self._post_data(ONRAMP, json=validated.to_wire())

        transaction = RampTransaction.model_validate(data)
        logger.info(
            "Onramp transaction submitted",
            extra={"sequence_id": transaction.sequence_id, "country": validated.country},
        )
        return transaction

    async def post_offramp_transaction(
        self, payload: OfframpTransactionPayload | dict
    ) -> RampTransaction:
        validated = OfframpTransactionPayload.model_validate(payload)
        data = await self._post_data(OFFRAMP, json=validated.to_wire())

        transaction = RampTransaction.model_validate(data)
        logger.info(
            "Offramp transaction submitted",
            extra={
                "sequence_id": transaction.sequence_id,
                "beneficiary_id": validated.beneficiary_id,
            },
        )
        return transaction

    async def get_transaction_status(
        self, sequence_id: str, transaction_type: TransactionType
    ) -> RampTransaction:
        if not sequence_id:
            raise ValueError("sequence_id is required")

        data = await self._get_data(f"{TRANSACTIONS}/{transaction_type}/{sequence_id}")
        return RampTransaction.model_validate(data)
