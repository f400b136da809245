"""
Fiat ramp request/response models.

The ramp API speaks camelCase JSON; models use snake_case attributes with
camelCase aliases and accept either on input.
Every response is wrapped in a {"data": ...} envelope.
"""

from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


TransactionType = Literal["onramp", "offramp"]
AccountType = Literal["bank", "phone"]

T = TypeVar("T")


class RampModel(BaseModel):
    """Base model: camelCase on the wire, extra vendor fields kept."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "allow"

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class DataEnvelope(BaseModel, Generic[T]):
    """Response wrapper shared by every ramp endpoint."""
    data: T


# ============================================================================
# REFERENCE DATA
# ============================================================================

class Currency(RampModel):
    code: str
    name: Optional[str] = None
    country: Optional[str] = None
    symbol: Optional[str] = None


class TransactionFee(RampModel):
    country: Optional[str] = None
    transaction_type: Optional[str] = Field(None, alias="type")
    fee: float = 0
    fee_type: Optional[str] = None


class Rate(RampModel):
    code: str
    buy: float
    sell: float
    updated_at: Optional[str] = None


class Quote(RampModel):
    currency_code: str
    rate: float
    fee: Optional[float] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    channel_id: Optional[str] = None


class PaymentChannel(RampModel):
    channel_id: str
    channel_name: str
    country: Optional[str] = None
    transaction_type: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None


class CountryFiatLimit(RampModel):
    country: Optional[str] = None
    currency: Optional[str] = None
    transaction_type: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None


class PaymentMethodsData(RampModel):
    """Payload of GET /channels."""
    channels: list[PaymentChannel] = Field(default_factory=list)
    limits: list[CountryFiatLimit] = Field(default_factory=list)


class PaymentMethods(BaseModel):
    """What callers get back from get_payment_methods()."""
    payment_channels: list[PaymentChannel]
    country_fiat_limits: list[CountryFiatLimit]

    def channel(self, channel_name: str) -> Optional[PaymentChannel]:
        """First channel with the given name (e.g. "bank", "phone")."""
        for channel in self.payment_channels:
            if channel.channel_name == channel_name:
                return channel
        return None


class PayoutNetwork(RampModel):
    """A bank or mobile-money provider reachable through a channel."""
    network_id: str
    name: str
    channel_id: Optional[str] = None
    country: Optional[str] = None
    code: Optional[str] = None


class HotWallet(RampModel):
    address: str
    network: Optional[str] = None


# ============================================================================
# BENEFICIARIES
# ============================================================================

class BeneficiaryDetails(RampModel):
    country_id: str
    account_name: str
    account_number: str
    channel_id: str
    network_id: str
    bank_name: Optional[str] = None


class CreateBeneficiaryPayload(RampModel):
    beneficiary: BeneficiaryDetails


class Beneficiary(RampModel):
    id: str
    owner_id: Optional[str] = None
    country: Optional[str] = None
    account_type: Optional[str] = None
    beneficiary: BeneficiaryDetails


# ============================================================================
# TRANSACTIONS
# ============================================================================

class OnrampTransactionPayload(RampModel):
    channel_id: str
    country: str = Field(..., min_length=2, max_length=2)
    account_type: AccountType
    local_amount: float = Field(..., gt=0)
    chain_name: str
    token_name: str
    user_wallet_address: str


class OfframpTransactionPayload(RampModel):
    beneficiary_id: str
    local_amount: float = Field(..., gt=0)
    usd_amount: float = Field(..., gt=0)
    chain_name: str
    token_name: str
    token_address: str
    user_wallet_address: str
    hot_wallet_address: str
    tx_hash: str


class RampTransaction(RampModel):
    sequence_id: str
    status: Optional[str] = None
    transaction_type: Optional[str] = None
    local_amount: Optional[float] = None
