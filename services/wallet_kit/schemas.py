"""
WalletKit request/response models.

Requests are validated before they leave the process; responses allow extra
fields because the vendor may add them.
"""

from decimal import Decimal, InvalidOperation
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


SupportedChain = Literal["ethereum", "base"]
SUPPORTED_CHAINS: tuple[SupportedChain, ...] = ("ethereum", "base")

EVM_ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"


# ============================================================================
# REQUEST PARAMS
# ============================================================================

class CreateWalletKitWalletParams(BaseModel):
    """Body of POST /wallets."""
    network: SupportedChain
    owner_id: str = Field(..., min_length=1, description="User phone number")


class SignAndSendTransactionParams(BaseModel):
    """Body of POST /transactions/sign-and-send."""
    network: SupportedChain
    from_: str = Field(..., alias="from", pattern=EVM_ADDRESS_PATTERN)
    to: str = Field(..., pattern=EVM_ADDRESS_PATTERN)
    value: Optional[str] = None
    data: Optional[str] = None

    class Config:
        populate_by_name = True


class TransferTokenParams(BaseModel):
    """Body of POST /transactions/transfer-token."""
    network: SupportedChain
    from_: str = Field(..., alias="from", pattern=EVM_ADDRESS_PATTERN)
    to: str = Field(..., pattern=EVM_ADDRESS_PATTERN)
    token: str = Field(..., description="Token contract address, or 'native'")
    amount: str = Field(..., description="Human-readable decimal amount")

    class Config:
        populate_by_name = True

    @field_validator("amount")
    @classmethod
    def amount_must_be_positive(cls, v: str) -> str:
        try:
            parsed = Decimal(v)
        except InvalidOperation:
            raise ValueError("amount must be a decimal string")
        if not parsed.is_finite() or parsed <= 0:
            raise ValueError("amount must be greater than zero")
        return v


# ============================================================================
# RESPONSES
# ============================================================================

class WalletKitWallet(BaseModel):
    """A custodial wallet as returned by WalletKit."""
    id: str
    network: str
    address: str
    owner_id: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        extra = "allow"


class TransactionResponse(BaseModel):
    """A submitted or looked-up WalletKit transaction."""
    id: str
    status: str
    network: Optional[str] = None
    transaction_hash: Optional[str] = None
    explorer_url: Optional[str] = None

    class Config:
        extra = "allow"


class TokenBalance(BaseModel):
    """One row of GET /wallets/token-balances."""
    contract_address: str
    display_balance: str = "0"
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = None
    balance: Optional[str] = None

    class Config:
        extra = "allow"
