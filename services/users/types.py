"""
User service types.

Plain records passed between the user service, the dispatcher and the
message templates.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

AccountState = Literal["new_account", "old_account"]


class UnknownAssetError(ValueError):
    """Asset id is not one of SUPPORTED_ASSETS."""
    pass


@dataclass(frozen=True)
class SupportedAsset:
    """A token the bot can show and sell."""

    asset_id: str                     # Button id, e.g. "explore-eth"
    symbol: str                       # ETH, USDC
    name: str
    network: str                      # WalletKit network name
    contract_address: str             # Token contract, zero address for native


@dataclass
class User:
    """A bot user, keyed by WhatsApp phone number."""

    phone_number: str
    display_name: str
    created_at: Optional[datetime] = None


@dataclass
class UserAsset:
    """One supported asset together with the user's wallet address for it."""

    asset: SupportedAsset
    address: str


@dataclass
class AssetInfo:
    """Wallet details for a single asset, including its balance."""

    asset: SupportedAsset
    address: str
    balance: str
