"""User records and wallet lookups - Module Exports"""

from .assets import (
    EXPLORE_ASSET_IDS,
    SELL_ASSET_IDS,
    SELL_PREFIX,
    SUPPORTED_ASSETS,
    get_asset,
)
from .service import UserService
from .store import UserStore
from .types import (
    AccountState,
    AssetInfo,
    SupportedAsset,
    UnknownAssetError,
    User,
    UserAsset,
)

__all__ = [
    "UserService",
    "UserStore",
    "User",
    "UserAsset",
    "AssetInfo",
    "AccountState",
    "SupportedAsset",
    "UnknownAssetError",
    "SUPPORTED_ASSETS",
    "EXPLORE_ASSET_IDS",
    "SELL_ASSET_IDS",
    "SELL_PREFIX",
    "get_asset",
]
