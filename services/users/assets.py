"""Supported assets and the button ids that refer to them."""

from .types import SupportedAsset, UnknownAssetError

NATIVE_TOKEN_ADDRESS = "0x0000000000000000000000000000000000000000"
USDC_BASE_ADDRESS = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"

SELL_PREFIX = "sell:"

SUPPORTED_ASSETS: tuple[SupportedAsset, ...] = (
    SupportedAsset(
        asset_id="explore-eth",
        symbol="ETH",
        name="Ethereum",
        network="ethereum",
        contract_address=NATIVE_TOKEN_ADDRESS,
    ),
    SupportedAsset(
        asset_id="explore-usdc-base",
        symbol="USDC",
        name="USD Coin (Base)",
        network="base",
        contract_address=USDC_BASE_ADDRESS,
    ),
)

EXPLORE_ASSET_IDS = tuple(asset.asset_id for asset in SUPPORTED_ASSETS)
SELL_ASSET_IDS = tuple(SELL_PREFIX + asset_id for asset_id in EXPLORE_ASSET_IDS)


def get_asset(asset_id: str) -> SupportedAsset:
    """Look up an asset by id; a "sell:" prefix is accepted."""
    if asset_id.startswith(SELL_PREFIX):
        asset_id = asset_id[len(SELL_PREFIX):]

    for asset in SUPPORTED_ASSETS:
        if asset.asset_id == asset_id:
            return asset
    raise UnknownAssetError(f"Unsupported asset: {asset_id}")
