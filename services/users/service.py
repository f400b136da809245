"""
User service

Joins the local user record with the user's WalletKit wallets. The phone
number is both the user key and the WalletKit owner id.
"""

import asyncio
import logging
from typing import Optional, Sequence

from services.wallet_kit import SUPPORTED_CHAINS, WalletKitError, WalletKitService, WalletKitWallet

from .assets import SUPPORTED_ASSETS, get_asset
from .store import UserStore
from .types import AssetInfo, User, UserAsset

logger = logging.getLogger(__name__)


class UserService:
    """User records plus wallet lookups for the dispatcher."""

    def __init__(self, store: UserStore, wallet_kit: WalletKitService):
        self.store = store
        self.wallet_kit = wallet_kit

    async def get_user(self, phone_number: str) -> Optional[User]:
        return self.store.get(phone_number)

    async def create_user(self, phone_number: str, display_name: str) -> Optional[User]:
        """Register a user; None if the phone number is already registered."""
        user = self.store.create(phone_number, display_name)
        if user:
            logger.info("User created", extra={"phone_number": phone_number})
        return user

    async def create_user_wallets(self, phone_number: str) -> list[UserAsset]:
        """
        Create one WalletKit wallet per supported chain, in parallel.

        Any creation failure propagates; ensure_user_wallets completes the
        set on the next attempt.
        """
        wallets = await self._create_wallets(phone_number, SUPPORTED_CHAINS)
        return _wallets_to_assets(wallets)

    async def ensure_user_wallets(self, phone_number: str) -> list[UserAsset]:
        """
        Existing wallets, plus a new one for every chain still without a wallet.
        """
        wallets = await self.wallet_kit.get_user_wallets(phone_number)
        present = {wallet.network for wallet in wallets}
        missing = [network for network in SUPPORTED_CHAINS if network not in present]

        if missing:
            logger.info(
                f"Creating missing wallets for {phone_number}: {missing}",
                extra={"phone_number": phone_number, "networks": missing},
            )
            wallets = [*wallets, *await self._create_wallets(phone_number, missing)]

        return _wallets_to_assets(wallets)

    async def _create_wallets(
        self, phone_number: str, networks: Sequence[str]
    ) -> list[WalletKitWallet]:
        return list(await asyncio.gather(
            *(
                self.wallet_kit.create_user_wallet({"network": network, "owner_id": phone_number})
                for network in networks
            )
        ))

    async def get_user_wallet_assets_list(self, phone_number: str) -> list[UserAsset]:
        wallets = await self.wallet_kit.get_user_wallets(phone_number)
        return _wallets_to_assets(wallets)

    async def get_user_asset_info(self, phone_number: str, asset_id: str) -> Optional[AssetInfo]:
        """
        Address and balance of one asset.

        Raises:
            UnknownAssetError: asset_id is not supported

        Returns:
            None when the user has no wallet on the asset's network
        """
        asset = get_asset(asset_id)

        try:
            wallet = await self.wallet_kit.get_user_wallet_by_network(phone_number, asset.network)
        except WalletKitError as e:
            logger.info(
                f"No {asset.network} wallet for {phone_number}: {e}",
                extra={"phone_number": phone_number, "asset_id": asset.asset_id},
            )
            return None

        balance = await self.wallet_kit.get_balance(
            wallet.address, asset.network, asset.contract_address
        )
        return AssetInfo(asset=asset, address=wallet.address, balance=balance)


def _wallets_to_assets(wallets: list[WalletKitWallet]) -> list[UserAsset]:
    """Expand wallets into per-asset rows, in SUPPORTED_ASSETS order."""
    address_by_network = {wallet.network: wallet.address for wallet in wallets}

    assets = []
    for asset in SUPPORTED_ASSETS:
        address = address_by_network.get(asset.network)
        if address:
            assets.append(UserAsset(asset=asset, address=address))
    return assets

