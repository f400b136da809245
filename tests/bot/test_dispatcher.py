"""
Message Dispatcher Tests

Routing from message shape to handler. Vendor clients are mocked with
MagicMock(spec=...), so their async methods become AsyncMocks.
"""

from unittest.mock import MagicMock

import pytest

from bot.dispatcher import RATE_TARGET_CURRENCIES, MessageDispatcher
from services.fiat_ramp import FiatRampService, Rate
from services.users import SUPPORTED_ASSETS, AssetInfo, User, UserAsset, UserService, UserStore
from services.wallet_kit import WalletKitError, WalletKitService, WalletKitWallet
from transport.whatsapp import WhatsAppClient

BIZ_ID = "109876543210"
SENDER = "2348012345678"

ETH, USDC = SUPPORTED_ASSETS


@pytest.fixture
def whatsapp():
    return MagicMock(spec=WhatsAppClient)


@pytest.fixture
def users():
    return MagicMock(spec=UserService)


@pytest.fixture
def fiat_ramp():
    return MagicMock(spec=FiatRampService)


@pytest.fixture
def dispatcher(whatsapp, users, fiat_ramp):
    return MessageDispatcher(whatsapp=whatsapp, users=users, fiat_ramp=fiat_ramp)


@pytest.fixture
def wallet_assets():
    return [UserAsset(asset=ETH, address="0xabc"), UserAsset(asset=USDC, address="0xdef")]


class TestTextMessages:
    @pytest.mark.asyncio
    async def test_unknown_user_gets_create_wallet_prompt(
        self, dispatcher, whatsapp, users, payloads, make_message
    ):
        users.get_user.return_value = None

        await dispatcher.message_type_check(make_message(payloads.text("hi")), BIZ_ID, "Ada")

        users.get_user.assert_awaited_once_with(SENDER)
        whatsapp.create_wallet_message.assert_awaited_once_with(BIZ_ID, "Ada", SENDER)
        whatsapp.list_wallet_address_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_known_user_gets_wallet_list(
        self, dispatcher, whatsapp, users, wallet_assets, payloads, make_message
    ):
        users.get_user.return_value = User(phone_number=SENDER, display_name="Ada")
        users.get_user_wallet_assets_list.return_value = wallet_assets

        await dispatcher.message_type_check(make_message(payloads.text("hello")), BIZ_ID, "Ada")

        whatsapp.list_wallet_address_message.assert_awaited_once_with(
            BIZ_ID, "Ada", SENDER, wallet_assets, "old_account"
        )
        whatsapp.create_wallet_message.assert_not_awaited()

    @pytest.mark.parametrize("body", ["rates", "Rates", "  RATES  "])
    @pytest.mark.asyncio
    async def test_rates_command(self, dispatcher, whatsapp, users, fiat_ramp, body, payloads, make_message):
        rates = [Rate(code="NGN", buy=1600, sell=1550)]
        fiat_ramp.get_multiple_rates.return_value = rates

        await dispatcher.message_type_check(make_message(payloads.text(body)), BIZ_ID, "Ada")

        fiat_ramp.get_multiple_rates.assert_awaited_once_with(RATE_TARGET_CURRENCIES)
        whatsapp.rates_message.assert_awaited_once_with(BIZ_ID, SENDER, rates)
        users.get_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rates_is_exact_match(self, dispatcher, fiat_ramp, users, payloads, make_message):
        users.get_user.return_value = None

        await dispatcher.message_type_check(make_message(payloads.text("rates please")), BIZ_ID, "Ada")

        fiat_ramp.get_multiple_rates.assert_not_awaited()


class TestCreateWalletButton:
    @pytest.mark.asyncio
    async def test_new_user(self, dispatcher, whatsapp, users, wallet_assets, payloads, make_message):
        users.create_user.return_value = User(phone_number=SENDER, display_name="Ada")
        users.create_user_wallets.return_value = wallet_assets

        await dispatcher.message_type_check(
            make_message(payloads.button("create-wallet")), BIZ_ID, "Ada"
        )

        users.create_user.assert_awaited_once_with(SENDER, "Ada")
        users.create_user_wallets.assert_awaited_once_with(SENDER)
        whatsapp.list_wallet_address_message.assert_awaited_once_with(
            BIZ_ID, "Ada", SENDER, wallet_assets, "new_account"
        )

    @pytest.mark.asyncio
    async def test_existing_user_is_not_recreated(
        self, dispatcher, whatsapp, users, wallet_assets, payloads, make_message
    ):
        users.create_user.return_value = None
        users.ensure_user_wallets.return_value = wallet_assets

        await dispatcher.message_type_check(
            make_message(payloads.button("create-wallet")), BIZ_ID, "Ada"
        )

        users.create_user_wallets.assert_not_awaited()
        users.ensure_user_wallets.assert_awaited_once_with(SENDER)
        whatsapp.list_wallet_address_message.assert_awaited_once_with(
            BIZ_ID, "Ada", SENDER, wallet_assets, "old_account"
        )

    @pytest.mark.asyncio
    async def test_wallet_creation_failure_propagates(self, dispatcher, whatsapp, users, payloads, make_message):
        users.create_user.return_value = User(phone_number=SENDER, display_name="Ada")
        users.create_user_wallets.side_effect = RuntimeError("WalletKit down")

        with pytest.raises(RuntimeError):
            await dispatcher.message_type_check(
                make_message(payloads.button("create-wallet")), BIZ_ID, "Ada"
            )

        whatsapp.list_wallet_address_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_retry_after_wallet_outage_creates_wallets(
        self, whatsapp, fiat_ramp, payloads, make_message
    ):
        """A second "Create wallet" press finishes what a failed first press started."""
        wallet_kit = MagicMock(spec=WalletKitService)
        users = UserService(store=UserStore(), wallet_kit=wallet_kit)
        dispatcher = MessageDispatcher(whatsapp=whatsapp, users=users, fiat_ramp=fiat_ramp)
        button = make_message(payloads.button("create-wallet"))

        wallet_kit.create_user_wallet.side_effect = WalletKitError("WalletKit returned 503", status_code=503)
        with pytest.raises(WalletKitError):
            await dispatcher.message_type_check(button, BIZ_ID, "Ada")

        async def create(params):
            network = params["network"]
            return WalletKitWallet(id=f"wal_{network}", network=network, address=f"0x{network}")

        wallet_kit.create_user_wallet.reset_mock()
        wallet_kit.create_user_wallet.side_effect = create
        wallet_kit.get_user_wallets.return_value = []

        await dispatcher.message_type_check(button, BIZ_ID, "Ada")

        assert wallet_kit.create_user_wallet.await_count == 2
        sent_assets = whatsapp.list_wallet_address_message.call_args.args[3]
        assert [a.address for a in sent_assets] == ["0xethereum", "0xbase"]
        assert whatsapp.list_wallet_address_message.call_args.args[4] == "old_account"


class TestAssetButtons:
    @pytest.mark.parametrize("asset_id", ["explore-eth", "explore-usdc-base"])
    @pytest.mark.asyncio
    async def test_explore_shows_wallet_details(
        self, dispatcher, whatsapp, users, asset_id, payloads, make_message
    ):
        info = AssetInfo(asset=ETH, address="0xabc", balance="0.5")
        users.get_user_asset_info.return_value = info

        await dispatcher.message_type_check(make_message(payloads.button(asset_id)), BIZ_ID, "Ada")

        users.get_user_asset_info.assert_awaited_once_with(SENDER, asset_id)
        whatsapp.wallet_details_message.assert_awaited_once_with(BIZ_ID, SENDER, info)

    @pytest.mark.asyncio
    async def test_sell_lists_beneficiaries(self, dispatcher, whatsapp, fiat_ramp, payloads, make_message):
        fiat_ramp.get_beneficiaries.return_value = []

        await dispatcher.message_type_check(
            make_message(payloads.button("sell:explore-usdc-base")), BIZ_ID, "Ada"
        )

        fiat_ramp.get_beneficiaries.assert_awaited_once_with(SENDER, "NG", "bank")
        whatsapp.list_beneficiary_message.assert_awaited_once_with(BIZ_ID, SENDER, [])

    @pytest.mark.asyncio
    async def test_unknown_button_sends_nothing(self, dispatcher, whatsapp, users, fiat_ramp, payloads, make_message):
        await dispatcher.message_type_check(make_message(payloads.button("mystery")), BIZ_ID, "Ada")

        assert whatsapp.method_calls == []
        assert users.method_calls == []
        assert fiat_ramp.method_calls == []


class TestOtherMessages:
    @pytest.mark.asyncio
    async def test_list_reply_is_logged_only(self, dispatcher, whatsapp, payloads, make_message):
        await dispatcher.message_type_check(make_message(payloads.list("rec_1")), BIZ_ID, "Ada")

        assert whatsapp.method_calls == []

    @pytest.mark.asyncio
    async def test_unsupported_type_ignored(self, dispatcher, whatsapp, users, make_message):
        image = make_message({
            "from": SENDER,
            "id": "wamid.image_1",
            "type": "image",
            "image": {"id": "media_1", "mime_type": "image/jpeg"},
        })

        await dispatcher.message_type_check(image, BIZ_ID, "Ada")

        assert whatsapp.method_calls == []
        assert users.method_calls == []

    @pytest.mark.asyncio
    async def test_interactive_without_reply_ignored(self, dispatcher, whatsapp, make_message):
        message = make_message({
            "from": SENDER,
            "id": "wamid.nfm_1",
            "type": "interactive",
            "interactive": {"type": "nfm_reply"},
        })

        await dispatcher.message_type_check(message, BIZ_ID, "Ada")

        assert whatsapp.method_calls == []
