"""
Message dispatcher

Routes one inbound WhatsApp message to the matching handler. Stateless:
every decision is made from the message itself plus a user-record lookup.

Routing:
  text "rates"                     → conversion rates
  text (anything else)             → wallet list, or create-wallet prompt
  button "create-wallet"           → create user + wallets
  button "explore-<asset>"         → wallet details for that asset
  button "sell:explore-<asset>"    → saved bank beneficiaries
  list_reply                       → logged only
"""

import logging

from config import Config
from services.fiat_ramp import FiatRampService
from services.users import EXPLORE_ASSET_IDS, SELL_ASSET_IDS, UserService, UserStore
from services.wallet_kit import WalletKitService
from transport.whatsapp import InboundMessage, WhatsAppClient
from transport.whatsapp.messages import CREATE_WALLET_BUTTON_ID

logger = logging.getLogger(__name__)

RATES_COMMAND = "rates"
RATE_TARGET_CURRENCIES = ["NGN", "KES", "GHS", "ZAR", "UGX"]

BENEFICIARY_COUNTRY = "NG"
BENEFICIARY_ACCOUNT_TYPE = "bank"


class MessageDispatcher:
    """Flat if/else router from message shape to handler."""

    def __init__(
        self,
        whatsapp: WhatsAppClient,
        users: UserService,
        fiat_ramp: FiatRampService,
    ):
        self.whatsapp = whatsapp
        self.users = users
        self.fiat_ramp = fiat_ramp

    async def message_type_check(
        self,
        message: InboundMessage,
        business_phone_number_id: str,
        display_name: str,
    ) -> None:
        logger.info(
            f"message : {message.type}",
            extra={"message_id": message.id, "message_type": message.type},
        )

        if message.type == "text":
            await self._handle_text(message, business_phone_number_id, display_name)
        elif message.type == "interactive":
            await self._handle_interactive(message, business_phone_number_id, display_name)
        else:
            logger.info(f"Unsupported message type: {message.type}")

    async def _handle_text(
        self,
        message: InboundMessage,
        business_phone_number_id: str,
        display_name: str,
    ) -> None:
        sender = message.from_
        body = message.text.body if message.text else ""

        if body.strip().lower() == RATES_COMMAND:
            await self.rates_command_handler(sender, business_phone_number_id)
            return

        user = await self.users.get_user(sender)

        if user:
            user_wallets = await self.users.get_user_wallet_assets_list(sender)
            await self.whatsapp.list_wallet_address_message(
                business_phone_number_id,
                display_name,
                sender,
                user_wallets,
                "old_account",
            )
        else:
            await self.whatsapp.create_wallet_message(
                business_phone_number_id,
                display_name,
                sender,
            )

    async def _handle_interactive(
        self,
        message: InboundMessage,
        business_phone_number_id: str,
        display_name: str,
    ) -> None:
        interactive = message.interactive
        logger.info(
            "message-interactive",
            extra={"interactive": interactive.model_dump() if interactive else None},
        )

        if interactive and interactive.type == "button_reply" and interactive.button_reply:
            await self._handle_button_reply(
                message.from_,
                interactive.button_reply.id,
                business_phone_number_id,
                display_name,
            )
        elif interactive and interactive.type == "list_reply" and interactive.list_reply:
            logger.info(
                f"List selection {interactive.list_reply.id} from {message.from_}",
                extra={"list_reply_id": interactive.list_reply.id},
            )
        else:
            logger.info("No interactive message found or type is not 'button_reply'.")

    async def _handle_button_reply(
        self,
        sender: str,
        button_id: str,
        business_phone_number_id: str,
        display_name: str,
    ) -> None:
        if button_id == CREATE_WALLET_BUTTON_ID:
            created_user = await self.users.create_user(sender, display_name)

            if created_user:
                user_assets = await self.users.create_user_wallets(sender)
                account_state = "new_account"
            else:
                logger.info(f"User {sender} already registered, completing wallets")
                user_assets = await self.users.ensure_user_wallets(sender)
                account_state = "old_account"

            await self.whatsapp.list_wallet_address_message(
                business_phone_number_id,
                display_name,
                sender,
                user_assets,
                account_state,
            )

        elif button_id in EXPLORE_ASSET_IDS:
            asset_info = await self.users.get_user_asset_info(sender, button_id)
            await self.whatsapp.wallet_details_message(
                business_phone_number_id,
                sender,
                asset_info,
            )

        elif button_id in SELL_ASSET_IDS:
            beneficiaries = await self.fiat_ramp.get_beneficiaries(
                sender,
                BENEFICIARY_COUNTRY,
                BENEFICIARY_ACCOUNT_TYPE,
            )
            await self.whatsapp.list_beneficiary_message(
                business_phone_number_id,
                sender,
                beneficiaries,
            )

        else:
            logger.info(f"Unrecognized button id: {button_id}")

    async def rates_command_handler(
        self, user_phone_number: str, business_phone_number_id: str
    ) -> None:
        rates = await self.fiat_ramp.get_multiple_rates(RATE_TARGET_CURRENCIES)
        await self.whatsapp.rates_message(business_phone_number_id, user_phone_number, rates)


def create_dispatcher() -> MessageDispatcher:
    """Build a dispatcher wired to the configured vendor APIs and user DB."""
    return MessageDispatcher(
        whatsapp=WhatsAppClient(),
        users=UserService(store=UserStore(Config.USER_DB_PATH), wallet_kit=WalletKitService()),
        fiat_ramp=FiatRampService(),
    )
