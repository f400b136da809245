"""
WhatsApp Message Templates

Builds the outbound message bodies the bot sends. Pure functions: no I/O.
Cloud API limits are applied here so callers never trip them:
- reply buttons: at most 3, title <= 20 chars
- list rows: at most 10, title <= 24 chars, description <= 72 chars
"""

from decimal import Decimal
from typing import Optional, Sequence

from services.fiat_ramp import Beneficiary, Rate
from services.users import SELL_PREFIX, AccountState, AssetInfo, UserAsset

from .schemas import TextContent, WhatsAppInteractiveMessage, WhatsAppTextMessage

MAX_BUTTONS = 3
MAX_BUTTON_TITLE = 20
MAX_LIST_ROWS = 10
MAX_ROW_TITLE = 24
MAX_ROW_DESCRIPTION = 72

CREATE_WALLET_BUTTON_ID = "create-wallet"

RATES_UNAVAILABLE = "Conversion rates are unavailable right now. Please try again in a few minutes."


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def format_amount(value: float | str) -> str:
    """1500.0 -> "1500", 1612.45 -> "1612.45"."""
    return format(Decimal(str(value)).normalize(), "f")


def mask_account_number(account_number: str) -> str:
    return "****" + account_number[-4:] if len(account_number) > 4 else account_number


# ============================================================================
# GENERIC BUILDERS
# ============================================================================

def text_message(to: str, body: str, preview_url: bool = False) -> WhatsAppTextMessage:
    return WhatsAppTextMessage(to=to, text=TextContent(body=body, preview_url=preview_url))


def button_message(
    to: str,
    body: str,
    buttons: Sequence[tuple[str, str]],
    header: Optional[str] = None,
    footer: Optional[str] = None,
) -> WhatsAppInteractiveMessage:
    """Reply-button message; `buttons` is a list of (id, title)."""
    interactive = {
        "type": "button",
        "body": {"text": body},
        "action": {
            "buttons": [
                {"type": "reply", "reply": {"id": button_id, "title": _clip(title, MAX_BUTTON_TITLE)}}
                for button_id, title in buttons[:MAX_BUTTONS]
            ]
        },
    }
    if header:
        interactive["header"] = {"type": "text", "text": header}
    if footer:
        interactive["footer"] = {"text": footer}

    return WhatsAppInteractiveMessage(to=to, interactive=interactive)


def list_message(
    to: str,
    body: str,
    button_label: str,
    section_title: str,
    rows: Sequence[tuple[str, str, Optional[str]]],
) -> WhatsAppInteractiveMessage:
    """Single-section list message; `rows` is a list of (id, title, description)."""
    section_rows = []
    for row_id, title, description in rows[:MAX_LIST_ROWS]:
        row = {"id": row_id, "title": _clip(title, MAX_ROW_TITLE)}
        if description:
            row["description"] = _clip(description, MAX_ROW_DESCRIPTION)
        section_rows.append(row)

    return WhatsAppInteractiveMessage(
        to=to,
        interactive={
            "type": "list",
            "body": {"text": body},
            "action": {
                "button": _clip(button_label, MAX_BUTTON_TITLE),
                "sections": [{"title": _clip(section_title, MAX_ROW_TITLE), "rows": section_rows}],
            },
        },
    )


# ============================================================================
# BOT TEMPLATES
# ============================================================================

def create_wallet_message(to: str, display_name: str) -> WhatsAppInteractiveMessage:
    body = (
        f"Hi {display_name} 👋\n\n"
        "You don't have a wallet yet. Create one to receive, hold and sell "
        "crypto right here in WhatsApp."
    )
    return button_message(to, body, [(CREATE_WALLET_BUTTON_ID, "Create wallet")])


def wallet_address_list_message(
    to: str,
    display_name: str,
    assets: Sequence[UserAsset],
    account_state: AccountState,
) -> WhatsAppInteractiveMessage:
    if account_state == "new_account":
        greeting = f"Welcome {display_name}! 🎉 Your wallets are ready."
    else:
        greeting = f"Welcome back {display_name}!"

    lines = [greeting, ""]
    for user_asset in assets:
        lines.append(f"*{user_asset.asset.symbol}* on {user_asset.asset.network}")
        lines.append(user_asset.address)
        lines.append("")
    lines.append("Tap an asset to see its balance.")

    buttons = [
        (user_asset.asset.asset_id, f"{user_asset.asset.symbol} ({user_asset.asset.network.title()})")
        for user_asset in assets
    ]
    return button_message(to, "\n".join(lines), buttons, footer="Wallet addresses")


def wallet_details_message(to: str, asset_info: AssetInfo) -> WhatsAppInteractiveMessage:
    asset = asset_info.asset
    body = (
        f"*{asset.name}* ({asset.symbol})\n\n"
        f"Network: {asset.network}\n"
        f"Address: {asset_info.address}\n"
        f"Balance: {asset_info.balance} {asset.symbol}"
    )
    return button_message(to, body, [(SELL_PREFIX + asset.asset_id, f"Sell {asset.symbol}")])


def missing_wallet_message(to: str) -> WhatsAppTextMessage:
    return text_message(to, "We couldn't find a wallet for that asset yet.")


def beneficiary_list_message(
    to: str, beneficiaries: Sequence[Beneficiary]
) -> WhatsAppInteractiveMessage | WhatsAppTextMessage:
    if not beneficiaries:
        return text_message(
            to,
            "You have no saved bank accounts yet. Add a beneficiary to sell your crypto for cash.",
        )

    rows = []
    for beneficiary in beneficiaries:
        details = beneficiary.beneficiary
        description = " • ".join(
            part for part in (details.bank_name, mask_account_number(details.account_number)) if part
        )
        rows.append((beneficiary.id, details.account_name, description))

    return list_message(
        to,
        "Choose the bank account that should receive the payout.",
        button_label="Choose account",
        section_title="Bank accounts",
        rows=rows,
    )


def rates_message(to: str, rates: Sequence[Rate]) -> WhatsAppTextMessage:
    if not rates:
        return text_message(to, RATES_UNAVAILABLE)

    blocks = [
        f"==================\n{rate.code}/USDC\nBuy: {format_amount(rate.buy)}\nSell: {format_amount(rate.sell)}"
        for rate in rates
    ]
    return text_message(to, "Conversion Rates\n\n" + "\n\n".join(blocks))
