"""
Configuration management for the wallet bot.

Loads environment variables from .env file and provides typed access to configuration.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

logger = logging.getLogger(__name__)


class Config:
    """Configuration class for the wallet bot."""

    # Server
    PORT = int(os.getenv("PORT", "5123"))
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # WalletKit (custodial wallets)
    WALLET_KIT_PROJECT_ID = os.getenv("WALLET_KIT_PROJECT_ID", "")
    WALLET_KIT_API_TOKEN = os.getenv("WALLET_KIT_API_TOKEN", "")
    WALLET_KIT_API_URL = os.getenv("WALLET_KIT_API_URL", "")

    # Fiat on/off-ramp provider
    FIAT_RAMP_API_URL = os.getenv("FIAT_RAMP_API_URL", "")
    FIAT_RAMP_API_KEY = os.getenv("FIAT_RAMP_API_KEY", "")

    # WhatsApp Cloud API
    WHATSAPP_ACCESS_TOKEN = os.getenv("WHATSAPP_ACCESS_TOKEN", "")
    WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v19.0")
    WHATSAPP_GRAPH_URL = os.getenv("WHATSAPP_GRAPH_URL", "https://graph.facebook.com")
    WHATSAPP_APP_SECRET = os.getenv("WHATSAPP_APP_SECRET", "")
    WEBHOOK_VERIFY_TOKEN = os.getenv("WEBHOOK_VERIFY_TOKEN", "")

    # Database
    USER_DB_PATH = os.getenv("USER_DB_PATH", "./users.db")

    # Outbound HTTP
    HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "30"))

    REQUIRED = ["WALLET_KIT_PROJECT_ID", "WALLET_KIT_API_TOKEN", "WALLET_KIT_API_URL"]

    @classmethod
    def missing(cls) -> list[str]:
        """Names of required settings that are unset or blank."""
        return [key for key in cls.REQUIRED if not str(getattr(cls, key, "")).strip()]

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        missing = cls.missing()
        if missing:
            for key in missing:
                logger.warning(f"Please set {key} in .env")
            return False

        if not cls.WALLET_KIT_API_URL.startswith(("http://", "https://")):
            logger.warning("WALLET_KIT_API_URL must be an http(s) URL")
            return False

        return True
