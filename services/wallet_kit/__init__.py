"""WalletKit custodial wallet client - Module Exports"""

from .client import WalletKitError, WalletKitService
from .schemas import (
    SUPPORTED_CHAINS,
    CreateWalletKitWalletParams,
    SignAndSendTransactionParams,
    SupportedChain,
    TokenBalance,
    TransactionResponse,
    TransferTokenParams,
    WalletKitWallet,
)

__all__ = [
    "WalletKitService",
    "WalletKitError",
    "SUPPORTED_CHAINS",
    "SupportedChain",
    "CreateWalletKitWalletParams",
    "SignAndSendTransactionParams",
    "TransferTokenParams",
    "WalletKitWallet",
    "TransactionResponse",
    "TokenBalance",
]
