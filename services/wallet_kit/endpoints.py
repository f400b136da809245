"""WalletKit REST endpoint paths, relative to WALLET_KIT_API_URL."""

WALLETS = "/wallets"
GET_WALLET_BY_OWNER_ID = "/wallets/by-owner-id"
GET_TOKEN_BALANCES = "/wallets/token-balances"
SIGN_AND_SEND_TRANSACTION = "/transactions/sign-and-send"
TRANSFER_TOKEN = "/transactions/transfer-token"
TRANSACTION_STATUS_BY_ID = "/transactions/by-id"
