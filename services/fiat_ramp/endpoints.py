"""Fiat ramp REST endpoint paths, relative to FIAT_RAMP_API_URL."""

CURRENCIES = "/currencies"
FEES = "/fees"
RATES = "/rates"
QUOTES = "/quotes"
CHANNELS = "/channels"
NETWORKS = "/networks"
BENEFICIARIES = "/beneficiaries"
HOT_WALLETS = "/hot-wallets"
ONRAMP = "/onramp"
OFFRAMP = "/offramp"
TRANSACTIONS = "/transactions"
