"""Fiat on/off-ramp client - Module Exports"""

from .client import FiatRampError, FiatRampService
from .schemas import (
    AccountType,
    Beneficiary,
    BeneficiaryDetails,
    CountryFiatLimit,
    CreateBeneficiaryPayload,
    Currency,
    OfframpTransactionPayload,
    OnrampTransactionPayload,
    PaymentChannel,
    PaymentMethods,
    PayoutNetwork,
    Quote,
    RampTransaction,
    Rate,
    TransactionFee,
    TransactionType,
)

__all__ = [
    "FiatRampService",
    "FiatRampError",
    "AccountType",
    "TransactionType",
    "Currency",
    "TransactionFee",
    "Rate",
    "Quote",
    "PaymentChannel",
    "CountryFiatLimit",
    "PaymentMethods",
    "PayoutNetwork",
    "BeneficiaryDetails",
    "CreateBeneficiaryPayload",
    "Beneficiary",
    "OnrampTransactionPayload",
    "OfframpTransactionPayload",
    "RampTransaction",
]
