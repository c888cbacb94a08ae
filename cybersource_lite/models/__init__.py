from cybersource_lite.models.enums import (
    AccountType,
    Action,
    FailureStatus,
    Outcome,
    SUPPORTED_ACTIONS,
    TransactionType,
)
from cybersource_lite.models.transaction import (
    Address,
    BankAccount,
    BillingAddress,
    Card,
    LineItem,
    RawResponse,
    TransactionRequest,
    TransactionResult,
)

__all__ = [
    "AccountType",
    "Action",
    "Address",
    "BankAccount",
    "BillingAddress",
    "Card",
    "FailureStatus",
    "LineItem",
    "Outcome",
    "RawResponse",
    "SUPPORTED_ACTIONS",
    "TransactionRequest",
    "TransactionResult",
    "TransactionType",
]
