"""Enumerations for the transaction domain model."""

from enum import Enum


class Action(str, Enum):
    """Transaction actions understood by the gateway."""

    AUTH_ONLY = "Authorization Only"
    NORMAL_AUTH = "Normal Authorization"
    POST_AUTH = "Post Authorization"
    VOID = "Void"
    AUTH_REVERSAL = "Auth Reversal"
    CREDIT = "Credit"

    @classmethod
    def _missing_(cls, value):
        # Callers historically pass "normal authorization" etc.
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None

    @property
    def is_follow_on(self) -> bool:
        return self in FOLLOW_ON_ACTIONS


FOLLOW_ON_ACTIONS = frozenset({Action.POST_AUTH, Action.VOID, Action.AUTH_REVERSAL, Action.CREDIT})


class TransactionType(str, Enum):
    """Payment instrument families."""

    CC = "CC"
    ECHECK = "ECHECK"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class AccountType(str, Enum):
    """Bank account kinds for ECHECK transactions."""

    PERSONAL_CHECKING = "Personal Checking"
    PERSONAL_SAVINGS = "Personal Savings"
    BUSINESS_CHECKING = "Business Checking"
    BUSINESS_SAVINGS = "Business Savings"


class FailureStatus(str, Enum):
    """Coarse failure classification attached to declines."""

    DECLINED = "declined"
    EXPIRED = "expired"
    NSF = "nsf"
    STOLEN = "stolen"
    BLACKLISTED = "blacklisted"
    UNKNOWN = "unknown"


class Outcome(str, Enum):
    """Tri-state result of a submitted transaction."""

    APPROVED = "approved"
    DECLINED = "declined"
    INDETERMINATE = "indeterminate"  # Failed before the vendor reached a decision


SUPPORTED_ACTIONS: dict[TransactionType, tuple[Action, ...]] = {
    TransactionType.CC: (
        Action.NORMAL_AUTH,
        Action.POST_AUTH,
        Action.AUTH_ONLY,
        Action.CREDIT,
        Action.VOID,
        Action.AUTH_REVERSAL,
    ),
    TransactionType.ECHECK: (
        Action.NORMAL_AUTH,
        Action.CREDIT,
        Action.VOID,
    ),
}
