"""
Typed transaction request and normalized result.

A TransactionRequest is validated when it is constructed: the instrument
kind must match the declared transaction type, the action must be one the
type supports, and authorizations must carry an instrument. Anything that
passes construction can be turned into an outbound document; the only check
left to the builder is whether a follow-on action has a reference to point at.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from cybersource_lite.errors import ValidationError
from cybersource_lite.models.enums import (
    AccountType,
    Action,
    FailureStatus,
    Outcome,
    SUPPORTED_ACTIONS,
    TransactionType,
)
from cybersource_lite.models.expiration import parse_expiration

logger = logging.getLogger("cybersource_lite.models")


class Address(BaseModel):
    """Shipping address block (``shipTo``)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = None  # Combined name, split when last_name is absent
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class BillingAddress(Address):
    """Billing block (``billTo``), which also carries customer identity fields."""

    ip: Optional[str] = None
    date_of_birth: Optional[str] = None
    drivers_license_number: Optional[str] = None
    drivers_license_state: Optional[str] = None
    ssn: Optional[str] = None


class Card(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["card"] = "card"
    number: str = Field(min_length=1)
    expiration: str  # MM/YY
    cvv2: Optional[str] = None

    @field_validator("number")
    @classmethod
    def _digits_only(cls, value: str) -> str:
        digits = value.replace(" ", "").replace("-", "")
        if not digits.isdigit():
            raise ValueError("card number must contain only digits")
        return digits

    @field_validator("expiration")
    @classmethod
    def _valid_expiration(cls, value: str) -> str:
        parse_expiration(value)
        return value.strip()


class BankAccount(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["bank_account"] = "bank_account"
    account_number: str = Field(min_length=1)
    routing_code: str = Field(min_length=1)
    account_type: Optional[AccountType] = None
    account_name: Optional[str] = None
    check_number: Optional[str] = None

    @field_validator("account_type", mode="before")
    @classmethod
    def _known_account_type(cls, value: Any) -> Any:
        if value is None or value == "" or isinstance(value, AccountType):
            return value or None
        try:
            return AccountType(value)
        except ValueError:
            # Unrecognized types are sent as personal checking ("C")
            logger.debug("Unrecognized account type %r, using %s", value, AccountType.PERSONAL_CHECKING.value)
            return AccountType.PERSONAL_CHECKING


Instrument = Annotated[Union[Card, BankAccount], Field(discriminator="kind")]

INSTRUMENT_KINDS = {
    TransactionType.CC: "card",
    TransactionType.ECHECK: "bank_account",
}


class LineItem(BaseModel):
    """One ``item`` element; every field is optional."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cost: Optional[Decimal] = None
    quantity: Optional[int] = None
    description: Optional[str] = None
    code: Optional[str] = None
    tax: Optional[Decimal] = None
    total_with_tax: Optional[Decimal] = None
    discount: Optional[Decimal] = None


class TransactionRequest(BaseModel):
    """Normalized input for one gateway call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    login: str = Field(min_length=1)
    password: str = Field(min_length=1)
    type: TransactionType
    action: Action
    instrument: Optional[Instrument] = None
    amount: Optional[Decimal] = Field(default=None, gt=0)
    currency: str = "USD"
    tax: Optional[Decimal] = None
    invoice_number: Optional[str] = None
    bill_to: BillingAddress = Field(default_factory=BillingAddress)
    ship_to: Optional[Address] = None
    products: list[LineItem] = Field(default_factory=list)
    order_number: Optional[str] = None  # Reference for follow-on actions
    recurring_billing: bool = False
    unlinked_credit: bool = False

    @model_validator(mode="after")
    def _check_combination(self) -> "TransactionRequest":
        if self.instrument is not None and self.instrument.kind != INSTRUMENT_KINDS[self.type]:
            raise ValueError(f"{self.instrument.kind} instrument cannot be used for a {self.type.value} transaction")

        if self.action not in SUPPORTED_ACTIONS[self.type]:
            raise ValueError(f"{self.action.value} is not supported for {self.type.value} transactions")

        if self.instrument is None and (not self.action.is_follow_on or self.unlinked_credit):
            needed = "a card" if self.type == TransactionType.CC else "a bank account"
            raise ValueError(f"{self.action.value} requires {needed}")

        if self.amount is None and self.action != Action.VOID:
            raise ValueError(f"{self.action.value} requires an amount")

        if self.unlinked_credit:
            if self.type != TransactionType.CC or self.action != Action.CREDIT:
                raise ValueError("unlinked_credit only applies to card credits")
            if self.order_number:
                raise ValueError("an unlinked credit cannot reference an order_number")

        return self

    @property
    def card(self) -> Optional[Card]:
        return self.instrument if isinstance(self.instrument, Card) else None

    @property
    def bank_account(self) -> Optional[BankAccount]:
        return self.instrument if isinstance(self.instrument, BankAccount) else None

    @classmethod
    def create(cls, **fields: Any) -> "TransactionRequest":
        """Construct a request, raising this package's ValidationError on bad input."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from None

    @classmethod
    def from_content(cls, **content: Any) -> "TransactionRequest":
        """
        Build a request from the flat field bag used by generic payment
        frameworks (``card_number``, ``expiration``, ``ship_city``, ...).
        """
        content = {k: v for k, v in content.items() if v is not None and v != ""}
        unused = set(content) - _KNOWN_CONTENT_FIELDS
        if unused:
            logger.debug("Ignoring content fields: %s", ", ".join(sorted(unused)))

        instrument: Optional[dict[str, Any]] = None
        if content.get("card_number"):
            instrument = {
                "kind": "card",
                "number": str(content["card_number"]),
                "expiration": content.get("expiration", ""),
                "cvv2": _text(content.get("cvv2")),
            }
        elif content.get("account_number"):
            instrument = {
                "kind": "bank_account",
                "account_number": str(content["account_number"]),
                "routing_code": str(content.get("routing_code", "")),
                "account_type": content.get("account_type"),
                "account_name": content.get("account_name"),
                "check_number": _text(content.get("check_number")),
            }

        bill_to = {dst: content[src] for src, dst in _BILL_TO_FIELDS.items() if src in content}
        ship_to = {dst: content[src] for src, dst in _SHIP_TO_FIELDS.items() if src in content}
        products = [
            {dst: item[src] for src, dst in _ITEM_FIELDS.items() if item.get(src) is not None}
            for item in content.get("products") or []
        ]

        fields: dict[str, Any] = {
            "login": content.get("login", ""),
            "password": content.get("password", ""),
            "type": content.get("type"),
            "action": content.get("action"),
            "instrument": instrument,
            "amount": content.get("amount"),
            "currency": content.get("currency", "USD"),
            "tax": content.get("tax"),
            "invoice_number": _text(content.get("invoice_number")),
            "bill_to": bill_to,
            "ship_to": ship_to or None,
            "products": products,
            "order_number": _text(content.get("order_number")),
            "recurring_billing": _flag(content.get("recurring_billing")),
            "unlinked_credit": _flag(content.get("unlinked_credit")),
        }
        return cls.create(**fields)


_BILL_TO_FIELDS = {
    "name": "name",
    "first_name": "first_name",
    "last_name": "last_name",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "country": "country",
    "company": "company",
    "phone": "phone",
    "email": "email",
    "ip": "ip",
    "license_dob": "date_of_birth",
    "license_num": "drivers_license_number",
    "license_state": "drivers_license_state",
    "customer_ssn": "ssn",
}

_SHIP_TO_FIELDS = {f"ship_{name}": name for name in Address.model_fields}

_ITEM_FIELDS = {
    "cost": "cost",
    "quantity": "quantity",
    "description": "description",
    "code": "code",
    "tax": "tax",
    "totalwithtax": "total_with_tax",
    "discount": "discount",
}

_KNOWN_CONTENT_FIELDS = (
    set(_BILL_TO_FIELDS)
    | set(_SHIP_TO_FIELDS)
    | {
        "login", "password", "type", "action", "amount", "currency", "tax",
        "invoice_number", "order_number", "recurring_billing", "unlinked_credit",
        "products", "card_number", "expiration", "cvv2", "account_number",
        "routing_code", "account_type", "account_name", "check_number",
    }
)


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().upper() in {"YES", "Y", "TRUE", "1"}
    return bool(value)


def _describe(error: PydanticValidationError) -> str:
    # Never echo input values: they may hold card numbers or passwords.
    parts = []
    for err in error.errors(include_input=False, include_url=False):
        loc = ".".join(str(p) for p in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


@dataclass
class RawResponse:
    """What came back over the wire, uninterpreted."""

    status: int
    headers: dict[str, str]
    body: str


@dataclass
class TransactionResult:
    """
    Normalized outcome of one gateway call.

    ``outcome`` starts as DECLINED: a reply that cannot be interpreted
    leaves the transaction unsuccessful rather than unknown.
    """

    outcome: Outcome = Outcome.DECLINED
    result_code: Optional[str] = None
    order_number: Optional[str] = None
    authorization: Optional[str] = None
    avs_code: Optional[str] = None
    cvv2_response: Optional[str] = None
    error_message: Optional[str] = ""
    failure_status: Optional[FailureStatus] = None
    server_request: str = ""  # Scrubbed, safe to log
    server_request_dangerous: str = ""
    server_response: str = ""  # Scrubbed, safe to log
    server_response_dangerous: str = ""
    response_code: Optional[int] = None  # HTTP status
    response_headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> Optional[bool]:
        """True when approved, False when declined, None when indeterminate."""
        if self.outcome == Outcome.INDETERMINATE:
            return None
        return self.outcome == Outcome.APPROVED
