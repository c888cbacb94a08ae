"""Tests for request construction and validation."""

from decimal import Decimal

import pytest

from cybersource_lite.errors import ValidationError
from cybersource_lite.models import (
    AccountType,
    Action,
    BankAccount,
    Card,
    Outcome,
    TransactionRequest,
    TransactionResult,
    TransactionType,
)

from tests.conftest import CARD_NUMBER, PASSWORD


class TestFromContent:
    def test_card_request(self, card_content):
        request = TransactionRequest.from_content(**card_content)
        assert request.type == TransactionType.CC
        assert request.action == Action.AUTH_ONLY
        assert isinstance(request.instrument, Card)
        assert request.card.number == CARD_NUMBER
        assert request.amount == Decimal("49.95")
        assert request.currency == "USD"
        assert request.bill_to.name == "Tofu Beast"

    def test_echeck_request(self, echeck_content):
        request = TransactionRequest.from_content(**echeck_content)
        assert isinstance(request.instrument, BankAccount)
        assert request.bank_account.account_type == AccountType.PERSONAL_SAVINGS
        assert request.card is None

    def test_action_is_case_insensitive(self, card_content):
        card_content["action"] = "normal authorization"
        assert TransactionRequest.from_content(**card_content).action == Action.NORMAL_AUTH

    def test_type_is_case_insensitive(self, card_content):
        card_content["type"] = "cc"
        assert TransactionRequest.from_content(**card_content).type == TransactionType.CC

    def test_shipping_and_identity_fields(self, card_content):
        card_content.update(
            ship_name="Ship Person",
            ship_city="Elsewhere",
            customer_ssn="078051120",
            license_num="D1234567",
            license_state="UT",
        )
        request = TransactionRequest.from_content(**card_content)
        assert request.ship_to.name == "Ship Person"
        assert request.ship_to.city == "Elsewhere"
        assert request.bill_to.ssn == "078051120"
        assert request.bill_to.drivers_license_number == "D1234567"

    def test_products(self, card_content):
        card_content["products"] = [
            {"cost": "10.00", "quantity": 2, "description": "Tofu", "code": "T-1", "totalwithtax": "21.60"},
        ]
        item = TransactionRequest.from_content(**card_content).products[0]
        assert item.cost == Decimal("10.00")
        assert item.total_with_tax == Decimal("21.60")

    def test_recurring_billing_flag(self, card_content):
        card_content["recurring_billing"] = "YES"
        assert TransactionRequest.from_content(**card_content).recurring_billing is True

    def test_unknown_fields_are_ignored(self, card_content):
        card_content["customer_id"] = "tfb"
        card_content["description"] = "FOO*test"
        assert TransactionRequest.from_content(**card_content).login == "testdrive"


class TestValidation:
    def test_card_fields_on_echeck_rejected(self, card_content):
        card_content["type"] = "ECHECK"
        card_content["action"] = "Normal Authorization"
        with pytest.raises(ValidationError, match="card instrument cannot be used for a ECHECK"):
            TransactionRequest.from_content(**card_content)

    def test_bank_account_on_card_rejected(self, echeck_content):
        echeck_content["type"] = "CC"
        with pytest.raises(ValidationError, match="bank_account instrument"):
            TransactionRequest.from_content(**echeck_content)

    def test_unsupported_echeck_action(self, echeck_content):
        echeck_content["action"] = "Authorization Only"
        with pytest.raises(ValidationError, match="not supported for ECHECK"):
            TransactionRequest.from_content(**echeck_content)

    def test_card_auth_requires_card(self, card_content):
        del card_content["card_number"]
        with pytest.raises(ValidationError, match="requires a card"):
            TransactionRequest.from_content(**card_content)

    def test_echeck_debit_requires_account(self, echeck_content):
        del echeck_content["account_number"]
        with pytest.raises(ValidationError, match="requires a bank account"):
            TransactionRequest.from_content(**echeck_content)

    def test_amount_required_except_void(self, card_content):
        del card_content["amount"]
        with pytest.raises(ValidationError, match="requires an amount"):
            TransactionRequest.from_content(**card_content)

        card_content.update(action="Void", order_number="123")
        assert TransactionRequest.from_content(**card_content).amount is None

    def test_amount_must_be_positive(self, card_content):
        card_content["amount"] = "-1.00"
        with pytest.raises(ValidationError, match="amount"):
            TransactionRequest.from_content(**card_content)

    def test_bad_expiration(self, card_content):
        card_content["expiration"] = "2025-12"
        with pytest.raises(ValidationError, match="MM/YY"):
            TransactionRequest.from_content(**card_content)

    def test_missing_credentials(self, card_content):
        del card_content["password"]
        with pytest.raises(ValidationError, match="password"):
            TransactionRequest.from_content(**card_content)

    def test_unlinked_credit_only_for_card_credit(self, echeck_content):
        echeck_content.update(action="Credit", unlinked_credit=True)
        with pytest.raises(ValidationError, match="unlinked_credit"):
            TransactionRequest.from_content(**echeck_content)

    def test_unlinked_credit_cannot_reference_order(self, card_content):
        card_content.update(action="Credit", unlinked_credit=True, order_number="123")
        with pytest.raises(ValidationError, match="unlinked credit"):
            TransactionRequest.from_content(**card_content)

    def test_unlinked_credit_requires_card(self, card_content):
        del card_content["card_number"]
        card_content.update(action="Credit", unlinked_credit=True)
        with pytest.raises(ValidationError, match="requires a card"):
            TransactionRequest.from_content(**card_content)

    def test_linked_credit_without_card(self, card_content):
        del card_content["card_number"]
        card_content.update(action="Credit", order_number="123")
        assert TransactionRequest.from_content(**card_content).card is None

    def test_error_message_never_echoes_secrets(self, card_content):
        card_content["expiration"] = "bogus"
        with pytest.raises(ValidationError) as excinfo:
            TransactionRequest.from_content(**card_content)
        assert CARD_NUMBER not in str(excinfo.value)
        assert PASSWORD not in str(excinfo.value)

    def test_create_wraps_pydantic_errors(self):
        with pytest.raises(ValidationError):
            TransactionRequest.create(login="m", password="p", type="CC", action="Refund", amount="1")


class TestResult:
    def test_default_is_unsuccessful(self):
        assert TransactionResult().is_success is False

    def test_tri_state(self):
        assert TransactionResult(outcome=Outcome.APPROVED).is_success is True
        assert TransactionResult(outcome=Outcome.DECLINED).is_success is False
        assert TransactionResult(outcome=Outcome.INDETERMINATE).is_success is None
