"""SOAP request builder for the transaction processor."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional
from xml.etree import ElementTree

from cybersource_lite.models.enums import AccountType, Action, TransactionType
from cybersource_lite.models.expiration import parse_expiration
from cybersource_lite.models.transaction import (
    Address,
    BankAccount,
    Card,
    LineItem,
    TransactionRequest,
)
from cybersource_lite.protocol.services import select_services

logger = logging.getLogger("cybersource_lite.request_builder")

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENC_NS = "http://schemas.xmlsoap.org/soap/encoding/"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
TRANSACTION_NS = "urn:schemas-cybersource-com:transaction-data-1.26"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

ACCOUNT_TYPE_CODES = {
    AccountType.PERSONAL_CHECKING: "C",
    AccountType.PERSONAL_SAVINGS: "S",
    AccountType.BUSINESS_CHECKING: "X",
    AccountType.BUSINESS_SAVINGS: "X",
}


def split_name(name: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split a combined name: the last word is the surname, the rest the first name."""
    parts = (name or "").rsplit(None, 1)
    if not parts:
        return None, None
    if len(parts) == 1:
        return None, parts[0]
    return parts[0], parts[1]


def _text(value: Any) -> str:
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


class SoapRequestBuilder:
    """
    Builds the SOAP envelope for one transaction.

    Prefixed element names (``soap:``, ``wsse:``) are written literally with
    their ``xmlns`` declarations so the wire format matches the vendor's
    samples without touching ElementTree's global namespace registry.
    """

    def __init__(self, client_library: str = "Python-cybersource-lite", today: Optional[date] = None):
        self.client_library = client_library
        self._today = today

    def build(
        self,
        request: TransactionRequest,
        last_order_number: Optional[str] = None,
        require_avs: bool = False,
    ) -> str:
        """
        Build the outbound document.

        Args:
            request: Validated transaction request.
            last_order_number: Default reference for follow-on actions.
            require_avs: When False the vendor is told to ignore AVS results.

        Returns:
            The complete XML document, declaration included.

        Raises:
            ValidationError: The card expiration cannot be parsed.
            MissingReferenceError: A follow-on action has no reference.
        """
        # Resolve services first so a missing reference fails before any work
        services = select_services(request, last_order_number)

        envelope = ElementTree.Element(
            "soap:Envelope",
            {
                "soap:encodingStyle": SOAP_ENC_NS,
                "xmlns:soap": SOAP_ENV_NS,
                "xmlns:soapenc": SOAP_ENC_NS,
                "xmlns:xsd": XSD_NS,
                "xmlns:xsi": XSI_NS,
            },
        )
        self._add_security_header(envelope, request)

        body = ElementTree.SubElement(envelope, "soap:Body")
        message = ElementTree.SubElement(body, "requestMessage", {"xmlns": TRANSACTION_NS})
        self._data(message, "merchantID", request.login)
        self._data(message, "merchantReferenceCode", request.invoice_number)
        self._data(message, "clientLibrary", self.client_library)

        self._add_bill_to(message, request)
        if request.ship_to is not None:
            self._add_ship_to(message, request.ship_to)
        for index, item in enumerate(request.products):
            self._add_item(message, index, item)
        self._add_purchase_totals(message, request)

        if request.type == TransactionType.CC:
            if request.card is not None:
                self._add_card(message, request.card, request.bill_to)
        elif request.bank_account is not None and request.action == Action.NORMAL_AUTH:
            # Follow-on eCheck services only reference the original debit
            self._add_check(message, request.bank_account, request.bill_to)

        for call in services:
            service = ElementTree.SubElement(message, call.element, {"run": "true"})
            for tag, value in call.fields.items():
                self._data(service, tag, value)

        if request.type == TransactionType.CC and not require_avs:
            rules = ElementTree.SubElement(message, "businessRules")
            self._data(rules, "ignoreAVSResult", "true")

        ElementTree.indent(envelope, space="  ")
        document = XML_DECLARATION + ElementTree.tostring(envelope, encoding="unicode")

        logger.debug(
            "Built %s %s request with services: %s",
            request.type.value,
            request.action.value,
            ", ".join(call.element for call in services),
        )
        return document

    def _add_security_header(self, envelope: ElementTree.Element, request: TransactionRequest) -> None:
        header = ElementTree.SubElement(envelope, "soap:Header")
        security = ElementTree.SubElement(header, "wsse:Security", {"xmlns:wsse": WSSE_NS})
        token = ElementTree.SubElement(security, "wsse:UsernameToken")
        self._data(token, "wsse:Password", request.password)
        self._data(token, "wsse:Username", request.login)

    def _add_bill_to(self, message: ElementTree.Element, request: TransactionRequest) -> None:
        bill = request.bill_to
        first_name, last_name = self._names(bill)

        element = ElementTree.SubElement(message, "billTo")
        self._data(element, "firstName", first_name)
        self._data(element, "lastName", last_name)
        self._add_address_fields(element, bill)
        self._data(element, "ipAddress", bill.ip)
        self._data(element, "dateOfBirth", bill.date_of_birth)
        self._data(element, "driversLicenseNumber", bill.drivers_license_number)
        self._data(element, "driversLicenseState", bill.drivers_license_state)
        self._data(element, "ssn", bill.ssn)

    def _add_ship_to(self, message: ElementTree.Element, ship: Address) -> None:
        first_name, last_name = self._names(ship)
        if not (last_name or ship.address):
            return

        element = ElementTree.SubElement(message, "shipTo")
        self._data(element, "firstName", first_name)
        self._data(element, "lastName", last_name)
        self._add_address_fields(element, ship)

    def _add_address_fields(self, element: ElementTree.Element, address: Address) -> None:
        self._data(element, "street1", address.address)
        self._data(element, "city", address.city)
        self._data(element, "state", address.state)
        self._data(element, "postalCode", address.zip)
        self._data(element, "country", address.country)
        self._data(element, "company", address.company)
        self._data(element, "phoneNumber", address.phone)
        self._data(element, "email", address.email)

    def _add_item(self, message: ElementTree.Element, index: int, item: LineItem) -> None:
        element = ElementTree.SubElement(message, "item", {"id": str(index)})
        self._data(element, "unitPrice", item.cost)
        self._data(element, "quantity", item.quantity)
        self._data(element, "productName", item.description)
        self._data(element, "productSKU", item.code)
        self._data(element, "taxAmount", item.tax)
        self._data(element, "totalAmount", item.total_with_tax)
        self._data(element, "discountAmount", item.discount)

    def _add_purchase_totals(self, message: ElementTree.Element, request: TransactionRequest) -> None:
        element = ElementTree.SubElement(message, "purchaseTotals")
        self._data(element, "currency", request.currency or "USD")
        self._data(element, "taxAmount", request.tax)
        self._data(element, "grandTotalAmount", request.amount)

    def _add_card(self, message: ElementTree.Element, card: Card, bill: Address) -> None:
        month, year = parse_expiration(card.expiration, self._today)

        element = ElementTree.SubElement(message, "card")
        self._data(element, "fullName", self._full_name(bill))
        self._data(element, "accountNumber", card.number)
        self._data(element, "expirationMonth", month)
        self._data(element, "expirationYear", year)
        if card.cvv2:
            self._data(element, "cvIndicator", 1)
            self._data(element, "cvNumber", card.cvv2)

    def _add_check(self, message: ElementTree.Element, account: BankAccount, bill: Address) -> None:
        element = ElementTree.SubElement(message, "check")
        self._data(element, "fullName", account.account_name or self._full_name(bill))
        self._data(element, "accountNumber", account.account_number)
        if account.account_type is not None:
            self._data(element, "accountType", ACCOUNT_TYPE_CODES[account.account_type])
        self._data(element, "bankTransitNumber", account.routing_code)
        self._data(element, "checkNumber", account.check_number)

    @staticmethod
    def _names(address: Address) -> tuple[Optional[str], Optional[str]]:
        if address.name and address.last_name is None:
            return split_name(address.name)
        return address.first_name, address.last_name

    @staticmethod
    def _full_name(address: Address) -> Optional[str]:
        if address.name:
            return address.name
        joined = " ".join(part for part in (address.first_name, address.last_name) if part)
        return joined or None

    @staticmethod
    def _data(parent: ElementTree.Element, tag: str, value: Any) -> None:
        """Append ``<tag>value</tag>``; absent values produce no element."""
        if value is None or value == "":
            return
        ElementTree.SubElement(parent, tag).text = _text(value)
