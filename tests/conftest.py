"""Shared test fixtures."""

from datetime import date
from xml.etree import ElementTree

import httpx
import pytest

from cybersource_lite.config import Settings
from cybersource_lite.protocol.request_builder import SoapRequestBuilder, TRANSACTION_NS
from cybersource_lite.providers.cybersource import CyberSourceLiteGateway

NS = {
    "c": TRANSACTION_NS,
    "soap": "http://schemas.xmlsoap.org/soap/envelope/",
    "wsse": "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd",
}

CARD_NUMBER = "4111111111111111"
ACCOUNT_NUMBER = "4100987654"
PASSWORD = "s3cr3t-Pa55"
CVV = "737"


def reply_xml(reason_code: str = "100", request_id: str = "3905963740730167904106", auth: bool = True) -> str:
    auth_reply = (
        "<c:ccAuthReply>"
        f"<c:reasonCode>{reason_code}</c:reasonCode>"
        "<c:amount>49.95</c:amount>"
        "<c:authorizationCode>831000</c:authorizationCode>"
        "<c:avsCode>Y</c:avsCode>"
        "<c:avsCodeRaw>Y</c:avsCodeRaw>"
        "<c:cvCode>M</c:cvCode>"
        "</c:ccAuthReply>"
        if auth
        else ""
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        "<soap:Header>"
        '<wsse:Security xmlns:wsse="http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd">'
        '<wsu:Timestamp xmlns:wsu="http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd">'
        "<wsu:Created>2024-06-01T12:00:00.000Z</wsu:Created>"
        "</wsu:Timestamp>"
        "</wsse:Security>"
        "</soap:Header>"
        "<soap:Body>"
        f'<c:replyMessage xmlns:c="{TRANSACTION_NS}">'
        "<c:merchantReferenceCode>54123</c:merchantReferenceCode>"
        f"<c:requestID>{request_id}</c:requestID>"
        f"<c:decision>{'ACCEPT' if reason_code == '100' else 'REJECT'}</c:decision>"
        f"<c:reasonCode>{reason_code}</c:reasonCode>"
        "<c:requestToken>Ahj/7wSR</c:requestToken>"
        f"{auth_reply}"
        "</c:replyMessage>"
        "</soap:Body>"
        "</soap:Envelope>"
    )


def fault_xml(faultstring: str = "Security Data : UsernameToken authentication failed.") -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        "<soap:Header/>"
        "<soap:Body>"
        f'<soap:Fault xmlns:c="{TRANSACTION_NS}">'
        '<faultcode xmlns:wsse="http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd">'
        "wsse:FailedCheck</faultcode>"
        f"<faultstring>{faultstring}</faultstring>"
        "</soap:Fault>"
        "</soap:Body>"
        "</soap:Envelope>"
    )


def request_message(document: str) -> ElementTree.Element:
    """The requestMessage element of a built document."""
    root = ElementTree.fromstring(document)
    message = root.find("soap:Body/c:requestMessage", NS)
    assert message is not None
    return message


def service_elements(document: str) -> set[str]:
    from cybersource_lite.protocol.services import SERVICE_ELEMENTS

    message = request_message(document)
    return {child.tag.split("}")[-1] for child in message} & SERVICE_ELEMENTS


@pytest.fixture
def test_settings() -> Settings:
    return Settings(test_mode=True, _env_file=None)


@pytest.fixture
def builder() -> SoapRequestBuilder:
    return SoapRequestBuilder(client_library="pytest", today=date(2024, 6, 1))


@pytest.fixture
def card_content() -> dict:
    return {
        "type": "CC",
        "login": "testdrive",
        "password": PASSWORD,
        "action": "Authorization Only",
        "amount": "49.95",
        "invoice_number": "54123",
        "name": "Tofu Beast",
        "address": "123 Anystreet",
        "city": "Anywhere",
        "state": "UT",
        "zip": "84058",
        "country": "US",
        "email": "tofu@example.com",
        "card_number": CARD_NUMBER,
        "expiration": "12/25",
        "cvv2": CVV,
    }


@pytest.fixture
def echeck_content() -> dict:
    return {
        "type": "ECHECK",
        "login": "testdrive",
        "password": PASSWORD,
        "action": "Normal Authorization",
        "amount": "120.00",
        "invoice_number": "54124",
        "name": "Tofu Beast",
        "address": "123 Anystreet",
        "city": "Anywhere",
        "state": "UT",
        "zip": "84058",
        "account_number": ACCOUNT_NUMBER,
        "routing_code": "011000015",
        "account_type": "Personal Savings",
        "check_number": "1001",
    }


class RecordingHandler:
    """httpx MockTransport handler that replays canned bodies and records requests."""

    def __init__(self, body: str = "", status: int = 200, exc: Exception | None = None):
        self.body = body
        self.status = status
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status, text=self.body, headers={"Content-Type": "text/xml; charset=utf-8"})


@pytest.fixture
def make_gateway(test_settings):
    """Build a gateway whose HTTP calls are answered by a RecordingHandler."""

    def _make(body: str = "", status: int = 200, exc: Exception | None = None, settings: Settings | None = None):
        handler = RecordingHandler(body=body, status=status, exc=exc)
        gateway = CyberSourceLiteGateway(
            settings=settings or test_settings,
            http_transport=httpx.MockTransport(handler),
            builder=SoapRequestBuilder(client_library="pytest", today=date(2024, 6, 1)),
        )
        return gateway, handler

    return _make
