"""
CyberSource SOAP toolkit gateway.

Drives one transaction through build → send → interpret:

  1. Request building (typed request → SOAP envelope)
  2. Transport (single HTTPS POST, no retry)
  3. Interpretation (reply message or fault → normalized result)
  4. Audit logging (every step, scrubbed with the call's own redaction rules)

The last order number returned by the vendor is remembered and used as the
default reference for a following capture, void, reversal or credit.
"""

import logging
from typing import Any, Optional, Union

import httpx

from cybersource_lite.audit.logger import log_event
from cybersource_lite.audit.scrubber import MaskFunction, Scrubber, mask_account_number
from cybersource_lite.config import Settings, settings as default_settings
from cybersource_lite.errors import ProtocolFault, TransportError, ValidationError
from cybersource_lite.models.enums import FailureStatus, Outcome, SUPPORTED_ACTIONS
from cybersource_lite.models.transaction import TransactionRequest, TransactionResult
from cybersource_lite.protocol.request_builder import SoapRequestBuilder
from cybersource_lite.protocol.response_parser import SoapResponseParser
from cybersource_lite.providers.base import PaymentGateway
from cybersource_lite.transport import SoapTransport
from cybersource_lite.version import __version__

logger = logging.getLogger("cybersource_lite.gateway")

_TEST_MODES = {"1", "true", "test", "sandbox"}


class CyberSourceLiteGateway(PaymentGateway):
    """
    Gateway adapter for the CyberSource Simple Order API (SOAP).

    Not safe to share between threads: the last result and order number
    live on the instance. Redaction state does not; each submit builds its
    own Scrubber.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_transport: Optional[httpx.BaseTransport] = None,
        mask: MaskFunction = mask_account_number,
        builder: Optional[SoapRequestBuilder] = None,
        parser: Optional[SoapResponseParser] = None,
    ):
        self._settings = settings or default_settings
        self._http_transport = http_transport
        self._mask = mask
        self._builder = builder or SoapRequestBuilder(client_library=self._settings.client_library)
        self._parser = parser or SoapResponseParser()

        self._request: Optional[TransactionRequest] = None
        self._result = TransactionResult()
        self._order_number: Optional[str] = None
        self._login: Optional[str] = None
        self._password: Optional[str] = None

        self._test_mode = False
        self._server = self._settings.live_server
        self._port = self._settings.port
        self._path = self._settings.path
        self.test_transaction(self._settings.test_mode)
        # Explicit configuration wins over the reset done by test_transaction
        self.require_avs = self._settings.require_avs

    @property
    def name(self) -> str:
        return "cybersource_lite"

    # ─── Configuration ─────────────────────────────────────────────────

    def test_transaction(self, mode: Union[bool, int, str, None] = None) -> bool:
        """
        Get or set test mode.

        Setting it (``1``, ``True``, ``"test"`` or ``"sandbox"`` for test, anything
        else for live) selects the host, pins port and path, and turns AVS
        enforcement off.
        """
        if mode is None:
            return self._test_mode

        self._test_mode = str(mode).strip().lower() in _TEST_MODES
        self.require_avs = False
        self._port = self._settings.port
        self._path = self._settings.path
        self._server = self._settings.test_server if self._test_mode else self._settings.live_server
        logger.info("Gateway set to %s mode (%s)", "test" if self._test_mode else "live", self._server)
        return self._test_mode

    @property
    def server(self) -> str:
        return self._server

    @property
    def port(self) -> int:
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def url(self) -> str:
        return f"https://{self._server}:{self._port}/{self._path.lstrip('/')}"

    @property
    def verify_ssl(self) -> bool:
        # Certificate checks may only be relaxed against the test host
        if not self._test_mode:
            return True
        return self._settings.verify_ssl_in_test

    def info(self) -> dict[str, Any]:
        """Introspection data for payment frameworks."""
        return {
            "info_compat": "0.01",
            "gateway_name": "CyberSource - SOAP Toolkit API",
            "gateway_url": "http://www.cybersource.com",
            "module_version": __version__,
            "supported_types": [t.value for t in SUPPORTED_ACTIONS],
            "supported_actions": {
                t.value: [a.value for a in actions] for t, actions in SUPPORTED_ACTIONS.items()
            },
        }

    # ─── Submission ────────────────────────────────────────────────────

    def content(self, **fields: Any) -> TransactionRequest:
        self._request = TransactionRequest.from_content(**fields)
        return self._request

    def submit(self, request: Optional[TransactionRequest] = None) -> TransactionResult:
        request = request or self._request
        if request is None:
            raise ValidationError("No transaction content to submit")

        scrubber = Scrubber.for_request(request, mask=self._mask)
        self._result = TransactionResult()
        self._login = request.login
        self._password = request.password

        document = self._builder.build(
            request,
            last_order_number=self._order_number,
            require_avs=self.require_avs,
        )
        server_request = scrubber.scrub(document)
        self._result.server_request = server_request
        self._result.server_request_dangerous = document

        log_event("request_built", scrubber, reference=request.invoice_number, details={
            "type": request.type.value,
            "action": request.action.value,
            "amount": request.amount,
            "currency": request.currency,
            "order_number": request.order_number or self._order_number,
            "server": self._server,
        })

        transport = SoapTransport(self.url, verify=self.verify_ssl, http_transport=self._http_transport)
        try:
            raw = transport.send(document)
        except TransportError as e:
            log_event("transport_failed", scrubber, reference=request.invoice_number, details={
                "error": str(e),
            }, level=logging.ERROR)
            raise

        result = self._parser.interpret(raw, scrubber)
        result.server_request = server_request
        result.server_request_dangerous = document
        self._result = result

        if result.outcome == Outcome.INDETERMINATE:
            self._order_number = None
            log_event("protocol_fault", scrubber, reference=request.invoice_number, details={
                "http_status": raw.status,
                "fault": result.error_message,
            }, level=logging.ERROR)
            # Raised so callers can tell "declined" from "never decided"
            raise ProtocolFault(scrubber.scrub(result.error_message) or "SOAP fault", result=result)

        if result.result_code is not None:
            self._order_number = result.order_number or None

        log_event("reply_received", scrubber, reference=request.invoice_number, details={
            "http_status": raw.status,
            "reason_code": result.result_code,
            "outcome": result.outcome.value,
            "order_number": result.order_number,
            "failure_status": result.failure_status.value if result.failure_status else None,
        })
        return result

    # ─── Result accessors ──────────────────────────────────────────────

    @property
    def result(self) -> TransactionResult:
        return self._result

    @property
    def is_success(self) -> Optional[bool]:
        return self._result.is_success

    @property
    def result_code(self) -> Optional[str]:
        return self._result.result_code

    @property
    def order_number(self) -> Optional[str]:
        return self._order_number

    @order_number.setter
    def order_number(self, value: Optional[str]) -> None:
        self._order_number = value or None

    @property
    def authorization(self) -> Optional[str]:
        return self._result.authorization

    @property
    def avs_code(self) -> Optional[str]:
        return self._result.avs_code

    @property
    def cvv2_response(self) -> Optional[str]:
        return self._result.cvv2_response

    @property
    def error_message(self) -> Optional[str]:
        return self._result.error_message

    @property
    def failure_status(self) -> Optional[FailureStatus]:
        return self._result.failure_status

    @property
    def server_request(self) -> str:
        return self._result.server_request

    @property
    def server_request_dangerous(self) -> str:
        """Unscrubbed request. Only for test environments or PCI-compliant storage."""
        return self._result.server_request_dangerous

    @property
    def server_response(self) -> str:
        return self._result.server_response

    @property
    def server_response_dangerous(self) -> str:
        """Unscrubbed response. Only for test environments or PCI-compliant storage."""
        return self._result.server_response_dangerous

    @property
    def response_code(self) -> Optional[int]:
        return self._result.response_code

    @property
    def response_headers(self) -> dict[str, str]:
        return self._result.response_headers

    @property
    def response_page(self) -> str:
        return self._result.server_response

    @property
    def login(self) -> Optional[str]:
        return self._login

    @property
    def password(self) -> Optional[str]:
        return self._password
