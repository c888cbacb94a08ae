"""
SOAP response interpreter.

A reply body takes one of two shapes:

  - ``replyMessage``: the vendor reached a decision. Reason code "100" is an
    approval, anything else a decline described by the reason code table.
  - ``Fault``: the vendor refused to process the request at all (bad
    credentials, malformed envelope). The outcome is indeterminate.

A body that cannot be parsed, or that has neither shape, leaves the result
at its defaults: not successful, no reason code, no message.
"""

import logging
from typing import Optional
from xml.etree import ElementTree

from cybersource_lite.audit.scrubber import Scrubber
from cybersource_lite.models.enums import FailureStatus, Outcome
from cybersource_lite.models.transaction import RawResponse, TransactionResult
from cybersource_lite.protocol.reason_codes import APPROVED_CODE, lookup_reason_code

logger = logging.getLogger("cybersource_lite.response_parser")


def _local(tag: str) -> str:
    """Local name of a qualified tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def _child(elem: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _child_text(elem: ElementTree.Element, name: str) -> str:
    child = _child(elem, name)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


class SoapResponseParser:
    """Turns a raw vendor response into a TransactionResult."""

    def interpret(self, raw: RawResponse, scrubber: Optional[Scrubber] = None) -> TransactionResult:
        scrubber = scrubber or Scrubber()
        result = TransactionResult(
            server_response=scrubber.scrub(raw.body),
            server_response_dangerous=raw.body,
            response_code=raw.status,
            response_headers=dict(raw.headers),
        )

        body = self._find_body(raw.body)
        if body is None:
            return result

        reply = _child(body, "replyMessage")
        if reply is not None:
            self._read_reply(reply, result)
            return result

        fault = _child(body, "Fault")
        if fault is not None:
            self._read_fault(fault, result)
            return result

        logger.warning("Response body has neither a reply message nor a fault (HTTP %s)", raw.status)
        return result

    def _find_body(self, text: str) -> Optional[ElementTree.Element]:
        try:
            root = ElementTree.fromstring(text)
        except ElementTree.ParseError as e:
            # TODO: decide with integrators whether an unparseable body should raise ProtocolFault
            logger.warning("Could not parse response XML: %s", e)
            return None
        return _child(root, "Body")

    @staticmethod
    def _read_reply(reply: ElementTree.Element, result: TransactionResult) -> None:
        reason_code = _child_text(reply, "reasonCode")
        result.outcome = Outcome.APPROVED if reason_code == APPROVED_CODE else Outcome.DECLINED
        result.result_code = reason_code
        result.order_number = _child_text(reply, "requestID")

        auth_reply = _child(reply, "ccAuthReply")
        if auth_reply is not None:
            result.authorization = _child_text(auth_reply, "authorizationCode")
            result.cvv2_response = _child_text(auth_reply, "cvCode")
            result.avs_code = _child_text(auth_reply, "avsCode")

        reason = lookup_reason_code(reason_code)
        result.error_message = reason.description
        result.failure_status = reason.failure_status

    @staticmethod
    def _read_fault(fault: ElementTree.Element, result: TransactionResult) -> None:
        result.outcome = Outcome.INDETERMINATE
        result.result_code = None
        result.order_number = None
        result.failure_status = FailureStatus.UNKNOWN
        result.error_message = _child_text(fault, "faultstring")
