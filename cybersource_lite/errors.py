"""
Error taxonomy for the gateway adapter.

  - ValidationError: malformed input, detected before any network call.
  - MissingReferenceError: follow-on action with no order number to point at.
  - TransportError: the vendor could not be reached.
  - ProtocolFault: the vendor answered with a SOAP fault (credentials,
    merchant configuration). Distinct from a business decline, which is a
    normal result and never an exception.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from cybersource_lite.models.transaction import TransactionResult


class GatewayError(Exception):
    """Base exception for gateway adapter errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError, ValueError):
    """The request is inconsistent or malformed."""


class MissingReferenceError(ValidationError):
    """A follow-on action has no linked order number."""

    def __init__(self, action: str):
        super().__init__(f"{action} requires an order_number from a previous transaction")
        self.action = action


class TransportError(GatewayError):
    """Connection-level failure talking to the vendor."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ProtocolFault(GatewayError):
    """The vendor returned a SOAP fault instead of a reply message."""

    def __init__(self, message: str, result: Optional["TransactionResult"] = None):
        super().__init__(message)
        self.result = result
