"""CyberSource Lite: SOAP payment gateway adapter."""

from cybersource_lite.errors import (
    GatewayError,
    MissingReferenceError,
    ProtocolFault,
    TransportError,
    ValidationError,
)
from cybersource_lite.models import (
    Action,
    FailureStatus,
    Outcome,
    TransactionRequest,
    TransactionResult,
    TransactionType,
)
from cybersource_lite.providers.cybersource import CyberSourceLiteGateway
from cybersource_lite.version import __version__

__all__ = [
    "Action",
    "CyberSourceLiteGateway",
    "FailureStatus",
    "GatewayError",
    "MissingReferenceError",
    "Outcome",
    "ProtocolFault",
    "TransactionRequest",
    "TransactionResult",
    "TransactionType",
    "TransportError",
    "ValidationError",
    "__version__",
]
