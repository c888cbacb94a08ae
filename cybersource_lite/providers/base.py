"""
Abstract payment gateway interface.

This is the contract a generic payment framework drives: set the
transaction content, submit it, then read the normalized result fields.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from cybersource_lite.models.transaction import TransactionRequest, TransactionResult


class PaymentGateway(ABC):
    """Abstract base class for payment gateways."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway identifier (e.g. 'cybersource_lite')."""
        ...

    @abstractmethod
    def content(self, **fields: Any) -> TransactionRequest:
        """
        Set the transaction content from a flat field bag.

        Raises:
            ValidationError: The fields do not describe a valid transaction.
        """
        ...

    @abstractmethod
    def submit(self, request: Optional[TransactionRequest] = None) -> TransactionResult:
        """
        Submit the transaction and return its normalized result.

        A decline is a normal result. Failures to reach a decision raise.

        Raises:
            ValidationError: Inconsistent request, detected before any network call.
            TransportError: The gateway could not be reached.
            ProtocolFault: The gateway rejected the request (credentials, configuration).
        """
        ...
