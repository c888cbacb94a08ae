"""
Service element selection.

Each (transaction type, action) pair maps to the service element(s) the
vendor runs for it:

  CC     Authorization Only    → ccAuthService
  CC     Normal Authorization  → ccAuthService + ccCaptureService
  CC     Post Authorization    → ccCaptureService (authRequestID)
  CC     Auth Reversal         → ccAuthReversalService (authRequestID)
  CC     Void                  → voidService (voidRequestID)
  CC     Credit                → ccCreditService (captureRequestID, or bare when unlinked)
  ECHECK Normal Authorization  → ecDebitService
  ECHECK Credit                → ecCreditService (debitRequestID)
  ECHECK Void                  → voidService (voidRequestID)

Follow-on services point at a previous transaction. The reference comes
from the request when supplied, otherwise from the last order number the
gateway saw.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from cybersource_lite.errors import MissingReferenceError
from cybersource_lite.models.enums import Action, TransactionType
from cybersource_lite.models.transaction import TransactionRequest


class ServiceSpec(NamedTuple):
    element: str
    reference_field: Optional[str] = None  # Child carrying the linked request id


SERVICE_MAP: dict[tuple[TransactionType, Action], tuple[ServiceSpec, ...]] = {
    (TransactionType.CC, Action.AUTH_ONLY): (ServiceSpec("ccAuthService"),),
    (TransactionType.CC, Action.NORMAL_AUTH): (ServiceSpec("ccAuthService"), ServiceSpec("ccCaptureService")),
    (TransactionType.CC, Action.POST_AUTH): (ServiceSpec("ccCaptureService", "authRequestID"),),
    (TransactionType.CC, Action.AUTH_REVERSAL): (ServiceSpec("ccAuthReversalService", "authRequestID"),),
    (TransactionType.CC, Action.VOID): (ServiceSpec("voidService", "voidRequestID"),),
    (TransactionType.CC, Action.CREDIT): (ServiceSpec("ccCreditService", "captureRequestID"),),
    (TransactionType.ECHECK, Action.NORMAL_AUTH): (ServiceSpec("ecDebitService"),),
    (TransactionType.ECHECK, Action.CREDIT): (ServiceSpec("ecCreditService", "debitRequestID"),),
    (TransactionType.ECHECK, Action.VOID): (ServiceSpec("voidService", "voidRequestID"),),
}

# Every service element the builder can emit
SERVICE_ELEMENTS = frozenset(spec.element for specs in SERVICE_MAP.values() for spec in specs)


@dataclass
class ServiceCall:
    """One service element to emit, with its child fields in order."""

    element: str
    fields: dict[str, str] = field(default_factory=dict)


def select_services(
    request: TransactionRequest,
    last_order_number: Optional[str] = None,
) -> list[ServiceCall]:
    """
    Resolve the service elements for a request.

    Args:
        request: Validated transaction request.
        last_order_number: Order number from the previous reply, used when the
            request does not name one.

    Returns:
        Service calls in emission order.

    Raises:
        MissingReferenceError: A follow-on action has no reference.
    """
    specs = SERVICE_MAP[(request.type, request.action)]
    reference = request.order_number or last_order_number

    calls = []
    for spec in specs:
        call = ServiceCall(element=spec.element)

        if spec.element == "ccAuthService":
            call.fields["commerceIndicator"] = "recurring_internet" if request.recurring_billing else "internet"

        # An unlinked credit is stand-alone: no prior capture to point at
        if spec.reference_field and not request.unlinked_credit:
            if not reference:
                raise MissingReferenceError(request.action.value)
            call.fields[spec.reference_field] = reference

        calls.append(call)
    return calls
