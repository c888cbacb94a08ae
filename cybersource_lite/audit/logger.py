"""
Audit trail for gateway exchanges.

Each step of a submission gets one log line with:
  - Reference (merchant reference code or order number)
  - Action (what happened)
  - Details (context, reason codes, error messages)

Every line passes through the call's Scrubber first; nothing that could
hold a card number or password reaches a handler unmasked.
"""

import json
import logging
from typing import Any, Optional

from cybersource_lite.audit.scrubber import Scrubber

logger = logging.getLogger("cybersource_lite.audit")


def log_event(
    action: str,
    scrubber: Scrubber,
    reference: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    level: int = logging.INFO,
) -> str:
    """
    Emit one audit line.

    Args:
        action: What happened (e.g. "request_built", "reply_received").
        scrubber: Redaction rules of the current call.
        reference: Merchant reference code or order number.
        details: Arbitrary context (serialized to JSON, then scrubbed).

    Returns:
        The scrubbed details payload that was logged.
    """
    payload = scrubber.scrub(json.dumps(details, default=str)) if details else ""
    logger.log(
        level,
        "AUDIT | ref=%s action=%s | %s",
        reference or "-",
        action,
        payload[:200],
    )
    return payload
