"""
Call-scoped redaction of secrets in captured request/response text.

A Scrubber is created for each submitted transaction and registers the
literal secrets of that transaction only: password, CVV, card number and
bank account number. Nothing is shared between calls.
"""

import re
from typing import Callable, Optional
from xml.sax.saxutils import escape

from cybersource_lite.models.transaction import TransactionRequest

MaskFunction = Callable[[str], str]

DELETED = "DELETED"

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def mask_account_number(number: str) -> str:
    """
    Mask a card or account number.

    Long numbers keep the first 6 and last 4 digits, medium ones the first
    and last 2, short ones only the last 2.
    """
    length = len(number)
    if length > 11:
        return number[:6] + "X" * (length - 10) + number[-4:]
    if length > 5:
        return number[:2] + "X" * (length - 4) + number[-2:]
    if length > 2:
        return "X" * (length - 2) + number[-2:]
    return "X" * length


class Scrubber:
    """Replaces registered secrets in text."""

    def __init__(self, mask: MaskFunction = mask_account_number):
        self._mask = mask
        self._rules: list[tuple[str, re.Pattern, str]] = []

    def add_secret(self, value: Optional[str], replacement: str = DELETED) -> None:
        if value:
            self._add(value, replacement)

    def add_cvv(self, cvv: Optional[str]) -> None:
        # Short digit strings: only match when not part of a longer number
        if cvv:
            self._add(cvv, DELETED, bounded=True)

    def add_account_number(self, number: Optional[str]) -> None:
        if number:
            self._add(number, self._mask(number))

    def _add(self, literal: str, replacement: str, bounded: bool = False) -> None:
        # Captured XML holds the entity-escaped form of each value
        for form in dict.fromkeys((literal, escape(literal), escape(literal, _QUOTE_ENTITIES))):
            pattern = re.escape(form)
            if bounded:
                pattern = rf"(?<!\d){pattern}(?!\d)"
            self._rules.append((form, re.compile(pattern), replacement))
        # Longest secrets first so a short one never splits a long one
        self._rules.sort(key=lambda rule: len(rule[0]), reverse=True)

    def scrub(self, text: Optional[str]) -> str:
        if not text:
            return text or ""
        for _, pattern, replacement in self._rules:
            text = pattern.sub(lambda _m, r=replacement: r, text)
        return text

    @classmethod
    def for_request(cls, request: TransactionRequest, mask: MaskFunction = mask_account_number) -> "Scrubber":
        """Register every secret carried by a request."""
        scrubber = cls(mask)
        scrubber.add_secret(request.password)
        if request.card is not None:
            scrubber.add_cvv(request.card.cvv2)
            scrubber.add_account_number(request.card.number)
        if request.bank_account is not None:
            scrubber.add_account_number(request.bank_account.account_number)
        return scrubber
