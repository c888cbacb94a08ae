"""
Vendor reason codes.

Maps the numeric ``reasonCode`` of a reply message to a human-readable
description and, where the description positively identifies one, a coarse
failure category. Codes that are informational, approvals, merchant-side
errors, or that cannot be classified with confidence carry no category.

The table is built once at import and exposed read-only; it is the only
state shared between calls.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from cybersource_lite.models.enums import FailureStatus

APPROVED_CODE = "100"


class ReasonCode(NamedTuple):
    description: str
    failure_status: Optional[FailureStatus] = None


_DECLINED = FailureStatus.DECLINED
_EXPIRED = FailureStatus.EXPIRED
_NSF = FailureStatus.NSF
_STOLEN = FailureStatus.STOLEN
_BLACKLISTED = FailureStatus.BLACKLISTED

_TABLE: dict[str, ReasonCode] = {
    # ─── Success / request errors ───────────────────────────────────────
    "100": ReasonCode("Successful transaction"),
    "101": ReasonCode("The request is missing one or more fields"),
    "102": ReasonCode("One or more fields in the request contains invalid data"),
    "104": ReasonCode(
        "The merchantReferenceCode sent with this authorization request matches the "
        "merchantReferenceCode of another authorization request that you sent in the last 15 minutes."
    ),
    "110": ReasonCode("Partial amount was approved"),
    # ─── System errors ──────────────────────────────────────────────────
    "150": ReasonCode("Error - General system failure."),
    "151": ReasonCode(
        "Error - The request was received but there was a server timeout. "
        "This error does not include timeouts between the client and the server."
    ),
    "152": ReasonCode("Error: The request was received, but a service did not finish running in time."),
    # ─── Issuer declines ────────────────────────────────────────────────
    "200": ReasonCode(
        "The authorization request was approved by the issuing bank but declined by CyberSource "
        "because it did not pass the Address Verification Service (AVS) check",
        _DECLINED,
    ),
    "201": ReasonCode(
        "The issuing bank has questions about the request. You do not receive an authorization code "
        "programmatically, but you might receive one verbally by calling the processor",
        _DECLINED,
    ),
    "202": ReasonCode(
        "Expired card. You might also receive this if the expiration date you provided does not "
        "match the date the issuing bank has on file",
        _EXPIRED,
    ),
    "203": ReasonCode("General decline of the card. No other information provided by the issuing bank.", _DECLINED),
    "204": ReasonCode("Insufficient funds in the account.", _NSF),
    "205": ReasonCode("Stolen or lost card.", _STOLEN),
    "207": ReasonCode("Issuing bank unavailable."),
    "208": ReasonCode("Inactive card or card not authorized for card-not-present transactions.", _DECLINED),
    "209": ReasonCode("American Express Card Identification Digits (CID) did not match.", _DECLINED),
    "210": ReasonCode("The card has reached the credit limit.", _NSF),
    "211": ReasonCode("Invalid Card Verification Number (CVN).", _DECLINED),
    "220": ReasonCode("Generic Decline.", _DECLINED),
    "221": ReasonCode("The customer matched an entry on the processor's negative file.", _BLACKLISTED),
    "222": ReasonCode("customer's account is frozen", _DECLINED),
    # ─── Processor / follow-on errors ───────────────────────────────────
    "230": ReasonCode(
        "The authorization request was approved by the issuing bank but declined by CyberSource "
        "because it did not pass the card verification number (CVN) check."
    ),
    "231": ReasonCode("Invalid account number"),
    "232": ReasonCode("The card type is not accepted by the payment processor."),
    "233": ReasonCode("General decline by the processor.", _DECLINED),
    "234": ReasonCode("There is a problem with your CyberSource merchant configuration."),
    "235": ReasonCode(
        "The requested amount exceeds the originally authorized amount. Occurs, for example, "
        "if you try to capture an amount larger than the original authorization amount."
    ),
    "236": ReasonCode("Processor failure."),
    "237": ReasonCode("The authorization has already been reversed."),
    "238": ReasonCode("The transaction has already been settled."),
    "239": ReasonCode("The requested transaction amount must match the previous transaction amount."),
    "240": ReasonCode("The card type sent is invalid or does not correlate with the credit card number."),
    "241": ReasonCode("The referenced request id is invalid for all follow-on transactions."),
    "242": ReasonCode(
        "The request ID is invalid.  You requested a capture, but there is no corresponding, unused "
        "authorization record. Occurs if there was not a previously successful authorization request "
        "or if the previously successful authorization has already been used in another capture request."
    ),
    "243": ReasonCode("The transaction has already been settled or reversed."),
    "246": ReasonCode(
        "The capture or credit is not voidable because the capture or credit information has already "
        "been submitted to your processor. Or, you requested a void for a type of transaction that "
        "cannot be voided."
    ),
    "247": ReasonCode("You requested a credit for a capture that was previously voided."),
    "248": ReasonCode("The boleto request was declined by your processor."),
    "250": ReasonCode("Error - The request was received, but there was a timeout at the payment processor."),
    "251": ReasonCode("The Pinless Debit card's use frequency or maximum amount per use has been exceeded."),
    "254": ReasonCode("Account is prohibited from processing stand-alone refunds."),
    # ─── Fraud screening / address verification ─────────────────────────
    "400": ReasonCode("Fraud score exceeds threshold."),
    "450": ReasonCode("Apartment number missing or not found."),
    "451": ReasonCode("Insufficient address information."),
    "452": ReasonCode("House/Box number not found on street."),
    "453": ReasonCode("Multiple address matches were found."),
    "454": ReasonCode("P.O. Box identifier not found or out of range."),
    "455": ReasonCode("Route service identifier not found or out of range."),
    "456": ReasonCode("Street name not found in Postal code."),
    "457": ReasonCode("Postal code not found in database."),
    "458": ReasonCode("Unable to verify or correct address."),
    "459": ReasonCode("Multiple address matches were found (international)"),
    "460": ReasonCode("Address match not found (no reason given)"),
    "461": ReasonCode("Unsupported character set"),
    # ─── Payer authentication / decision manager ────────────────────────
    "475": ReasonCode(
        "The cardholder is enrolled in Payer Authentication. "
        "Please authenticate the cardholder before continuing with the transaction."
    ),
    "476": ReasonCode("Encountered a Payer Authentication problem. Payer could not be authenticated."),
    "480": ReasonCode("The order is marked for review by Decision Manager"),
    "481": ReasonCode("The order has been rejected by Decision Manager"),
    "520": ReasonCode(
        "The authorization request was approved by the issuing bank but declined by CyberSource "
        "based on your Smart Authorization settings."
    ),
    # ─── Export compliance ──────────────────────────────────────────────
    "700": ReasonCode("The customer matched the Denied Parties List", _BLACKLISTED),
    "701": ReasonCode("Export bill_country/ship_country match"),
    "702": ReasonCode("Export email_country match"),
    "703": ReasonCode("Export hostname_country/ip_country match"),
}

REASON_CODES: Mapping[str, ReasonCode] = MappingProxyType(_TABLE)


def lookup_reason_code(code: Optional[str]) -> ReasonCode:
    """
    Describe a reason code.

    Exact match on the code string. Codes missing from the table get a
    synthesized description and no failure category.
    """
    entry = REASON_CODES.get(code or "")
    if entry is None:
        return ReasonCode(f"{code} Unknown reason code" if code else "Unknown reason code")
    return entry
