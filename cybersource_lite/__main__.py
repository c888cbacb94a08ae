"""
Submit one transaction from a JSON file.

The file holds the flat content fields (login, password, type, action,
amount, card_number, expiration, ...). Prints the scrubbed result as JSON.

Run:
    python -m cybersource_lite transaction.json --test
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from cybersource_lite.config import settings
from cybersource_lite.errors import ProtocolFault, TransportError, ValidationError
from cybersource_lite.providers.cybersource import CyberSourceLiteGateway

EXIT_INVALID = 1
EXIT_FAULT = 2
EXIT_UNREACHABLE = 3


def main(argv: Optional[Sequence[str]] = None, gateway: Optional[CyberSourceLiteGateway] = None) -> int:
    parser = argparse.ArgumentParser(prog="cybersource_lite", description=__doc__.splitlines()[1])
    parser.add_argument("content", type=argparse.FileType("r"), help="JSON file with transaction content")
    parser.add_argument("--test", action="store_true", help="use the test server")
    parser.add_argument("--require-avs", action="store_true", help="let AVS mismatches decline the transaction")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    with args.content as fh:
        content = json.load(fh)

    gateway = gateway or CyberSourceLiteGateway()
    if args.test:
        gateway.test_transaction(1)
    if args.require_avs:
        gateway.require_avs = True

    try:
        gateway.content(**content)
        result = gateway.submit()
    except ValidationError as e:
        print(f"Invalid transaction: {e}", file=sys.stderr)
        return EXIT_INVALID
    except TransportError as e:
        print(f"Gateway unreachable: {e}", file=sys.stderr)
        return EXIT_UNREACHABLE
    except ProtocolFault as e:
        print(f"Gateway fault: {e}", file=sys.stderr)
        return EXIT_FAULT

    print(json.dumps({
        "is_success": result.is_success,
        "outcome": result.outcome.value,
        "result_code": result.result_code,
        "order_number": result.order_number,
        "authorization": result.authorization,
        "avs_code": result.avs_code,
        "cvv2_response": result.cvv2_response,
        "error_message": result.error_message,
        "failure_status": result.failure_status.value if result.failure_status else None,
    }, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
