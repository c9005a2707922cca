"""CLI entrypoint for mcc-serviceability."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Sequence
from typing import Any

from .client import ServiceabilityClient
from .errors import ConfigurationError, ValidationError
from .io_state import read_state, write_state
from .logging_utils import configure_logging, get_logger
from .models import Address


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--endpoint", help="Service endpoint (or set MCC_SERVICEABILITY_ENDPOINT env var)."
    )
    parser.add_argument("--proxy", help="Upstream proxy (or set MCC_SERVICEABILITY_PROXY env var).")
    parser.add_argument(
        "--trust-proxy",
        action="store_true",
        help="Skip TLS certificate verification when going through --proxy.",
    )
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds.")
    parser.add_argument("--state-file", help="Load session state from and save it to this file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--address1", required=True, help="First line of the address.")
    parser.add_argument("--zip", required=True, help="Zip code.")
    parser.add_argument("--city", help="City.")
    parser.add_argument("--state", help="Two-letter state code.")
    parser.add_argument("--unit-number", help="Unit number.")


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Check and select serviceable addresses with the MCC serviceability API."
    )
    commands = parser.add_subparsers(dest="command", required=True)
    check = commands.add_parser("check", help="Check whether an address can be serviced.")
    _add_common_arguments(check)
    select = commands.add_parser("select", help="Select a serviceable address.")
    _add_common_arguments(select)
    select.add_argument("--location-id", help="Opaque location id from a check response.")
    select.add_argument("--unit-id", help="Opaque unit id from a check response.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def namespace_to_config(args: argparse.Namespace) -> dict[str, Any]:
    """Build the client configuration mapping from CLI args and environment."""
    return {
        "endpoint": args.endpoint or os.getenv("MCC_SERVICEABILITY_ENDPOINT"),
        "proxy": args.proxy or os.getenv("MCC_SERVICEABILITY_PROXY"),
        "verbose": bool(args.verbose),
        "trust_proxy": bool(args.trust_proxy),
        "timeout": args.timeout,
    }


def namespace_to_address(args: argparse.Namespace) -> Address:
    return Address(
        address1=args.address1,
        zip=args.zip,
        city=args.city,
        state=args.state,
        unit_number=args.unit_number,
        location_id=getattr(args, "location_id", None),
        unit_id=getattr(args, "unit_id", None),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger("cli")

    saved_state = read_state(args.state_file) if args.state_file else None
    outcome: dict[str, Any] = {}

    def on_response(error: Exception | None, body: Any) -> None:
        outcome["error"] = error
        outcome["body"] = body

    try:
        client = ServiceabilityClient(namespace_to_config(args), saved_state, logger=logger)
    except (ConfigurationError, ValidationError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    with client:
        operation = client.check if args.command == "check" else client.select
        try:
            operation(namespace_to_address(args), on_response)
        except ValidationError as exc:
            logger.error("Invalid address: %s", exc)
            return 2
        if args.state_file:
            write_state(args.state_file, client.state)

    if outcome["error"] is not None:
        logger.error("Serviceability %s failed: %s", args.command, outcome["error"])
        return 1
    json.dump(outcome["body"], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
