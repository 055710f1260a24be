#!/usr/bin/env python3
"""Create a self-signed CA: RSA private key plus X.509v3 CA certificate."""

import argparse
import sys
from pathlib import Path

from cinema_ca.lib.ca_manager import CAManager
from cinema_ca.lib.config import (
    DEFAULT_KEY_SIZE,
    DEFAULT_VALIDITY_DAYS,
    VERSION,
    CAConfig,
    SubjectAttributes,
)
from cinema_ca.lib.errors import CAError
from cinema_ca.lib.logging_config import LOGGER, set_verbose


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for make_ca."""
    parser = argparse.ArgumentParser(
        description="Create a self-signed CA key and certificate with a key-derived dnQualifier"
    )
    parser.add_argument("-c", "--common-name", required=True, help="Subject Common Name (CN)")
    parser.add_argument(
        "-k",
        "--keysize",
        type=int,
        default=DEFAULT_KEY_SIZE,
        help=f"RSA key size in bits (default: {DEFAULT_KEY_SIZE})",
    )
    parser.add_argument(
        "-d",
        "--days",
        type=int,
        default=DEFAULT_VALIDITY_DAYS,
        help=f"Certificate validity in days (default: {DEFAULT_VALIDITY_DAYS})",
    )
    parser.add_argument("--country", help="Subject Country (C), two letters")
    parser.add_argument("--state", help="Subject State or Province (ST)")
    parser.add_argument("--locality", help="Subject Locality (L)")
    parser.add_argument("--org", help="Subject Organization (O)")
    parser.add_argument("--org-unit", help="Subject Organizational Unit (OU)")
    parser.add_argument("--email", help="Subject emailAddress")
    parser.add_argument("-v", "--verbose", action="store_true", help="Echo each operation performed")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("keyfile", type=Path, help="Output path for the PEM private key")
    parser.add_argument("certfile", type=Path, help="Output path for the PEM certificate")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Create CA key and certificate.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help/--version exit 0; usage errors are reported as 1
        return 0 if e.code in (0, None) else 1

    set_verbose(args.verbose)

    try:
        config = CAConfig(key_size=args.keysize, validity_days=args.days)
        attributes = SubjectAttributes(
            common_name=args.common_name,
            country=args.country,
            state=args.state,
            locality=args.locality,
            organization=args.org,
            organizational_unit=args.org_unit,
            email=args.email,
        )
        ca_manager = CAManager(config)

        LOGGER.info("Creating CA: %s", args.common_name)
        result = ca_manager.create_ca(attributes, args.keyfile, args.certfile)

        LOGGER.info("CA created:")
        LOGGER.info("  Key: %s", result.key_path)
        LOGGER.info("  Cert: %s", result.cert_path)
        LOGGER.info("  Serial: %s", result.serial_number)
        LOGGER.info("  subject=%s", result.subject)
        LOGGER.info("  issuer=%s", result.issuer)
        return 0

    except CAError as e:
        LOGGER.error("CA creation failed: %s", e)
        return 1
    except Exception as e:
        LOGGER.exception("CA creation failed unexpectedly: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
