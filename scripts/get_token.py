"""get_token.py

Acquire an OIDC token for a test user and print it as JSON.

Useful when reproducing an acceptance-test failure by hand with ``curl``.
The password defaults to ``OIDC_PASSWORD`` so it does not end up in shell
history.  Tokens are printed to stdout only; logs never contain them.

Example
-------
    OIDC_PASSWORD=admin python scripts/get_token.py admin https://localhost:9200
"""
from __future__ import annotations

import argparse
import json
import os
import sys

from acceptance_helpers.oidc import AuthenticationError, TokenService
from acceptance_helpers.utils.logging import setup_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[2])
    parser.add_argument("username")
    parser.add_argument("url", help="any URL on the target server")
    parser.add_argument("--password", default=os.getenv("OIDC_PASSWORD"))
    parser.add_argument(
        "--header",
        action="store_true",
        help="print an Authorization header line instead of JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    if not args.password:
        print("[ERROR] no password given (use --password or OIDC_PASSWORD)", file=sys.stderr)
        return 2

    service = TokenService()
    try:
        record = service.get_token(args.username, args.password, args.url)
    except AuthenticationError as exc:
        print(json.dumps(exc.to_payload(), indent=2), file=sys.stderr)
        return 1

    if args.header:
        print(f"Authorization: Bearer {record.access_token}")
    else:
        print(json.dumps(record.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
