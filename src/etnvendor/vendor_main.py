from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .domain.errors import VendorError
from .envs.vendor_env import get_settings
from .vendor import PaymentVendor


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="etnvendor", description="Electroneum vendor client"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    qr = sub.add_parser(
        "qr", help="Convert an amount and print its payment token and QR url"
    )
    qr.add_argument("amount")
    qr.add_argument("currency")
    qr.add_argument("outlet")
    qr.add_argument("--payment-id", default=None)

    sign = sub.add_parser("sign", help="Print the signature of a JSON payload")
    sign.add_argument("payload")

    verify = sub.add_parser("verify", help="Verify a webhook payload and signature")
    verify.add_argument("payload")
    verify.add_argument("signature")

    poll = sub.add_parser("poll", help="Poll the API for a payment confirmation")
    poll.add_argument("payload")
    poll.add_argument("--signature", default=None)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the vendor command line."""
    args = _build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with PaymentVendor.from_settings(settings) as vendor:
        try:
            if args.command == "qr":
                coin_amount = vendor.convert(args.amount, args.currency)
                request = vendor.create_payment_request(
                    coin_amount, args.outlet, args.payment_id
                )
                print(request.token)
                print(request.viewer_url)
            elif args.command == "sign":
                print(vendor.sign(args.payload))
            elif args.command == "verify":
                valid = vendor.verify(args.payload, args.signature)
                print("valid" if valid else "invalid")
                return 0 if valid else 1
            elif args.command == "poll":
                print(json.dumps(vendor.poll(args.payload, args.signature)))
        except VendorError as e:
            print(f"{e.kind.value}: {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
