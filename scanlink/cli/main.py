"""Command-line frontend for ScanLink."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from scanlink.config import get_settings
from scanlink.core import (
    Destination,
    DiscountResolver,
    QRCodeClient,
    catalog_from_settings,
    destination_url,
)

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def _json_dump(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _cmd_preview(args: argparse.Namespace) -> int:
    settings = get_settings()
    url = destination_url(
        args.mode,
        host=args.host or settings.shop_origin,
        handle=args.handle,
        variant_id=args.variant,
        discount_code=args.discount_code,
    )
    _json_dump({"destination": args.mode, "url": url})
    return 0


def _cmd_discounts(args: argparse.Namespace) -> int:
    settings = get_settings()
    resolver = DiscountResolver()
    catalog = catalog_from_settings(settings)
    page_size = args.first or settings.discount_page_size
    # one page only; the catalog is not paginated further
    resolver.apply_page(catalog.fetch_page(page_size))
    if resolver.disabled:
        raise RuntimeError(resolver.error or "Discount catalog unavailable")
    _json_dump([{"label": option.label, "value": option.value} for option in resolver.options])
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    settings = get_settings()
    client = QRCodeClient(args.api_base_url or settings.api_base_url, timeout=settings.request_timeout)
    client.delete(args.id)
    _json_dump({"deleted": args.id})
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from scanlink.server.main import run

    run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scanlink", description="ScanLink QR code tooling")
    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser("preview", help="Build the URL a QR code resolves to")
    preview.add_argument("handle", help="Product handle")
    preview.add_argument("--mode", default=Destination.PRODUCT.value, choices=[d.value for d in Destination])
    preview.add_argument("--variant", default=None, help="Variant id (numeric or gid)")
    preview.add_argument("--discount-code", default=None)
    preview.add_argument("--host", default=None, help="Shop origin; defaults to SHOP_ORIGIN")
    preview.set_defaults(func=_cmd_preview)

    discounts = subparsers.add_parser("discounts", help="List discount options from the first catalog page")
    discounts.add_argument("--first", type=int, default=None)
    discounts.set_defaults(func=_cmd_discounts)

    delete = subparsers.add_parser("delete", help="Delete a QR code through the API")
    delete.add_argument("id", help="QR code id")
    delete.add_argument("--api-base-url", default=None)
    delete.set_defaults(func=_cmd_delete)

    serve = subparsers.add_parser("serve", help="Run the reference QR code API")
    serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except Exception as exc:
        parser.exit(status=2, message=f"error: {exc}\n")


if __name__ == "__main__":
    raise SystemExit(main())
