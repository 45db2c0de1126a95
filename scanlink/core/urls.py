"""Storefront URLs a QR code can resolve to."""

import re
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from .entities import Destination

_VARIANT_GID_RE = re.compile(r"^gid://shopify/ProductVariant/([0-9]+)$")


def _origin(host: str) -> tuple[str, str]:
    text = (host or "").strip()
    if not text:
        raise ValueError("host is required")
    if not text.startswith(("http://", "https://")):
        text = f"https://{text}"
    parts = urlsplit(text)
    return parts.scheme, parts.netloc


def _build(host: str, path: str, query: list[tuple[str, str]]) -> str:
    scheme, netloc = _origin(host)
    return urlunsplit((scheme, netloc, path, urlencode(query), ""))


def numeric_variant_id(variant_id: str) -> str:
    text = str(variant_id or "").strip()
    match = _VARIANT_GID_RE.match(text)
    return match.group(1) if match else text


def product_view_url(
    host: str,
    handle: str,
    variant_id: str | None = None,
    discount_code: str | None = None,
) -> str:
    if not handle:
        raise ValueError("handle is required to build a product URL")
    product_path = f"/products/{quote(handle)}"
    query: list[tuple[str, str]] = []
    if variant_id:
        query.append(("variant", numeric_variant_id(variant_id)))

    if discount_code:
        # /discount/<code> applies the code, then redirects to the product page.
        redirect = f"{product_path}?{urlencode(query)}" if query else product_path
        return _build(host, f"/discount/{quote(discount_code)}", [("redirect", redirect)])
    return _build(host, product_path, query)


def product_checkout_url(
    host: str,
    variant_id: str,
    quantity: int = 1,
    discount_code: str | None = None,
) -> str:
    if not variant_id:
        raise ValueError("variant_id is required to build a checkout URL")
    if quantity < 1:
        raise ValueError("quantity must be at least 1")
    query: list[tuple[str, str]] = []
    if discount_code:
        query.append(("discount", discount_code))
    return _build(host, f"/cart/{quote(numeric_variant_id(variant_id))}:{quantity}", query)


def destination_url(
    destination: Destination | str,
    *,
    host: str,
    handle: str,
    variant_id: str | None = None,
    discount_code: str | None = None,
) -> str:
    """Build the URL a scan of the code should land on.

    Callers must only invoke this once a product is selected; a missing
    handle is rejected rather than papered over.
    """
    if not handle:
        raise ValueError("No product selected: handle is required")
    mode = Destination.parse(destination)
    if mode is Destination.CHECKOUT:
        return product_checkout_url(host, variant_id or "", discount_code=discount_code or None)
    return product_view_url(host, handle, variant_id=variant_id or None, discount_code=discount_code or None)


__all__ = ["destination_url", "numeric_variant_id", "product_checkout_url", "product_view_url"]
