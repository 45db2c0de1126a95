from typing import Any

from ...config import get_settings
from ..entities import QRCode

_SUPPORTED_VERBOSITIES = {"low", "medium", "high", "extrahigh"}


def _normalize_verbosity(verbosity: str) -> str:
    normalized = str(verbosity or "").strip().lower()
    if normalized in _SUPPORTED_VERBOSITIES:
        return normalized
    return "medium"


def _truncate(value: str | None, *, limit: int) -> str:
    text = str(value or "").strip()
    if len(text) <= limit:
        return text
    return f"{text[:limit].rstrip()}... [truncated]"


def qrcode_to_loggable(
    qrcode: QRCode,
    *,
    verbosity: str | None = None,
    debug_enabled: bool | None = None,
) -> dict[str, Any] | None:
    settings = get_settings()
    if debug_enabled is None:
        debug_enabled = settings.debug

    if not debug_enabled:
        return None

    resolved_verbosity = verbosity if verbosity is not None else settings.log_verbosity
    level = _normalize_verbosity(resolved_verbosity)
    data = qrcode.to_dict()
    if level == "extrahigh":
        return data

    if level == "high":
        data.pop("product", None)
        return data

    product = data.get("product") if isinstance(data.get("product"), dict) else {}
    summary = {
        "id": data.get("id"),
        "title": _truncate(data.get("title"), limit=80),
        "destination": data.get("destination"),
        "product_id": data.get("productId"),
        "handle": data.get("handle"),
        "discount_code": data.get("discountCode") or None,
        "images": {"count": len(product.get("images") or [])},
        "scans": data.get("scans"),
    }

    if level == "low":
        return {
            "id": summary.get("id"),
            "title": summary.get("title"),
            "destination": summary.get("destination"),
        }

    return summary
