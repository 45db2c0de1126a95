"""Public package entrypoint for ScanLink.

This package provides a stable import surface for the QR code editing engine,
plus optional frontend adapters (CLI and FastAPI reference API).
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "CodeEditController": ("scanlink.core", "CodeEditController"),
    "CodeEditSurface": ("scanlink.core", "CodeEditSurface"),
    "Destination": ("scanlink.core", "Destination"),
    "QRCode": ("scanlink.core", "QRCode"),
    "QRCodeClient": ("scanlink.core", "QRCodeClient"),
    "app": ("scanlink.server.main", "app"),
    "create_app": ("scanlink.server.main", "create_app"),
    "create_surface": ("scanlink.core", "create_surface"),
    "destination_url": ("scanlink.core", "destination_url"),
}

try:
    __version__ = version("scanlink")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CodeEditController",
    "CodeEditSurface",
    "Destination",
    "QRCode",
    "QRCodeClient",
    "__version__",
    "app",
    "create_app",
    "create_surface",
    "destination_url",
]


def __getattr__(name: str) -> Any:
    target = _LAZY_EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, attribute_name = target
    module = __import__(module_name, fromlist=[attribute_name])
    value = getattr(module, attribute_name)
    globals()[name] = value
    return value
