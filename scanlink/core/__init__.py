"""Core QR code editing engine: draft fields, discounts, picker, URLs, save flow."""

from .client import QRCodeClient, http_session
from .controller import CodeEditController, EditState, SubmitResult, SubmitStatus
from .discounts import (
    DiscountCatalog,
    DiscountCodeCache,
    DiscountOption,
    DiscountResolver,
    NO_DISCOUNT_OPTION,
)
from .entities import Destination, ProductDisplay, ProductImage, QRCode
from .errors import CatalogUnavailable, TransportError
from .fields import DraftFields, Field
from .picker import PickerSelection, ProductSelector
from .surface import CodeEditSurface, catalog_from_settings, create_surface
from .urls import destination_url, product_checkout_url, product_view_url
from .validate import ValidationIssue, ValidationReport

__all__ = [
    "CatalogUnavailable",
    "CodeEditController",
    "CodeEditSurface",
    "Destination",
    "DiscountCatalog",
    "DiscountCodeCache",
    "DiscountOption",
    "DiscountResolver",
    "DraftFields",
    "EditState",
    "Field",
    "NO_DISCOUNT_OPTION",
    "PickerSelection",
    "ProductDisplay",
    "ProductImage",
    "ProductSelector",
    "QRCode",
    "QRCodeClient",
    "SubmitResult",
    "SubmitStatus",
    "TransportError",
    "ValidationIssue",
    "ValidationReport",
    "catalog_from_settings",
    "create_surface",
    "destination_url",
    "http_session",
    "product_checkout_url",
    "product_view_url",
]
