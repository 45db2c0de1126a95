from dataclasses import dataclass
from enum import Enum
from typing import Any


class Destination(str, Enum):
    PRODUCT = "product"
    CHECKOUT = "checkout"

    @classmethod
    def parse(cls, value: Any) -> "Destination":
        """Normalize a destination from the enum, a string, or the legacy one-item list form."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise ValueError(f"Destination must be a single choice, got {list(value)!r}")
            value = value[0]
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unsupported destination: {value!r}") from None


NO_DISCOUNT = ""


@dataclass(frozen=True)
class ProductImage:
    original_src: str
    alt_text: str | None = None


@dataclass(frozen=True)
class ProductDisplay:
    """Last-known display data for a product, as returned by the picker or the API.

    This is a display cache only. The authoritative reference lives in the
    ``product_id``/``variant_id``/``handle`` fields.
    """

    title: str | None = None
    images: tuple[ProductImage, ...] = ()
    handle: str | None = None

    @property
    def thumbnail(self) -> ProductImage | None:
        return self.images[0] if self.images else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "handle": self.handle,
            "images": [
                {"originalSrc": image.original_src, "altText": image.alt_text}
                for image in self.images
            ],
        }


def _clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def images_from_payload(raw_images: Any) -> tuple[ProductImage, ...]:
    if not isinstance(raw_images, list):
        return ()
    images: list[ProductImage] = []
    for raw_image in raw_images:
        if isinstance(raw_image, str):
            src = _clean_text(raw_image)
            alt = None
        elif isinstance(raw_image, dict):
            src = _clean_text(raw_image.get("originalSrc") or raw_image.get("src") or raw_image.get("url"))
            alt = _clean_text(raw_image.get("altText") or raw_image.get("alt"))
        else:
            continue
        if src:
            images.append(ProductImage(original_src=src, alt_text=alt))
    return tuple(images)


def product_display_from_payload(payload: Any) -> ProductDisplay | None:
    if not isinstance(payload, dict):
        return None
    title = _clean_text(payload.get("title"))
    images = images_from_payload(payload.get("images"))
    handle = _clean_text(payload.get("handle"))
    if title is None and not images:
        return None
    return ProductDisplay(title=title, images=images, handle=handle)


@dataclass(frozen=True)
class QRCode:
    """A persisted scannable code, as confirmed by the API."""

    title: str
    product_id: str
    variant_id: str = ""
    handle: str = ""
    destination: Destination = Destination.PRODUCT
    discount_id: str = NO_DISCOUNT
    discount_code: str = ""
    id: str | None = None
    product: ProductDisplay | None = None
    scans: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "QRCode":
        if not isinstance(payload, dict):
            raise ValueError("QR code payload must be an object")
        product = payload.get("product") if isinstance(payload.get("product"), dict) else {}
        raw_id = payload.get("id")
        scans = payload.get("scans")
        return cls(
            id=str(raw_id) if raw_id not in (None, "") else None,
            title=str(payload.get("title") or ""),
            product_id=str(payload.get("productId") or product.get("id") or ""),
            variant_id=str(payload.get("variantId") or ""),
            handle=str(payload.get("handle") or product.get("handle") or ""),
            destination=Destination.parse(payload.get("destination") or Destination.PRODUCT),
            discount_id=str(payload.get("discountId") or NO_DISCOUNT),
            discount_code=str(payload.get("discountCode") or ""),
            product=product_display_from_payload(product),
            scans=scans if isinstance(scans, int) else 0,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "productId": self.product_id,
            "variantId": self.variant_id,
            "handle": self.handle,
            "destination": self.destination.value,
            "discountId": self.discount_id,
            "discountCode": self.discount_code,
            "product": self.product.to_dict() if self.product is not None else None,
            "scans": self.scans,
        }


__all__ = [
    "Destination",
    "NO_DISCOUNT",
    "ProductDisplay",
    "ProductImage",
    "QRCode",
    "images_from_payload",
    "product_display_from_payload",
]
