"""View-model for the QR code edit page.

Everything the page renders (save bar, product card, discount select, preview
and download actions) is derived from the controller on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..config import Settings, get_settings
from .client import QRCodeClient
from .controller import CodeEditController, SubmitResult
from .discounts import DEFAULT_PAGE_SIZE, DiscountCatalog, DiscountOption
from .entities import Destination, ProductImage, QRCode
from .urls import destination_url

DISCOUNT_CREATE_PATH = "/admin/discounts/new"


@dataclass(frozen=True)
class Action:
    label: str
    disabled: bool = False
    loading: bool = False


@dataclass(frozen=True)
class SaveBar:
    visible: bool
    save: Action
    discard: Action


@dataclass(frozen=True)
class ProductCard:
    action_label: str
    picker_open: bool
    title: str | None
    thumbnail: ProductImage | None
    error: str | None


@dataclass(frozen=True)
class DiscountControl:
    options: list[DiscountOption]
    value: str
    disabled: bool


class CodeEditSurface:
    def __init__(
        self,
        controller: CodeEditController,
        *,
        shop_origin: str,
        api_base_url: str,
        open_url: Callable[[str], Any] | None = None,
    ) -> None:
        self.controller = controller
        self.shop_origin = shop_origin
        self.api_base_url = api_base_url.rstrip("/")
        self._open_url = open_url

    def save_bar(self) -> SaveBar:
        busy = self.controller.submitting
        return SaveBar(
            visible=self.controller.dirty,
            save=Action("Save", disabled=busy, loading=busy),
            discard=Action("Discard", disabled=busy, loading=busy),
        )

    async def save(self) -> SubmitResult:
        return await self.controller.submit()

    def discard(self) -> bool:
        return self.controller.discard()

    def toggle_picker(self) -> None:
        self.controller.selector.toggle()

    def cancel_picker(self) -> None:
        self.controller.selector.cancel()

    def select_product(self, payload: Any) -> None:
        self.controller.selector.select(payload)

    def product_card(self) -> ProductCard:
        fields = self.controller.fields
        display = fields.display if fields.product_id.value else None
        return ProductCard(
            action_label=self.controller.selector.action_label,
            picker_open=self.controller.selector.open,
            title=display.title if display is not None else None,
            # no images: the page shows a placeholder icon
            thumbnail=display.thumbnail if display is not None else None,
            error=fields.product_id.error,
        )

    async def load_discounts(self, catalog: DiscountCatalog, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        await self.controller.discounts.refresh(catalog, page_size)

    def discount_control(self) -> DiscountControl:
        resolver = self.controller.discounts
        return DiscountControl(
            options=resolver.options,
            value=self.controller.fields.discount_id.value,
            disabled=resolver.disabled,
        )

    def select_discount(self, identifier: str) -> None:
        self.controller.select_discount(identifier)

    def create_discount(self) -> str:
        """Open the admin discount-creation page in a new target.

        The catalog is not refreshed afterwards; call ``load_discounts`` again
        to pick up the new code.
        """
        url = f"{self.shop_origin}{DISCOUNT_CREATE_PATH}"
        if self._open_url is not None:
            self._open_url(url)
        return url

    @property
    def delete_available(self) -> bool:
        return self.controller.can_delete

    async def delete(self) -> bool:
        if not self.delete_available:
            return False
        return await self.controller.delete()

    @property
    def preview_available(self) -> bool:
        fields = self.controller.fields
        if not fields.handle.value:
            return False
        return fields.destination.value != Destination.CHECKOUT or bool(fields.variant_id.value)

    def preview_destination(self) -> str | None:
        if not self.preview_available:
            return None
        fields = self.controller.fields
        url = destination_url(
            fields.destination.value,
            host=self.shop_origin,
            handle=fields.handle.value,
            variant_id=fields.variant_id.value,
            discount_code=fields.discount_code.value,
        )
        if self._open_url is not None:
            self._open_url(url)
        return url

    def image_url(self) -> str | None:
        code_id = self.controller.qrcode_id
        if code_id is None:
            return None
        return f"{self.api_base_url}/qrcodes/{code_id}/image"

    def unmount(self) -> None:
        self.controller.close()


def catalog_from_settings(settings: Settings | None = None) -> DiscountCatalog:
    settings = settings or get_settings()
    return DiscountCatalog.for_shop(
        settings.shop_origin,
        api_version=settings.shopify_api_version,
        access_token=settings.shopify_admin_token,
        timeout=settings.request_timeout,
    )


def create_surface(
    qrcode: QRCode | None = None,
    *,
    client: QRCodeClient | None = None,
    navigate: Callable[[str], None] | None = None,
    open_url: Callable[[str], Any] | None = None,
    settings: Settings | None = None,
) -> CodeEditSurface:
    """Mount an edit surface for ``qrcode`` (or a new code) using configured endpoints."""
    settings = settings or get_settings()
    if client is None:
        client = QRCodeClient(settings.api_base_url, timeout=settings.request_timeout)
    controller = CodeEditController(client, qrcode=qrcode, navigate=navigate)
    return CodeEditSurface(
        controller,
        shop_origin=settings.shop_origin,
        api_base_url=settings.api_base_url,
        open_url=open_url,
    )


__all__ = [
    "Action",
    "CodeEditSurface",
    "DISCOUNT_CREATE_PATH",
    "DiscountControl",
    "ProductCard",
    "SaveBar",
    "catalog_from_settings",
    "create_surface",
]
