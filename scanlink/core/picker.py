"""Bridge between the external product picker and the draft fields."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .entities import ProductDisplay, images_from_payload
from .fields import DraftFields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerSelection:
    product_id: str
    variant_id: str
    handle: str
    display: ProductDisplay

    @classmethod
    def from_payload(cls, payload: Any) -> "PickerSelection":
        """Parse ``{"selection": [product]}`` or a bare product record."""
        if isinstance(payload, dict) and "selection" in payload:
            selection = payload.get("selection")
            if not isinstance(selection, list) or not selection:
                raise ValueError("Picker selection is empty")
            if len(selection) > 1:
                raise ValueError("Exactly one product can be selected")
            payload = selection[0]
        if not isinstance(payload, dict):
            raise ValueError("Picker product must be an object")

        product_id = str(payload.get("id") or "").strip()
        if not product_id:
            raise ValueError("Picker product has no id")
        variants = payload.get("variants")
        if not isinstance(variants, list) or not variants:
            raise ValueError("Picker product has no variants")
        first_variant = variants[0]
        variant_id = first_variant.get("id") if isinstance(first_variant, dict) else first_variant
        handle = str(payload.get("handle") or "").strip()
        title = str(payload.get("title") or "").strip() or None
        return cls(
            product_id=product_id,
            variant_id=str(variant_id or ""),
            handle=handle,
            display=ProductDisplay(
                title=title,
                images=images_from_payload(payload.get("images")),
                handle=handle or None,
            ),
        )


class ProductSelector:
    def __init__(self, fields: DraftFields) -> None:
        self._fields = fields
        self.open = False

    @property
    def action_label(self) -> str:
        return "Change product" if self._fields.product_id.value else "Select product"

    def toggle(self) -> None:
        self.open = not self.open

    def cancel(self) -> None:
        self.open = False

    def select(self, payload: Any) -> PickerSelection:
        # parse fully before touching any field so a bad payload changes nothing
        selection = payload if isinstance(payload, PickerSelection) else PickerSelection.from_payload(payload)
        self._fields.product_id.set(selection.product_id)
        self._fields.variant_id.set(selection.variant_id)
        self._fields.handle.set(selection.handle)
        self._fields.display = selection.display
        self.open = False
        logger.debug("Selected product %s (variant %s).", selection.product_id, selection.variant_id)
        return selection


__all__ = ["PickerSelection", "ProductSelector"]
