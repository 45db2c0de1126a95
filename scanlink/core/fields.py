"""Draft field set for the QR code edit form.

Each field tracks its current value against the last committed value (the
value at load or at the last successful save). The aggregate ``dirty`` flag is
derived from those per-field comparisons, never stored.
"""

from __future__ import annotations

from typing import Any

from .entities import NO_DISCOUNT, Destination, ProductDisplay, QRCode
from .validate import (
    PRODUCT_REQUIRED,
    TITLE_REQUIRED,
    ValidationIssue,
    ValidationReport,
    Validator,
    not_empty_string,
    run_validators,
)


class Field:
    def __init__(self, name: str, value: Any, validators: tuple[Validator, ...] = ()) -> None:
        self.name = name
        self.validators = validators
        self._committed = value
        self.value = value
        self.error: str | None = None

    @property
    def committed(self) -> Any:
        return self._committed

    @property
    def dirty(self) -> bool:
        return self.value != self._committed

    def set(self, value: Any) -> None:
        self.value = value
        if self.error is not None:
            self.validate()

    def reset(self) -> None:
        self.value = self._committed
        self.error = None

    def validate(self) -> bool:
        self.error = run_validators(self.value, self.validators)
        return self.error is None

    def commit(self, value: Any, *, keep_current: bool = False) -> None:
        """Move the committed snapshot to ``value``.

        With ``keep_current`` the in-progress value survives (the field stays
        dirty if it differs); otherwise the field is reset onto the new value.
        """
        self._committed = value
        if keep_current:
            return
        self.reset()

    def __repr__(self) -> str:
        return f"Field({self.name!r}, value={self.value!r}, dirty={self.dirty})"


class DraftFields:
    FIELD_NAMES = (
        "title",
        "product_id",
        "variant_id",
        "handle",
        "destination",
        "discount_id",
        "discount_code",
    )

    # wire name for each field in the create/update body
    _BODY_KEYS = {
        "title": "title",
        "product_id": "productId",
        "variant_id": "variantId",
        "handle": "handle",
        "destination": "destination",
        "discount_id": "discountId",
        "discount_code": "discountCode",
    }

    def __init__(self, qrcode: QRCode | None = None) -> None:
        seed = _seed_values(qrcode)
        self.title = Field("title", seed["title"], (not_empty_string(TITLE_REQUIRED),))
        self.product_id = Field("product_id", seed["product_id"], (not_empty_string(PRODUCT_REQUIRED),))
        self.variant_id = Field("variant_id", seed["variant_id"])
        self.handle = Field("handle", seed["handle"])
        self.destination = Field("destination", seed["destination"])
        self.discount_id = Field("discount_id", seed["discount_id"])
        self.discount_code = Field("discount_code", seed["discount_code"])
        # Not a field: display cache for the selected product, excluded from dirty.
        self._committed_display = qrcode.product if qrcode is not None else None
        self.display: ProductDisplay | None = self._committed_display

    def fields(self) -> list[Field]:
        return [getattr(self, name) for name in self.FIELD_NAMES]

    def __getitem__(self, name: str) -> Field:
        if name not in self.FIELD_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    @property
    def dirty(self) -> bool:
        return any(item.dirty for item in self.fields())

    def dirty_fields(self) -> list[str]:
        return [item.name for item in self.fields() if item.dirty]

    def validate(self) -> bool:
        results = [item.validate() for item in self.fields()]
        return all(results)

    def report(self) -> ValidationReport:
        issues = [
            ValidationIssue(code=f"invalid_{item.name}", message=item.error, field=item.name)
            for item in self.fields()
            if item.error
        ]
        return ValidationReport(valid=not issues, issues=issues)

    def reset(self) -> None:
        for item in self.fields():
            item.reset()
        self.display = self._committed_display

    def values(self) -> dict[str, Any]:
        return {item.name: item.value for item in self.fields()}

    def to_body(self) -> dict[str, Any]:
        body = {self._BODY_KEYS[name]: value for name, value in self.values().items()}
        body["destination"] = Destination.parse(body["destination"]).value
        return body

    def commit(
        self,
        qrcode: QRCode,
        *,
        submitted: dict[str, Any] | None = None,
        submitted_display: ProductDisplay | None = None,
    ) -> None:
        """Adopt ``qrcode`` as the committed state.

        ``submitted`` is the ``values()`` snapshot the save was made from. A
        field whose value moved on since that snapshot keeps its newer value.
        The API may not echo display data; the display sent with the save is
        kept as the committed display in that case.
        """
        seed = _seed_values(qrcode)
        for item in self.fields():
            edited_since = submitted is not None and item.value != submitted.get(item.name)
            item.commit(seed[item.name], keep_current=edited_since)

        if qrcode.product is not None:
            self._committed_display = qrcode.product
        elif submitted is not None:
            self._committed_display = submitted_display
        else:
            self._committed_display = None
        if not self.product_id.dirty:
            self.display = self._committed_display


def _seed_values(qrcode: QRCode | None) -> dict[str, Any]:
    if qrcode is None:
        return {
            "title": "",
            "product_id": "",
            "variant_id": "",
            "handle": "",
            "destination": Destination.PRODUCT,
            "discount_id": NO_DISCOUNT,
            "discount_code": "",
        }
    return {
        "title": qrcode.title or "",
        "product_id": qrcode.product_id or "",
        "variant_id": qrcode.variant_id or "",
        "handle": qrcode.handle or "",
        "destination": qrcode.destination,
        "discount_id": qrcode.discount_id or NO_DISCOUNT,
        "discount_code": qrcode.discount_code or "",
    }


__all__ = ["DraftFields", "Field"]
