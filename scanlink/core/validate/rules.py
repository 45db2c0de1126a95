"""Field validators for the QR code draft."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Validator = Callable[[Any], "str | None"]

TITLE_REQUIRED = "Please name your QR code"
PRODUCT_REQUIRED = "Please select a product"


def not_empty_string(message: str) -> Validator:
    def _validate(value: Any) -> str | None:
        if value is None or not str(value).strip():
            return message
        return None

    return _validate


def run_validators(value: Any, validators: tuple[Validator, ...]) -> str | None:
    """Return the first failing validator's message, if any."""
    for validator in validators:
        message = validator(value)
        if message:
            return message
    return None


__all__ = ["PRODUCT_REQUIRED", "TITLE_REQUIRED", "Validator", "not_empty_string", "run_validators"]
