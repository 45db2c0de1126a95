"""Draft validation helpers."""

from .report import ValidationIssue, ValidationReport
from .rules import PRODUCT_REQUIRED, TITLE_REQUIRED, Validator, not_empty_string, run_validators

__all__ = [
    "PRODUCT_REQUIRED",
    "TITLE_REQUIRED",
    "ValidationIssue",
    "ValidationReport",
    "Validator",
    "not_empty_string",
    "run_validators",
]
