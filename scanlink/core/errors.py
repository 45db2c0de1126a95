"""Error types raised by the remote collaborators.

Validation problems are never raised: they are reported per field through
``ValidationReport``.
"""


class TransportError(Exception):
    """A lifecycle API call failed: network error or non-2xx response."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class CatalogUnavailable(Exception):
    """The discount catalog could not be fetched or decoded."""


__all__ = ["CatalogUnavailable", "TransportError"]
