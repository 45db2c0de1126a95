"""Server-facing alias of the shared runtime settings."""

from ..config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
