"""Shared runtime settings for server/CLI adapters and the edit surface.

This module owns environment-backed application settings. Core modules read
them through ``get_settings()`` but never load dotenv files themselves; the
server and CLI entrypoints do that before the first call.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    app_name: str
    debug: bool
    log_verbosity: str
    api_base_url: str
    shop_origin: str
    shopify_admin_token: str | None
    shopify_api_version: str
    discount_page_size: int
    request_timeout: int
    cors_allow_origins: tuple[str, ...]


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _env_choice(name: str, default: str, *, allowed: set[str]) -> str:
    val = os.getenv(name)
    if val is None:
        return default
    normalized = val.strip().lower()
    if normalized in allowed:
        return normalized
    return default


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        parsed = int(val.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    origins = tuple(
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    )
    return Settings(
        app_name=os.getenv("APP_NAME", "ScanLink"),
        debug=_env_bool("DEBUG", default=False),
        log_verbosity=_env_choice(
            "LOG_VERBOSITY",
            default="medium",
            allowed={"low", "medium", "high", "extrahigh"},
        ),
        api_base_url=os.getenv("SCANLINK_API_BASE_URL", "http://localhost:8000").rstrip("/"),
        shop_origin=os.getenv("SHOP_ORIGIN", "https://example.myshopify.com").rstrip("/"),
        shopify_admin_token=os.getenv("SHOPIFY_ADMIN_TOKEN"),
        shopify_api_version=os.getenv("SHOPIFY_API_VERSION", "2024-01"),
        discount_page_size=_env_int("DISCOUNT_PAGE_SIZE", 25),
        request_timeout=_env_int("REQUEST_TIMEOUT", 20),
        cors_allow_origins=origins or ("*",),
    )


__all__ = ["Settings", "get_settings"]
