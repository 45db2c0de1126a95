"""Discount catalog access and identifier -> code resolution.

Only the first catalog page is ever requested (``first: N``). Shops with more
code discounts than the page size will not see the remainder in the options;
there is deliberately no "load more".
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import requests

from .entities import NO_DISCOUNT
from .errors import CatalogUnavailable

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 25

_CODES_FRAGMENT = """
              codes(first: 1) {
                edges {
                  node {
                    code
                  }
                }
              }"""

DISCOUNTS_QUERY = f"""
query discounts($first: Int!) {{
  codeDiscountNodes(first: $first) {{
    edges {{
      node {{
        id
        codeDiscount {{
          ... on DiscountCodeBasic {{{_CODES_FRAGMENT}
          }}
          ... on DiscountCodeBxgy {{{_CODES_FRAGMENT}
          }}
          ... on DiscountCodeFreeShipping {{{_CODES_FRAGMENT}
          }}
        }}
      }}
    }}
  }}
}}
"""


@dataclass(frozen=True)
class DiscountOption:
    label: str
    value: str


NO_DISCOUNT_OPTION = DiscountOption(label="No discount", value=NO_DISCOUNT)


class DiscountCodeCache:
    """identifier -> code side table filled while rendering options.

    The same identifier always maps to the same code, so repeated writes are
    harmless.
    """

    def __init__(self) -> None:
        self._codes: dict[str, str] = {}

    def put(self, identifier: str, code: str) -> None:
        if identifier and code:
            self._codes[identifier] = code

    def get(self, identifier: str) -> str | None:
        return self._codes.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._codes

    def __len__(self) -> int:
        return len(self._codes)


def parse_discount_page(payload: Any) -> list[tuple[str, str]]:
    """Extract ``(identifier, code)`` pairs from a ``codeDiscountNodes`` response."""
    if not isinstance(payload, dict):
        raise CatalogUnavailable("Discount catalog response is not an object")
    if payload.get("errors"):
        raise CatalogUnavailable(f"Discount catalog query failed: {payload['errors']}")
    data = payload.get("data", payload)
    try:
        edges = data["codeDiscountNodes"]["edges"]
    except (KeyError, TypeError) as exc:
        raise CatalogUnavailable("Discount catalog response has no codeDiscountNodes") from exc

    records: list[tuple[str, str]] = []
    for edge in edges or []:
        node = (edge or {}).get("node") or {}
        identifier = node.get("id")
        code_edges = ((node.get("codeDiscount") or {}).get("codes") or {}).get("edges") or []
        if not identifier or not code_edges:
            # discount types outside the queried fragments come back without codes
            continue
        code = (code_edges[0].get("node") or {}).get("code")
        if code:
            records.append((str(identifier), str(code)))
    return records


class DiscountCatalog:
    """Shopify Admin GraphQL client for code discounts."""

    def __init__(
        self,
        endpoint: str,
        *,
        access_token: str | None = None,
        session: requests.Session | None = None,
        timeout: int = 20,
    ) -> None:
        self.endpoint = endpoint
        self.access_token = access_token
        self._http = session if session is not None else requests.Session()
        self.timeout = timeout

    @classmethod
    def for_shop(
        cls,
        shop_origin: str,
        *,
        api_version: str,
        access_token: str | None = None,
        session: requests.Session | None = None,
        timeout: int = 20,
    ) -> "DiscountCatalog":
        endpoint = f"{shop_origin.rstrip('/')}/admin/api/{api_version}/graphql.json"
        return cls(endpoint, access_token=access_token, session=session, timeout=timeout)

    def fetch_page(self, first: int = DEFAULT_PAGE_SIZE) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["X-Shopify-Access-Token"] = self.access_token
        try:
            response = self._http.post(
                self.endpoint,
                json={"query": DISCOUNTS_QUERY, "variables": {"first": first}},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise CatalogUnavailable(f"Discount catalog request failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogUnavailable("Discount catalog response is not valid JSON") from exc


class DiscountResolver:
    PENDING = "pending"
    LOADED = "loaded"
    ERROR = "error"

    def __init__(self, cache: DiscountCodeCache | None = None) -> None:
        self.cache = cache if cache is not None else DiscountCodeCache()
        self.status = self.PENDING
        self.error: str | None = None
        self._records: list[tuple[str, str]] = []

    @property
    def disabled(self) -> bool:
        return self.status != self.LOADED

    @property
    def options(self) -> list[DiscountOption]:
        if self.status != self.LOADED:
            return []
        options = [NO_DISCOUNT_OPTION]
        for identifier, code in self._records:
            self.cache.put(identifier, code)
            options.append(DiscountOption(label=code, value=identifier))
        return options

    def code_for(self, identifier: str) -> str:
        # only identifiers in the current snapshot resolve; the cache may hold older ones
        if not identifier or identifier not in {known for known, _ in self._records}:
            return ""
        return self.cache.get(identifier) or ""

    def apply_page(self, payload: Any) -> None:
        try:
            records = parse_discount_page(payload)
        except CatalogUnavailable as exc:
            self.fail(exc)
            return
        self._records = records
        self.status = self.LOADED
        self.error = None

    def fail(self, exc: Exception) -> None:
        logger.warning("Discount catalog unavailable: %s", exc)
        self._records = []
        self.status = self.ERROR
        self.error = str(exc)

    async def refresh(self, catalog: DiscountCatalog, first: int = DEFAULT_PAGE_SIZE) -> None:
        self.status = self.PENDING
        try:
            payload = await asyncio.to_thread(catalog.fetch_page, first)
        except CatalogUnavailable as exc:
            self.fail(exc)
            return
        self.apply_page(payload)
        logger.debug("Loaded %d discount code(s).", len(self._records))


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DISCOUNTS_QUERY",
    "DiscountCatalog",
    "DiscountCodeCache",
    "DiscountOption",
    "DiscountResolver",
    "NO_DISCOUNT_OPTION",
    "parse_discount_page",
]
