import asyncio

import pytest
import requests

from scanlink.core import (
    CatalogUnavailable,
    DiscountCatalog,
    DiscountCodeCache,
    DiscountOption,
    DiscountResolver,
    NO_DISCOUNT_OPTION,
)
from scanlink.core.discounts import DISCOUNTS_QUERY, parse_discount_page
from tests.helpers._builders import discount_page
from tests.helpers._fakes import FakeCatalog

BASIC_ID = "gid://shopify/DiscountCodeNode/1"
FREE_SHIP_ID = "gid://shopify/DiscountCodeNode/2"


def test_pending_catalog_yields_no_options_and_disabled_control() -> None:
    resolver = DiscountResolver()

    assert resolver.options == []
    assert resolver.disabled is True


def test_loaded_page_prefixes_no_discount_sentinel_and_fills_cache() -> None:
    cache = DiscountCodeCache()
    resolver = DiscountResolver(cache)
    resolver.apply_page(discount_page((BASIC_ID, "SAVE10"), (FREE_SHIP_ID, "SHIPFREE")))

    options = resolver.options

    assert options == [
        NO_DISCOUNT_OPTION,
        DiscountOption(label="SAVE10", value=BASIC_ID),
        DiscountOption(label="SHIPFREE", value=FREE_SHIP_ID),
    ]
    assert NO_DISCOUNT_OPTION.value == ""
    assert resolver.disabled is False
    assert cache.get(BASIC_ID) == "SAVE10"
    assert resolver.code_for(FREE_SHIP_ID) == "SHIPFREE"


def test_unresolved_identifier_resolves_to_no_code() -> None:
    resolver = DiscountResolver()
    resolver.apply_page(discount_page((BASIC_ID, "SAVE10")))
    resolver.options

    assert resolver.code_for("gid://shopify/DiscountCodeNode/404") == ""
    assert resolver.code_for("") == ""


def test_identifier_dropped_by_a_later_page_no_longer_resolves() -> None:
    cache = DiscountCodeCache()
    resolver = DiscountResolver(cache)
    resolver.apply_page(discount_page((BASIC_ID, "SAVE10")))
    resolver.options
    resolver.apply_page(discount_page((FREE_SHIP_ID, "SHIPFREE")))
    resolver.options

    assert cache.get(BASIC_ID) == "SAVE10"
    assert resolver.code_for(BASIC_ID) == ""
    assert resolver.code_for(FREE_SHIP_ID) == "SHIPFREE"


def test_failed_refresh_stops_resolving_previously_loaded_codes() -> None:
    resolver = DiscountResolver()
    resolver.apply_page(discount_page((BASIC_ID, "SAVE10")))
    resolver.options

    asyncio.run(resolver.refresh(FakeCatalog(error=CatalogUnavailable("boom")), 25))

    assert resolver.code_for(BASIC_ID) == ""


def test_catalog_error_disables_control_without_cache_entries() -> None:
    cache = DiscountCodeCache()
    resolver = DiscountResolver(cache)

    asyncio.run(resolver.refresh(FakeCatalog(error=CatalogUnavailable("boom")), 25))

    assert resolver.status == DiscountResolver.ERROR
    assert resolver.disabled is True
    assert resolver.options == []
    assert len(cache) == 0


def test_refresh_requests_a_single_fixed_size_page() -> None:
    catalog = FakeCatalog(discount_page((BASIC_ID, "SAVE10")))
    resolver = DiscountResolver()

    asyncio.run(resolver.refresh(catalog, 25))

    assert catalog.requested == [25]
    assert [option.label for option in resolver.options] == ["No discount", "SAVE10"]


def test_graphql_errors_are_treated_as_unavailable() -> None:
    resolver = DiscountResolver()

    resolver.apply_page({"errors": [{"message": "Access denied"}]})

    assert resolver.disabled is True
    assert "Access denied" in (resolver.error or "")


def test_parse_skips_discounts_without_codes() -> None:
    payload = discount_page((BASIC_ID, "SAVE10"))
    payload["data"]["codeDiscountNodes"]["edges"].append(
        {"node": {"id": "gid://shopify/DiscountCodeNode/3", "codeDiscount": {}}}
    )

    assert parse_discount_page(payload) == [(BASIC_ID, "SAVE10")]


def test_caches_are_independent_per_resolver() -> None:
    first = DiscountResolver()
    second = DiscountResolver()
    first.apply_page(discount_page((BASIC_ID, "SAVE10")))
    first.options

    assert first.code_for(BASIC_ID) == "SAVE10"
    assert second.code_for(BASIC_ID) == ""


class _RecordingSession:
    def __init__(self, response: requests.Response | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.posts: list[dict] = []

    def post(self, url: str, **kwargs) -> requests.Response:
        self.posts.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def _json_response(status: int, body: bytes) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body
    return response


def test_catalog_posts_first_page_query_with_token() -> None:
    session = _RecordingSession(_json_response(200, b'{"data": {"codeDiscountNodes": {"edges": []}}}'))
    catalog = DiscountCatalog.for_shop(
        "https://demo.myshopify.com",
        api_version="2024-01",
        access_token="shpat_test",
        session=session,
    )

    payload = catalog.fetch_page(25)

    assert payload == {"data": {"codeDiscountNodes": {"edges": []}}}
    sent = session.posts[0]
    assert sent["url"] == "https://demo.myshopify.com/admin/api/2024-01/graphql.json"
    assert sent["json"] == {"query": DISCOUNTS_QUERY, "variables": {"first": 25}}
    assert sent["headers"]["X-Shopify-Access-Token"] == "shpat_test"


def test_catalog_transport_failure_raises_catalog_unavailable() -> None:
    catalog = DiscountCatalog("https://demo.myshopify.com/graphql", session=_RecordingSession(error=requests.ConnectionError("down")))

    with pytest.raises(CatalogUnavailable):
        catalog.fetch_page()


def test_catalog_http_error_raises_catalog_unavailable() -> None:
    catalog = DiscountCatalog("https://demo.myshopify.com/graphql", session=_RecordingSession(_json_response(503, b"")))

    with pytest.raises(CatalogUnavailable):
        catalog.fetch_page()
