"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from storepulse.common.config_loader import FetchSettings


@pytest.fixture
def fetch_settings():
    """Fetch settings with page delays disabled for fast tests."""
    return FetchSettings(page_delay=0, page_delay_step=0)


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""
    def _make(status_code=200, json_data=None, json_error=False):
        response = MagicMock()
        response.status_code = status_code
        response.headers = {}
        response.text = "" if json_data is None else str(json_data)[:200]
        if json_error:
            response.json.side_effect = ValueError("Expecting value")
        else:
            response.json.return_value = json_data
        return response
    return _make


@pytest.fixture
def make_product():
    """Build a raw /products.json record from a list of variant prices."""
    counter = {"id": 0}

    def _make(prices, compare_at=None, **fields):
        counter["id"] += 1
        compare_at = compare_at or [None] * len(prices)
        product = {
            "id": counter["id"],
            "title": f"Product {counter['id']}",
            "product_type": "Apparel",
            "vendor": "TestBrand",
            "tags": ["new"],
            "created_at": "2024-01-15T10:00:00+05:30",
            "images": [{"src": "https://cdn.example.com/a.jpg"}],
            "variants": [
                {
                    "price": price,
                    "compare_at_price": cmp,
                    "available": True,
                    "sku": f"SKU-{counter['id']}-{i}",
                    "title": f"Variant {i}",
                }
                for i, (price, cmp) in enumerate(zip(prices, compare_at))
            ],
        }
        product.update(fields)
        return product
    return _make


@pytest.fixture
def make_page(make_product):
    """Build a list of ``count`` single-variant products."""
    def _make(count, price="1500.00"):
        return [make_product([price]) for _ in range(count)]
    return _make


@pytest.fixture
def routing_client(fetch_settings, make_response):
    """
    Fake StorefrontClient that answers by endpoint.

    Configure ``client.product_responses`` (consumed in order) and
    ``client.collections_response`` before use.
    """
    client = MagicMock()
    client.settings = fetch_settings
    client.product_responses = []
    client.collections_response = make_response(200, {"collections": []})
    client.calls = []

    def _get(hostname, endpoint, params=None, timeout=None):
        client.calls.append((hostname, endpoint, params))
        if endpoint == "collections.json":
            response = client.collections_response
        else:
            response = client.product_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    client.get.side_effect = _get
    return client
