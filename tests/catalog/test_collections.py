"""Tests for storepulse/catalog/collections.py"""

from unittest.mock import MagicMock

import pytest
import requests

from storepulse.catalog.collections import fetch_collections

HOST = "store.example.com"


@pytest.fixture
def client(fetch_settings):
    c = MagicMock()
    c.settings = fetch_settings
    return c


class TestFetchCollections:
    def test_returns_collections(self, client, make_response):
        client.get.return_value = make_response(200, {"collections": [
            {"id": 1, "title": "Summer", "handle": "summer"},
            {"id": 2, "title": "Sale", "handle": "sale", "products_count": 40},
        ]})

        collections = fetch_collections(HOST, client)

        assert [c.title for c in collections] == ["Summer", "Sale"]
        assert collections[1].products_count == 40
        client.get.assert_called_once_with(HOST, "collections.json", timeout=30)

    def test_non_2xx_returns_empty(self, client, make_response):
        client.get.return_value = make_response(403)
        assert fetch_collections(HOST, client) == []

    def test_timeout_returns_empty(self, client):
        client.get.side_effect = requests.exceptions.Timeout()
        assert fetch_collections(HOST, client) == []

    def test_malformed_json_returns_empty(self, client, make_response):
        client.get.return_value = make_response(200, json_error=True)
        assert fetch_collections(HOST, client) == []

    def test_missing_key_returns_empty(self, client, make_response):
        client.get.return_value = make_response(200, {"products": []})
        assert fetch_collections(HOST, client) == []

    def test_skips_non_dict_entries(self, client, make_response):
        client.get.return_value = make_response(200, {"collections": [{"id": 1, "title": "A"}, "junk"]})
        assert len(fetch_collections(HOST, client)) == 1
