"""
Module 05 - Leaf Lookup Unit Tests
Tests for core/ledger/lookup.py

The HTTP lookup is exercised with a stub client so no network is used.
"""
import json

import pytest

from core.config.runtime import LedgerConfig
from core.http.client import HttpError, HttpResponse
from core.ledger.lookup import (
    CallableLeafLookup,
    HttpLeafLookup,
    InMemoryLeafLookup,
    LeafLookup,
    as_leaf_lookup,
)
from core.schemas.errors import LookupUnavailableException


class StubClient:
    """Records requested URLs and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def _json_response(payload, status_code=200):
    return HttpResponse(status_code=status_code, content=json.dumps(payload).encode())


class TestAsLeafLookup:

    def test_lookup_passes_through(self, ledger):
        assert as_leaf_lookup(ledger) is ledger
        assert isinstance(ledger, LeafLookup)

    def test_callable_wrapped(self):
        lookup = as_leaf_lookup(lambda index: hex(index))
        assert isinstance(lookup, CallableLeafLookup)
        assert lookup.get_leaf(10) == "0xa"

    def test_other_values_rejected(self):
        with pytest.raises(TypeError):
            as_leaf_lookup("http://ledger")


class TestInMemoryLeafLookup:

    def test_unset_leaf_reads_as_zero_digest(self, ledger):
        assert ledger.get_leaf(123) == "0x" + "00" * 27

    def test_append_uses_leaf_index(self):
        ledger = InMemoryLeafLookup(tree_depth=3)
        assert ledger.append("0xaa") == 3
        assert ledger.append("0xbb") == 4
        assert ledger.get_leaf(4) == "0xbb"
        assert len(ledger) == 2

    def test_preloaded_leaves(self):
        ledger = InMemoryLeafLookup({7: "0x01"})
        assert ledger.get_leaf(7) == "0x01"

    def test_set_leaf(self, ledger):
        ledger.set_leaf(9, "0xcc")
        assert ledger.get_leaf(9) == "0xcc"


class TestHttpLeafLookup:
    """Tests for HttpLeafLookup with a stubbed client."""

    def test_successful_lookup(self):
        client = StubClient(response=_json_response({"value": "ABCD"}))
        lookup = HttpLeafLookup("http://ledger.local/", client=client)

        assert lookup.get_leaf(4294967295) == "0xABCD"
        assert client.urls == ["http://ledger.local/leaves/4294967295"]

    def test_timeout_is_lookup_unavailable(self):
        client = StubClient(error=HttpError("Request timed out", timed_out=True))
        lookup = HttpLeafLookup("http://ledger.local", client=client)

        with pytest.raises(LookupUnavailableException) as exc_info:
            lookup.get_leaf(3)
        assert "timed out" in exc_info.value.message
        assert exc_info.value.retryable
        assert exc_info.value.details["leaf_index"] == 3

    def test_non_2xx_is_lookup_unavailable(self):
        client = StubClient(response=_json_response({"error": "nope"}, status_code=502))
        lookup = HttpLeafLookup("http://ledger.local", client=client)

        with pytest.raises(LookupUnavailableException) as exc_info:
            lookup.get_leaf(3)
        assert exc_info.value.details["status_code"] == 502

    def test_malformed_payload(self):
        client = StubClient(response=HttpResponse(status_code=200, content=b"not json"))
        lookup = HttpLeafLookup("http://ledger.local", client=client)

        with pytest.raises(LookupUnavailableException):
            lookup.get_leaf(3)

    def test_missing_value_key(self):
        client = StubClient(response=_json_response({"leaf": "0x01"}))
        lookup = HttpLeafLookup("http://ledger.local", client=client)

        with pytest.raises(LookupUnavailableException):
            lookup.get_leaf(3)

    def test_non_hex_value(self):
        client = StubClient(response=_json_response({"value": "hello"}))
        lookup = HttpLeafLookup("http://ledger.local", client=client)

        with pytest.raises(LookupUnavailableException):
            lookup.get_leaf(3)

    def test_close_closes_client(self):
        client = StubClient()
        HttpLeafLookup("http://ledger.local", client=client).close()
        assert client.closed

    def test_endpoint_required(self):
        with pytest.raises(ValueError):
            HttpLeafLookup("")
        with pytest.raises(ValueError):
            HttpLeafLookup.from_config(LedgerConfig())

    def test_from_config(self):
        lookup = HttpLeafLookup.from_config(LedgerConfig(endpoint="http://ledger.local", timeout=5.0))
        assert lookup.endpoint == "http://ledger.local"
        assert lookup.client.timeout == 5.0
