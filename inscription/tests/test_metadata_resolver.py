"""Tests for metadata resolution across URI schemes."""

import asyncio

import httpx
import pytest

from inscription.codec.metadata import encode_metadata_to_data_uri
from inscription.services import metadata_resolver
from inscription.services.gateway import GatewayClient
from inscription.services.metadata_resolver import MetadataResolver, fetch_metadata_from_uri


class RecordingHandler:
    """MockTransport handler that records requested URLs."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.urls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(str(request.url))
        return self.response


@pytest.fixture
def handler():
    return RecordingHandler(httpx.Response(200, json={"name": "remote"}))


@pytest.fixture
def resolver(handler):
    gateway = GatewayClient(gateway_url="https://ipfs.io/ipfs/", transport=httpx.MockTransport(handler))
    return MetadataResolver(gateway=gateway)


def test_embedded_uri_skips_network(resolver, handler):
    """Test data URIs are decoded without any request."""
    uri = encode_metadata_to_data_uri({"name": "x"})

    assert asyncio.run(resolver.resolve(uri)) == {"name": "x"}
    assert resolver.resolve_sync(uri) == {"name": "x"}
    assert handler.urls == []


def test_ipfs_uri_fetched_through_gateway_once(resolver, handler):
    """Test ipfs:// is rewritten to the gateway and fetched exactly once."""
    result = asyncio.run(resolver.resolve("ipfs://bafy123"))

    assert result == {"name": "remote"}
    assert handler.urls == ["https://ipfs.io/ipfs/bafy123"]


def test_https_uri_fetched_directly(resolver, handler):
    """Test https:// URIs are fetched unchanged."""
    assert resolver.resolve_sync("https://example.com/meta/1.json") == {"name": "remote"}
    assert handler.urls == ["https://example.com/meta/1.json"]


@pytest.mark.parametrize("uri", ["ar://abc", "", "data:image/png;base64,AAAA", "ftp://example.com/1.json"])
def test_unsupported_scheme_is_absent(resolver, handler, uri):
    """Test unsupported schemes resolve to None without a request."""
    assert asyncio.run(resolver.resolve(uri)) is None
    assert handler.urls == []


def test_corrupt_embedded_payload_is_absent(resolver, handler):
    """Test a corrupt data URI is not sent to the network."""
    assert resolver.resolve_sync("data:application/json;base64,!!!not-base64!!!") is None
    assert handler.urls == []


def test_fetch_failure_is_logged_and_absent(caplog):
    """Test HTTP errors degrade to None and log the original URI."""
    failing = RecordingHandler(httpx.Response(500, text="gateway error"))
    gateway = GatewayClient(gateway_url="https://ipfs.io/ipfs/", transport=httpx.MockTransport(failing))
    resolver = MetadataResolver(gateway=gateway)

    with caplog.at_level("WARNING"):
        assert asyncio.run(resolver.resolve("ipfs://bafy-broken")) is None

    assert failing.urls == ["https://ipfs.io/ipfs/bafy-broken"]
    assert "ipfs://bafy-broken" in caplog.text


def test_bulk_resolve_resolves_each_uri_once(resolver, handler):
    """Test duplicates in bulk_resolve issue a single request."""
    embedded = encode_metadata_to_data_uri({"name": "x"})

    results = resolver.bulk_resolve(["ipfs://bafy1", embedded, "ipfs://bafy1", "ar://nope"])

    assert results == {
        "ipfs://bafy1": {"name": "remote"},
        embedded: {"name": "x"},
        "ar://nope": None,
    }
    assert handler.urls == ["https://ipfs.io/ipfs/bafy1"]


def test_fetch_metadata_from_uri_fast_path(monkeypatch):
    """Test the module-level helper decodes embedded metadata."""

    def no_network(*args, **kwargs):
        raise AssertionError("network access not expected")

    monkeypatch.setattr(metadata_resolver.GatewayClient, "fetch_json", no_network)

    uri = encode_metadata_to_data_uri({"name": "x"})
    assert asyncio.run(fetch_metadata_from_uri(uri)) == {"name": "x"}


def test_malformed_remote_host_is_absent(resolver):
    """Test an untrusted URI with an invalid host resolves to None."""
    assert resolver.resolve_sync("https://xn--/a") is None
    assert asyncio.run(resolver.resolve("https://xn--/a")) is None
    assert resolver.bulk_resolve(["https://xn--/a"]) == {"https://xn--/a": None}


def test_redirected_metadata_is_resolved():
    """Test an http:// host redirecting to https:// still resolves."""

    def handler(request):
        if request.url.host == "old.example":
            return httpx.Response(301, headers={"Location": "https://new.example/1.json"})
        return httpx.Response(200, json={"name": "moved"})

    gateway = GatewayClient(gateway_url="https://ipfs.io/ipfs/", transport=httpx.MockTransport(handler))

    assert asyncio.run(MetadataResolver(gateway=gateway).resolve("http://old.example/1.json")) == {"name": "moved"}


def test_default_resolver_tolerates_unrelated_bad_settings(monkeypatch):
    """Test building a default resolver does not parse CHAIN_ID."""
    monkeypatch.setenv("CHAIN_ID", "not-a-number")

    uri = encode_metadata_to_data_uri({"name": "x"})
    assert asyncio.run(fetch_metadata_from_uri(uri)) == {"name": "x"}
