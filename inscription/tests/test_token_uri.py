"""Tests for token URI parsing."""

import dataclasses

import pytest

from inscription.codec.token_uri import (
    DataJsonBase64,
    DataJsonUtf8,
    Remote,
    UriScheme,
    parse_token_uri,
)


def test_parse_base64_json():
    """Test the base64 JSON prefix yields DataJsonBase64."""
    parsed = parse_token_uri("data:application/json;base64,eyJhIjoxfQ==")
    assert parsed == DataJsonBase64(payload="eyJhIjoxfQ==")


def test_parse_utf8_json_keeps_everything_after_first_comma():
    """Test commas inside the JSON payload are preserved."""
    parsed = parse_token_uri('data:application/json;utf8,{"a":1,"b":2}')
    assert parsed == DataJsonUtf8(payload='{"a":1,"b":2}')


@pytest.mark.parametrize(
    "uri, scheme, location",
    [
        ("ipfs://bafy123/meta.json", UriScheme.IPFS, "bafy123/meta.json"),
        ("https://example.com/1.json", UriScheme.HTTPS, "example.com/1.json"),
        ("http://localhost:8080/1", UriScheme.HTTP, "localhost:8080/1"),
    ],
)
def test_parse_remote(uri, scheme, location):
    """Test remote schemes are split into scheme and location."""
    parsed = parse_token_uri(uri)
    assert parsed == Remote(scheme=scheme, location=location)
    assert parsed.uri == uri


@pytest.mark.parametrize(
    "uri",
    [None, "", "ar://abc", "data:image/svg+xml;base64,PHN2Zy8+", "data:application/json,{}", "httpfoo"],
)
def test_parse_unsupported_returns_none(uri):
    """Test empty input and unknown schemes are absent, not errors."""
    assert parse_token_uri(uri) is None


def test_ipfs_gateway_rewrite():
    """Test IPFS remotes are routed through the gateway base."""
    remote = parse_token_uri("ipfs://bafy123")
    assert remote.to_http_url() == "https://ipfs.io/ipfs/bafy123"
    assert remote.to_http_url("https://gw.example/ipfs/") == "https://gw.example/ipfs/bafy123"


def test_https_url_is_unchanged():
    """Test HTTP(S) remotes are fetched as-is."""
    remote = parse_token_uri("https://example.com/1.json")
    assert remote.to_http_url("https://gw.example/ipfs/") == "https://example.com/1.json"


def test_token_uri_is_immutable():
    """Test parsed values cannot be mutated."""
    parsed = parse_token_uri("data:application/json;base64,e30=")
    with pytest.raises(dataclasses.FrozenInstanceError):
        parsed.payload = "changed"
