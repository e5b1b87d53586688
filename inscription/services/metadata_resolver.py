"""Metadata resolver for embedded, IPFS and HTTP(S) token URIs."""

from typing import Any, Iterable, Optional

from inscription.codec.metadata import data_uri_to_json
from inscription.codec.token_uri import Remote, parse_token_uri
from inscription.log import get_logger
from inscription.services.gateway import FetchResult, GatewayClient

logger = get_logger(__name__)


class MetadataResolver:
    """Resolves token URIs to metadata.

    Embedded data URIs are decoded locally. ``ipfs://`` URIs go through
    the gateway, ``http(s)://`` URIs are fetched directly, and anything
    else resolves to None. There is no caching and no retry: every
    remote resolution is exactly one request.

    Example usage:
        resolver = MetadataResolver()
        metadata = await resolver.resolve("ipfs://bafy...")
        metadata = resolver.resolve_sync("data:application/json;base64,...")
    """

    def __init__(self, gateway: Optional[GatewayClient] = None):
        """Initialize the metadata resolver.

        Args:
            gateway: Gateway client instance. Created if not provided.
        """
        self.gateway = gateway or GatewayClient()

    def _remote_url(self, uri: str) -> Optional[str]:
        """Get the URL to fetch for a remote URI, or None if unsupported."""
        token_uri = parse_token_uri(uri)
        if not isinstance(token_uri, Remote):
            logger.debug(f"Unsupported token URI scheme: {uri[:64]}")
            return None
        return token_uri.to_http_url(self.gateway.gateway_url)

    def _unwrap(self, uri: str, result: FetchResult) -> Optional[Any]:
        if result.ok:
            return result.body
        logger.warning(f"Failed to fetch metadata for {uri} ({result.url}): {result.reason}")
        return None

    async def resolve(self, uri: str) -> Optional[Any]:
        """Resolve a token URI to metadata.

        Args:
            uri: data:, ipfs://, http:// or https:// URI

        Returns:
            Parsed metadata, or None if it cannot be obtained
        """
        embedded = data_uri_to_json(uri)
        if embedded is not None:
            return embedded

        url = self._remote_url(uri)
        if url is None:
            return None

        return self._unwrap(uri, await self.gateway.fetch_json(url))

    def resolve_sync(self, uri: str) -> Optional[Any]:
        """Synchronous version of resolve.

        Args:
            uri: data:, ipfs://, http:// or https:// URI

        Returns:
            Parsed metadata, or None if it cannot be obtained
        """
        embedded = data_uri_to_json(uri)
        if embedded is not None:
            return embedded

        url = self._remote_url(uri)
        if url is None:
            return None

        return self._unwrap(uri, self.gateway.fetch_json_sync(url))

    def bulk_resolve(self, uris: Iterable[str]) -> dict[str, Optional[Any]]:
        """Resolve metadata for multiple token URIs.

        Args:
            uris: Token URIs; duplicates are resolved once

        Returns:
            Dictionary mapping URIs to metadata (or None)
        """
        results: dict[str, Optional[Any]] = {}

        for uri in uris:
            if uri not in results:
                results[uri] = self.resolve_sync(uri)

        return results


async def fetch_metadata_from_uri(uri: str) -> Optional[Any]:
    """Resolve a token URI with a default resolver.

    Args:
        uri: data:, ipfs://, http:// or https:// URI

    Returns:
        Parsed metadata, or None
    """
    return await MetadataResolver().resolve(uri)
