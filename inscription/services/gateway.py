"""HTTP gateway client for fetching off-chain token metadata."""

import json
import os
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from inscription.codec.token_uri import DEFAULT_IPFS_GATEWAY
from inscription.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchSuccess:
    """A fetched and parsed JSON document."""

    url: str
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    """A fetch that produced no usable document."""

    url: str
    reason: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


FetchResult = Union[FetchSuccess, FetchFailure]


class GatewayClient:
    """Client for fetching JSON metadata over HTTP(S).

    Holds the IPFS gateway base used to rewrite ``ipfs://`` URIs. Each fetch
    is a single GET with the httpx default timeout, following redirects;
    failures come back as FetchFailure instead of raising.

    Example usage:
        client = GatewayClient()
        result = await client.fetch_json("https://ipfs.io/ipfs/bafy...")
    """

    def __init__(
        self,
        gateway_url: Optional[str] = None,
        transport: Optional[Union[httpx.BaseTransport, httpx.AsyncBaseTransport]] = None,
    ):
        """Initialize the gateway client.

        Args:
            gateway_url: IPFS gateway base URL. Defaults to IPFS_GATEWAY_URL from the environment
            transport: httpx transport override (used by tests)
        """
        self.gateway_url = gateway_url or os.getenv("IPFS_GATEWAY_URL") or DEFAULT_IPFS_GATEWAY
        self.transport = transport

        # Ensure gateway URL ends with /
        if not self.gateway_url.endswith("/"):
            self.gateway_url += "/"

    def _to_result(self, url: str, response: httpx.Response) -> FetchResult:
        if not response.is_success:
            return FetchFailure(
                url=url,
                reason=f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return FetchFailure(
                url=url,
                reason=f"Invalid JSON body: {e}",
                status_code=response.status_code,
            )
        return FetchSuccess(url=url, status_code=response.status_code, body=body)

    async def fetch_json(self, url: str) -> FetchResult:
        """Fetch a JSON document.

        Args:
            url: HTTP(S) URL

        Returns:
            FetchSuccess with the parsed body, or FetchFailure
        """
        logger.debug(f"Fetching metadata from: {url}")

        try:
            async with httpx.AsyncClient(transport=self.transport, follow_redirects=True) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchFailure(url=url, reason=f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.error(f"Error fetching metadata from {url}: {e}")
            return FetchFailure(url=url, reason=f"{type(e).__name__}: {e}")

        return self._to_result(url, response)

    def fetch_json_sync(self, url: str) -> FetchResult:
        """Synchronous version of fetch_json.

        Args:
            url: HTTP(S) URL

        Returns:
            FetchSuccess with the parsed body, or FetchFailure
        """
        logger.debug(f"Fetching metadata (sync) from: {url}")

        try:
            with httpx.Client(transport=self.transport, follow_redirects=True) as client:
                response = client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return FetchFailure(url=url, reason=f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.error(f"Error fetching metadata from {url}: {e}")
            return FetchFailure(url=url, reason=f"{type(e).__name__}: {e}")

        return self._to_result(url, response)
