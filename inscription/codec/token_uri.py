"""Token URI variants and prefix-based parsing."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

JSON_BASE64_PREFIX = "data:application/json;base64,"
JSON_UTF8_PREFIX = "data:application/json;utf8,"
SVG_BASE64_PREFIX = "data:image/svg+xml;base64,"
IPFS_PREFIX = "ipfs://"
DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"


class UriScheme(str, Enum):
    """Remote URI schemes accepted by the resolver."""
    IPFS = "ipfs"
    HTTP = "http"
    HTTPS = "https"


@dataclass(frozen=True)
class DataJsonBase64:
    """Embedded metadata, base64-encoded JSON."""

    payload: str

    @property
    def uri(self) -> str:
        return f"{JSON_BASE64_PREFIX}{self.payload}"


@dataclass(frozen=True)
class DataJsonUtf8:
    """Embedded metadata, literal JSON text."""

    payload: str

    @property
    def uri(self) -> str:
        return f"{JSON_UTF8_PREFIX}{self.payload}"


@dataclass(frozen=True)
class Remote:
    """Metadata stored off-chain behind an ipfs:// or http(s):// URI.

    Attributes:
        scheme: URI scheme
        location: Everything after ``<scheme>://``
    """

    scheme: UriScheme
    location: str

    @property
    def uri(self) -> str:
        return f"{self.scheme.value}://{self.location}"

    def to_http_url(self, gateway_base: str = DEFAULT_IPFS_GATEWAY) -> str:
        """Get a fetchable URL, routing IPFS content through a gateway.

        Args:
            gateway_base: Gateway prefix the IPFS path is appended to

        Returns:
            HTTP(S) URL for the metadata document
        """
        if self.scheme is UriScheme.IPFS:
            return f"{gateway_base}{self.location}"
        return self.uri


TokenUri = Union[DataJsonBase64, DataJsonUtf8, Remote]


def parse_token_uri(text: Optional[str]) -> Optional[TokenUri]:
    """Classify a token URI by its prefix.

    Args:
        text: Raw tokenURI value

    Returns:
        The matching variant, or None for empty input and unsupported schemes
    """
    if not text:
        return None

    if text.startswith(JSON_BASE64_PREFIX):
        return DataJsonBase64(payload=text.split(",", 1)[1])
    if text.startswith(JSON_UTF8_PREFIX):
        return DataJsonUtf8(payload=text.split(",", 1)[1])

    for scheme in UriScheme:
        prefix = f"{scheme.value}://"
        if text.startswith(prefix):
            return Remote(scheme=scheme, location=text[len(prefix):])

    return None
