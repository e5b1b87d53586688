"""Encoding and decoding of inscription metadata as data URIs."""

import json
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from inscription.codec.text import BASE64, InvalidBase64Error, TextCodec, utf8_from_base64
from inscription.codec.token_uri import (
    JSON_BASE64_PREFIX,
    SVG_BASE64_PREFIX,
    DataJsonBase64,
    DataJsonUtf8,
    parse_token_uri,
)
from inscription.log import get_logger

logger = get_logger(__name__)

DEFAULT_NAME = "tokenizeArt inscription"
DEFAULT_DESCRIPTION = "An on-chain inscription generated via tokenizeArt."


class MetadataEncodingError(ValueError):
    """Raised when metadata cannot be serialized to JSON."""
    pass


class ImageDecodeError(ValueError):
    """Raised when an embedded image payload cannot be decoded."""
    pass


class InscriptionMetadata(BaseModel):
    """Token metadata as produced by the mint helper.

    Unknown keys are kept, so decoded metadata can be loaded back into
    this model without losing anything.
    """
    model_config = ConfigDict(extra="allow")

    name: str
    description: str
    image: Optional[str] = None
    external_url: Optional[str] = None
    created_by: Optional[str] = None
    timestamp: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Get the JSON object for this metadata.

        Optional fields that were never set are left out; anything passed
        explicitly, including None and extra keys, is kept.
        """
        unset = {
            field for field in type(self).model_fields
            if field not in self.model_fields_set and getattr(self, field) is None
        }
        return self.model_dump(exclude=unset)


def encode_metadata_to_data_uri(
    metadata: Any,
    codec: TextCodec = BASE64,
) -> str:
    """Embed metadata in a ``data:application/json;base64,`` URI.

    The JSON is compact and keeps the key order of the input.

    Args:
        metadata: Any JSON-serializable value, or an InscriptionMetadata
        codec: Base64 codec

    Returns:
        Self-contained token URI

    Raises:
        MetadataEncodingError: If the value is not JSON-serializable
    """
    if isinstance(metadata, InscriptionMetadata):
        metadata = metadata.to_dict()

    try:
        json_string = json.dumps(metadata, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise MetadataEncodingError(f"Metadata is not JSON-serializable: {e}") from e

    return f"{JSON_BASE64_PREFIX}{codec.bytes_to_base64(json_string.encode('utf-8'))}"


def data_uri_to_json(uri: Optional[str], codec: TextCodec = BASE64) -> Optional[Any]:
    """Decode metadata embedded in a JSON data URI.

    Args:
        uri: Token URI
        codec: Base64 codec

    Returns:
        Parsed JSON, or None when the URI is not an embedded JSON payload
        or the payload is corrupt
    """
    token_uri = parse_token_uri(uri)

    if isinstance(token_uri, DataJsonBase64):
        try:
            return json.loads(utf8_from_base64(token_uri.payload, codec))
        except (InvalidBase64Error, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to decode metadata: {e}")
            return None

    if isinstance(token_uri, DataJsonUtf8):
        try:
            return json.loads(token_uri.payload)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse utf8 metadata: {e}")
            return None

    return None


def decode_image_data_uri(
    image: Optional[str],
    prefix: str = SVG_BASE64_PREFIX,
    codec: TextCodec = BASE64,
) -> Optional[str]:
    """Decode a base64 image data URI into text markup.

    Args:
        image: Value of the metadata ``image`` field
        prefix: Data URI prefix to accept
        codec: Base64 codec

    Returns:
        Decoded markup, or None if the image does not carry the prefix

    Raises:
        ImageDecodeError: If the payload is not base64-encoded UTF-8
    """
    if not isinstance(image, str) or not image.startswith(prefix):
        return None

    try:
        return utf8_from_base64(image[len(prefix):].strip(), codec)
    except (InvalidBase64Error, UnicodeDecodeError) as e:
        raise ImageDecodeError(str(e)) from e


def image_file_to_data_uri(
    path: Union[str, Path],
    mime_type: Optional[str] = None,
    codec: TextCodec = BASE64,
) -> str:
    """Read an image file into a ``data:<mime>;base64,`` URI.

    Args:
        path: Image file path
        mime_type: Explicit MIME type; guessed from the file name if omitted
        codec: Base64 codec

    Returns:
        Data URI embedding the whole file
    """
    path = Path(path)
    if mime_type is None:
        mime_type, _ = mimetypes.guess_type(path.name)
    data = path.read_bytes()
    logger.debug(f"Embedding {path.name} ({len(data)} bytes) as {mime_type}")
    return f"data:{mime_type or 'application/octet-stream'};base64,{codec.bytes_to_base64(data)}"


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_metadata(
    name: Optional[str] = None,
    description: Optional[str] = None,
    image_file: Optional[Union[str, Path]] = None,
    image_url: Optional[str] = None,
    external_url: Optional[str] = None,
    created_by: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> InscriptionMetadata:
    """Assemble metadata the way the mint form does.

    An image file is embedded and wins over an image URL. Blank values
    fall back to defaults or are left out.

    Args:
        name: Token title
        description: Token description
        image_file: Image to embed on-chain
        image_url: Remote image (https:// or ipfs://)
        external_url: Link to an external page
        created_by: Minter wallet address
        timestamp: ISO-8601 creation time; defaults to now (UTC)

    Returns:
        Metadata ready for encode_metadata_to_data_uri
    """
    fields: dict[str, Any] = {
        "name": name or DEFAULT_NAME,
        "description": description or DEFAULT_DESCRIPTION,
    }
    if image_file:
        fields["image"] = image_file_to_data_uri(image_file)
    elif image_url and image_url.strip():
        fields["image"] = image_url.strip()
    if external_url:
        fields["external_url"] = external_url
    if created_by:
        fields["created_by"] = created_by
    fields["timestamp"] = timestamp or _utc_timestamp()

    return InscriptionMetadata(**fields)
