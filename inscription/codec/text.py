"""Base64 transcoding primitives."""

import base64
import binascii
import re
from typing import Protocol

_WHITESPACE = re.compile(r"\s+")


class InvalidBase64Error(ValueError):
    """Raised when a string is not valid standard base64."""
    pass


class TextCodec(Protocol):
    """Byte/text transcoding used by the metadata codec."""

    def bytes_to_base64(self, data: bytes) -> str:
        ...

    def base64_to_bytes(self, text: str) -> bytes:
        ...


class StandardBase64Codec:
    """Standard alphabet base64 with padding (RFC 4648 section 4)."""

    def bytes_to_base64(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    def base64_to_bytes(self, text: str) -> bytes:
        """Decode base64 text, ignoring ASCII whitespace.

        Raises:
            InvalidBase64Error: On characters outside the alphabet or bad padding
        """
        cleaned = _WHITESPACE.sub("", text)
        try:
            return base64.b64decode(cleaned.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise InvalidBase64Error(f"Invalid base64 payload: {e}") from e


BASE64 = StandardBase64Codec()


def utf8_from_base64(text: str, codec: TextCodec = BASE64) -> str:
    """Decode base64 text into a UTF-8 string.

    Raises:
        InvalidBase64Error: If the payload is not valid base64
        UnicodeDecodeError: If the decoded bytes are not valid UTF-8
    """
    return codec.base64_to_bytes(text).decode("utf-8")
