"""Codec package for token URI and metadata transcoding."""

from inscription.codec.metadata import (
    ImageDecodeError,
    InscriptionMetadata,
    MetadataEncodingError,
    build_metadata,
    data_uri_to_json,
    decode_image_data_uri,
    encode_metadata_to_data_uri,
    image_file_to_data_uri,
)
from inscription.codec.text import BASE64, InvalidBase64Error, StandardBase64Codec, TextCodec
from inscription.codec.token_uri import (
    DataJsonBase64,
    DataJsonUtf8,
    Remote,
    TokenUri,
    UriScheme,
    parse_token_uri,
)

__all__ = [
    "BASE64",
    "DataJsonBase64",
    "DataJsonUtf8",
    "ImageDecodeError",
    "InscriptionMetadata",
    "InvalidBase64Error",
    "MetadataEncodingError",
    "Remote",
    "StandardBase64Codec",
    "TextCodec",
    "TokenUri",
    "UriScheme",
    "build_metadata",
    "data_uri_to_json",
    "decode_image_data_uri",
    "encode_metadata_to_data_uri",
    "image_file_to_data_uri",
    "parse_token_uri",
]
