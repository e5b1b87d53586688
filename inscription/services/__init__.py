"""Services package for metadata resolution and external integrations."""

from inscription.services.gateway import FetchFailure, FetchResult, FetchSuccess, GatewayClient
from inscription.services.metadata_resolver import MetadataResolver, fetch_metadata_from_uri

__all__ = [
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "GatewayClient",
    "MetadataResolver",
    "fetch_metadata_from_uri",
]
