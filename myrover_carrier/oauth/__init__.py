"""BigCommerce OAuth install flow and app metadata registration."""

from myrover_carrier.oauth.handshake import (
    TokenGrant,
    build_authorize_url,
    exchange_code,
    store_hash_from_context,
)
from myrover_carrier.oauth.metadata import MetadataRegistrar

__all__ = [
    "MetadataRegistrar",
    "TokenGrant",
    "build_authorize_url",
    "exchange_code",
    "store_hash_from_context",
]
