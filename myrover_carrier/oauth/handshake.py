"""BigCommerce OAuth authorization-code handshake.

Step 1 (install): redirect the merchant to BigCommerce's authorize URL.
Step 2 (callback): exchange the returned code for an access token with a
single server-to-server POST. No retries; a failure surfaces immediately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import quote, urlencode

import httpx

from myrover_carrier.config import Settings
from myrover_carrier.errors import ConfigurationError, TokenExchangeError

logger = logging.getLogger(__name__)

STORE_CONTEXT_PREFIX = "stores/"


@dataclass(frozen=True)
class TokenGrant:
    """Successful token exchange result."""

    access_token: str = field(repr=False)
    store_hash: str
    context: str
    scope: str = ""


def store_hash_from_context(context: str) -> str:
    """Strip the exact ``stores/`` prefix from a context value.

    Matching is case-sensitive; any other value passes through unchanged
    (apart from surrounding whitespace).
    """
    value = (context or "").strip()
    if value.startswith(STORE_CONTEXT_PREFIX):
        value = value[len(STORE_CONTEXT_PREFIX):]
    return value


def build_authorize_url(settings: Settings, context: str, scope: str) -> str:
    """Build the authorize redirect target for an install request."""
    missing = settings.missing("bc_client_id", "app_url")
    if missing:
        raise ConfigurationError(missing)

    params = [
        ("client_id", settings.bc_client_id),
        ("scope", scope),
        ("context", context),
        ("redirect_uri", settings.callback_url),
        ("response_type", "code"),
    ]
    # encodeURIComponent-compatible: spaces as %20, "/" and ":" escaped, !'()*~ kept
    query = urlencode(params, quote_via=quote, safe="!'()*~")
    return f"{settings.authorize_url}?{query}"


async def exchange_code(
    client: httpx.AsyncClient,
    settings: Settings,
    code: str,
    context: str,
    scope: str = "",
) -> TokenGrant:
    """Exchange an authorization code for an access token.

    Raises:
        ConfigurationError: client id, secret or app url not set.
        TokenExchangeError: transport failure, non-2xx, or no token returned.
    """
    missing = settings.missing("bc_client_id", "bc_client_secret", "app_url")
    if missing:
        raise ConfigurationError(missing)

    body = {
        "client_id": settings.bc_client_id,
        "client_secret": settings.bc_client_secret,
        "redirect_uri": settings.callback_url,
        "grant_type": "authorization_code",
        "code": code,
        "scope": scope,
        "context": context,
    }
    logger.info(
        "Exchanging code for token at %s (redirect_uri=%s scope=%s context=%s)",
        settings.token_url,
        body["redirect_uri"],
        scope,
        context,
    )

    try:
        response = await client.post(settings.token_url, json=body)
    except httpx.HTTPError as e:
        raise TokenExchangeError(f"{type(e).__name__}: {e}") from e

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if not response.is_success:
        raise TokenExchangeError(
            f"HTTP {response.status_code}: {data or response.text[:500]}",
            upstream_status=response.status_code,
        )

    access_token = data.get("access_token")
    if not access_token:
        raise TokenExchangeError(
            "Token response did not include access_token",
            upstream_status=response.status_code,
        )

    granted_context = data.get("context") or context
    return TokenGrant(
        access_token=access_token,
        store_hash=store_hash_from_context(granted_context),
        context=granted_context,
        scope=data.get("scope") or scope,
    )
