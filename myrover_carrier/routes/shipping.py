"""BigCommerce shipping carrier routes: connection test and rate quotes.

Both endpoints are stateless and unauthenticated. They never consult the
credential store, and the response envelopes are fixed by BigCommerce.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, Request

from myrover_carrier.errors import MalformedBodyError
from myrover_carrier.oauth.metadata import CONNECTION_PATH, RATES_PATH
from myrover_carrier.shipping.quotes import connection_envelope, rates_envelope

logger = logging.getLogger(__name__)


async def _json_body(request: Request) -> Any:
    """Parse the request body as JSON. An empty body reads as {}."""
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedBodyError(str(e)) from e


def register_shipping_routes(app: FastAPI) -> None:
    """Register the carrier contract routes on the FastAPI app."""

    @app.post(CONNECTION_PATH)
    async def shipping_connection(request: Request):
        """Connection test BigCommerce runs before enabling the carrier."""
        body = await request.body()
        logger.info("%s hit (%d byte body)", CONNECTION_PATH, len(body))
        logger.debug("Connection test body: %r", body[:2000])
        return connection_envelope()

    @app.post(RATES_PATH)
    async def shipping_rates(request: Request):
        """Return carrier quotes for a cart. The cart contents are not used."""
        payload = await _json_body(request)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Rate request: %s", json.dumps(payload, indent=2)[:4000])

        provider = request.app.state.quote_provider
        quotes = provider.quote(payload if isinstance(payload, dict) else {})
        logger.info("Returning %d rate quote(s): %s", len(quotes), [q.code for q in quotes])
        return rates_envelope(quotes)

    logger.info("Shipping routes registered: %s, %s", CONNECTION_PATH, RATES_PATH)
