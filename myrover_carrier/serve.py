"""HTTP entry point: app factory, lifespan and uvicorn runner.

Dependencies live on ``app.state`` so tests and alternative deployments can
inject their own:
    settings            Settings
    credential_store    CredentialStore (in-memory by default)
    quote_provider      QuoteProvider (static placeholder by default)
    http_client         httpx.AsyncClient shared by outbound calls
    metadata_registrar  MetadataRegistrar bound to http_client
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from myrover_carrier import __version__, pages
from myrover_carrier.config import Settings, log_configuration
from myrover_carrier.config import settings as default_settings
from myrover_carrier.credentials import CredentialStore, InMemoryCredentialStore
from myrover_carrier.errors import CarrierAppError, ConfigurationError, TokenExchangeError
from myrover_carrier.oauth.metadata import MetadataRegistrar
from myrover_carrier.routes.oauth import register_oauth_routes
from myrover_carrier.routes.shipping import register_shipping_routes
from myrover_carrier.shipping.quotes import QuoteProvider, StaticQuoteProvider

logger = logging.getLogger(__name__)


def _carrier_error_handler(request: Request, exc: CarrierAppError):
    """Render a carrier error with its public message only."""
    if isinstance(exc, (ConfigurationError, TokenExchangeError)):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)

    if exc.as_json:
        return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)
    return PlainTextResponse(exc.public_message, status_code=exc.status_code)


def create_app(
    settings: Settings | None = None,
    store: CredentialStore | None = None,
    quote_provider: QuoteProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the carrier app.

    An injected ``http_client`` is left open on shutdown; one created here is
    closed by the lifespan.
    """
    if settings is None:
        settings = default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_configuration(settings)
        owns_client = http_client is None
        client = httpx.AsyncClient(timeout=settings.http_timeout) if owns_client else http_client
        app.state.http_client = client
        app.state.metadata_registrar = MetadataRegistrar(client, settings)
        try:
            yield
        finally:
            await app.state.metadata_registrar.drain()
            if owns_client:
                await client.aclose()

    app = FastAPI(title="MyRover Carrier", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.credential_store = store if store is not None else InMemoryCredentialStore()
    app.state.quote_provider = quote_provider or StaticQuoteProvider()

    app.add_exception_handler(CarrierAppError, _carrier_error_handler)

    register_oauth_routes(app)
    register_shipping_routes(app)

    @app.get("/")
    async def root():
        """Health check."""
        return HTMLResponse(pages.health_page())

    return app


def main() -> None:
    logging.basicConfig(
        level=default_settings.log_level.upper(),
        format="[%(asctime)s] %(levelname)s in %(name)s: %(message)s",
    )
    logger.info("MyRover GTA Carrier starting on port %d", default_settings.port)
    uvicorn.run(create_app(), host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
