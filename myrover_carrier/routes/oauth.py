"""Install, callback, uninstall and load routes for the BigCommerce app lifecycle.

Security contract:
- Never return upstream error bodies, tokens or the client secret to the caller
- Token exchange is attempted exactly once per callback request
- Metadata registration runs in the background; its failure cannot fail the install
- Uninstall always answers {"success": true}, whether or not a token was stored
"""

from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from myrover_carrier import pages
from myrover_carrier.config import CALLBACK_PATH
from myrover_carrier.credentials import StoreCredential
from myrover_carrier.errors import CarrierAppError, MissingParameterError
from myrover_carrier.oauth.handshake import (
    build_authorize_url,
    exchange_code,
    store_hash_from_context,
)

logger = logging.getLogger(__name__)


async def _uninstall_store_hash(request: Request) -> str:
    """Find a store hash in the query string or a JSON object body."""
    candidates = [request.query_params.get("store_hash"), request.query_params.get("context")]

    body = await request.body()
    if body:
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None
        if isinstance(payload, dict):
            candidates += [payload.get("store_hash"), payload.get("context")]

    for value in candidates:
        if isinstance(value, str) and value.strip():
            return store_hash_from_context(value)
    return ""


def register_oauth_routes(app: FastAPI) -> None:
    """Register the app lifecycle routes on the FastAPI app."""

    @app.get("/api/install")
    async def install(request: Request):
        """Start OAuth: redirect to the BigCommerce authorize endpoint."""
        context = request.query_params.get("context", "")
        scope = request.query_params.get("scope", "")
        if not context or not scope:
            missing = [name for name, value in (("context", context), ("scope", scope)) if not value]
            raise MissingParameterError(missing, public_message="Missing context or scope")

        authorize_url = build_authorize_url(request.app.state.settings, context, scope)
        logger.info("Redirecting to BigCommerce OAuth authorize for context=%s", context)
        return RedirectResponse(authorize_url, status_code=302)

    @app.get(CALLBACK_PATH)
    async def auth_callback(request: Request):
        """Finish OAuth: exchange the code, store the token, confirm install."""
        code = request.query_params.get("code", "")
        context = request.query_params.get("context", "")
        scope = request.query_params.get("scope", "")
        logger.info(
            "OAuth callback hit (code=%s context=%s scope=%s)",
            "present" if code else "missing",
            context,
            scope,
        )

        if not code or not context:
            missing = [name for name, value in (("code", code), ("context", context)) if not value]
            raise MissingParameterError(
                missing, public_message="OAuth callback failed: missing code or context"
            )

        state = request.app.state
        try:
            grant = await exchange_code(state.http_client, state.settings, code, context, scope)

            logger.info("OAuth success. Store hash: %s", grant.store_hash or "unknown")
            if grant.store_hash:
                state.credential_store.set(
                    StoreCredential(
                        store_hash=grant.store_hash,
                        access_token=grant.access_token,
                        scope=grant.scope,
                    )
                )
                state.metadata_registrar.schedule(grant.store_hash, grant.access_token)

            return HTMLResponse(pages.installed_page(grant.store_hash))
        except CarrierAppError:
            raise
        except Exception:
            logger.exception("OAuth callback failed")
            return PlainTextResponse("OAuth callback failed on server.", status_code=500)

    @app.get("/api/load")
    async def load():
        """Admin iframe content shown when the app is opened in BigCommerce."""
        return HTMLResponse(pages.dashboard_page())

    @app.post("/api/uninstall")
    async def uninstall(request: Request):
        """Drop the stored token for a store. Unknown or absent store is a no-op."""
        store_hash = await _uninstall_store_hash(request)
        if store_hash:
            removed = request.app.state.credential_store.delete(store_hash)
            logger.info("App uninstall called for store %s (removed=%s)", store_hash, removed)
        else:
            logger.info("App uninstall called without a store hash")
        return JSONResponse({"success": True}, status_code=200)

    logger.info("OAuth routes registered: /api/{install,auth/callback,load,uninstall}")
