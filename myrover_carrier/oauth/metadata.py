"""App metadata registration: tells BigCommerce where the shipping endpoints live.

Best-effort. ``schedule()`` runs registration as a background task after a
successful install; any failure is logged by the task's done-callback and
never reaches the installer's response.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from myrover_carrier.config import Settings
from myrover_carrier.errors import MetadataRegistrationError

logger = logging.getLogger(__name__)

CONNECTION_PATH = "/v1/shipping/connection"
RATES_PATH = "/v1/shipping/rates"

SHIPPING_ENDPOINTS: dict[str, str] = {
    "shipping_connection_path": CONNECTION_PATH,
    "shipping_rates_path": RATES_PATH,
}


class MetadataRegistrar:
    """Registers the shipping endpoint paths against an installed store."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self._client = client
        self._settings = settings
        self._tasks: set[asyncio.Task] = set()

    def metadata_url(self, store_hash: str) -> str:
        return f"{self._settings.bc_api_url.rstrip('/')}/stores/{store_hash}/v3/app/metadata"

    async def register_endpoints(self, store_hash: str, access_token: str) -> None:
        """POST the endpoint metadata once. Raises MetadataRegistrationError."""
        entries = [{"key": key, "value": value} for key, value in SHIPPING_ENDPOINTS.items()]
        try:
            response = await self._client.post(
                self.metadata_url(store_hash),
                json=entries,
                headers={
                    "X-Auth-Token": access_token,
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise MetadataRegistrationError(store_hash, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise MetadataRegistrationError(
                store_hash, f"HTTP {response.status_code}: {response.text[:500]}"
            )
        try:
            response.json()
        except ValueError as e:
            raise MetadataRegistrationError(store_hash, "response body is not JSON") from e

        logger.info("Registered shipping endpoint metadata for store %s", store_hash)

    def schedule(self, store_hash: str, access_token: str) -> asyncio.Task:
        """Start registration in the background and return the task."""
        task = asyncio.create_task(
            self.register_endpoints(store_hash, access_token),
            name=f"metadata-registration:{store_hash}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Metadata registration cancelled: %s", task.get_name())
            return
        exc = task.exception()
        if exc is None:
            return
        if isinstance(exc, MetadataRegistrationError):
            logger.warning("%s", exc)
        else:
            logger.error(
                "Unexpected metadata registration failure (%s)",
                task.get_name(),
                exc_info=exc,
            )

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for outstanding registrations (called on shutdown)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
