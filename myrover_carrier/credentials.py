"""Credential store: access token per BigCommerce store.

Process-lifetime only. Tokens are lost on restart; a persistent backend can
replace ``InMemoryCredentialStore`` behind the same get/set/delete interface.
Concurrent writes for the same store hash are unordered, last write wins.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreCredential:
    """OAuth access token for one installed store."""

    store_hash: str
    access_token: str = field(repr=False)
    scope: str = ""
    installed_at: float = field(default_factory=time.time)


class CredentialStore(Protocol):
    def get(self, store_hash: str) -> StoreCredential | None: ...

    def set(self, credential: StoreCredential) -> None: ...

    def delete(self, store_hash: str) -> bool: ...


class InMemoryCredentialStore:
    """Dict-backed credential store, one entry per store hash."""

    def __init__(self):
        self._credentials: dict[str, StoreCredential] = {}

    def get(self, store_hash: str) -> StoreCredential | None:
        return self._credentials.get(store_hash)

    def set(self, credential: StoreCredential) -> None:
        replaced = credential.store_hash in self._credentials
        self._credentials[credential.store_hash] = credential
        logger.info(
            "Credential %s for store %s",
            "replaced" if replaced else "stored",
            credential.store_hash,
        )

    def delete(self, store_hash: str) -> bool:
        """Remove a credential. Returns False when nothing was stored."""
        removed = self._credentials.pop(store_hash, None) is not None
        if removed:
            logger.info("Credential removed for store %s", store_hash)
        return removed

    def __contains__(self, store_hash: object) -> bool:
        return store_hash in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)
