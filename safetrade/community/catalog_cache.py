"""Time-bounded cache for the catalog snapshot."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from safetrade.contracts.catalog import CatalogData
from safetrade.shared.clock import Clock

log = logging.getLogger(__name__)

DEFAULT_TTL_SEC = 300.0  # 5 minutes


class CatalogCache:
    """Holds one CatalogData value until ``ttl_sec`` elapses on the injected clock."""

    def __init__(self, clock: Clock, ttl_sec: float = DEFAULT_TTL_SEC) -> None:
        if ttl_sec < 0:
            raise ValueError("ttl_sec must be >= 0")
        self._clock = clock
        self._ttl = timedelta(seconds=ttl_sec)
        self._value: CatalogData | None = None
        self._expires_at: datetime | None = None

    @property
    def ttl_sec(self) -> float:
        return self._ttl.total_seconds()

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    def get(self) -> CatalogData | None:
        """Return the cached catalog, or None when empty or expired."""
        if self._value is None or self._expires_at is None:
            return None
        if self._clock.now() >= self._expires_at:
            log.debug("Catalog cache expired at %s", self._expires_at.isoformat())
            return None
        return self._value

    def set(self, value: CatalogData) -> None:
        self._value = value
        self._expires_at = self._clock.now() + self._ttl

    def clear(self) -> None:
        self._value = None
        self._expires_at = None
