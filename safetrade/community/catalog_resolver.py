"""Resolve catalog ids to names and back, with a TTL cache and a built-in fallback.

Resolution never fails:
  * a fresh cached snapshot is served as-is;
  * a stale or empty cache triggers one fetch from the Catalog Service;
  * a failing or incomplete fetch falls back to ``default_catalogs()``
    (logged, not cached, so the next call tries the service again);
  * an id missing from the catalog resolves to ``"Desconocido"``.
"""

from __future__ import annotations

import logging

from safetrade.community.catalog_cache import CatalogCache
from safetrade.community.catalog_client import CatalogService
from safetrade.contracts.catalog import UNKNOWN_NAME, CatalogData, default_catalogs
from safetrade.contracts.enums import CatalogKind
from safetrade.shared.clock import Clock, SystemClock

log = logging.getLogger(__name__)


class CatalogResolver:
    def __init__(
        self,
        service: CatalogService | None = None,
        cache: CatalogCache | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.clock = clock or SystemClock()
        self.service = service
        self.cache = cache or CatalogCache(self.clock)
        self.fetch_count = 0

    def get_catalogs(self) -> CatalogData:
        cached = self.cache.get()
        if cached is not None:
            return cached

        if self.service is None:
            return default_catalogs()

        self.fetch_count += 1
        try:
            catalogs = self.service.get_catalogs()
        except Exception as exc:
            log.warning("Catalog service unavailable, using default catalogs: %s", exc)
            return default_catalogs()

        if not catalogs.is_complete():
            log.warning("Catalog service returned an incomplete catalog, using default catalogs")
            return default_catalogs()

        self.cache.set(catalogs)
        return catalogs

    def refresh(self) -> CatalogData:
        """Drop the cached snapshot and fetch again."""
        self.cache.clear()
        return self.get_catalogs()

    def name_maps(self) -> dict[CatalogKind, dict[int, str]]:
        catalogs = self.get_catalogs()
        return {kind: catalogs.name_map(kind) for kind in CatalogKind}

    def resolve_name(self, kind: CatalogKind | str, catalog_id: int | None) -> str:
        if catalog_id is None:
            return UNKNOWN_NAME
        kind = CatalogKind(kind)
        return self.get_catalogs().name_map(kind).get(catalog_id, UNKNOWN_NAME)

    def resolve_id(self, kind: CatalogKind | str, name: str | None) -> int | None:
        if not name:
            return None
        kind = CatalogKind(kind)
        return self.get_catalogs().id_map(kind).get(name)
