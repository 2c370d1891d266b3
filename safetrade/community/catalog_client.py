"""HTTP client for the backend catalog endpoint (``GET /reportes/catalogs``)."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from safetrade.contracts.catalog import CatalogData

log = logging.getLogger(__name__)

CATALOG_ENDPOINT = "/reportes/catalogs"
DEFAULT_TIMEOUT_SEC = 10.0


class CatalogUnavailableError(RuntimeError):
    """The live catalog could not be fetched or was malformed."""


class CatalogService(Protocol):
    def get_catalogs(self) -> CatalogData:
        ...


class StaticCatalogService:
    """Serves a fixed catalog (seed data, tests, offline CLI runs)."""

    def __init__(self, catalogs: CatalogData) -> None:
        self._catalogs = catalogs

    def get_catalogs(self) -> CatalogData:
        return self._catalogs


def parse_catalog_payload(payload: Any) -> CatalogData:
    """Extract catalogs from either response shape the backend has used.

    Accepted:
      ``{"success": true, "data": {"attackTypes": [...], ...}}``
      ``{"attackTypes": [...], "impacts": [...], "statuses": [...]}``
    """
    if not isinstance(payload, dict):
        raise CatalogUnavailableError("Invalid catalog data structure received from API")

    data = payload.get("data")
    if isinstance(data, dict) and "attackTypes" in data:
        body = data
    elif "attackTypes" in payload:
        body = payload
    else:
        raise CatalogUnavailableError("Invalid catalog data structure received from API")

    try:
        catalogs = CatalogData.from_dict(body)
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogUnavailableError(f"Malformed catalog row: {exc}") from exc

    if not catalogs.is_complete():
        raise CatalogUnavailableError("Catalog response is missing attack types, impacts or statuses")
    return catalogs


class HttpCatalogService:
    """Fetch catalogs from the SafeTrade backend with ``requests``."""

    def __init__(
        self,
        base_url: str,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{CATALOG_ENDPOINT}"

    def get_catalogs(self) -> CatalogData:
        try:
            response = self.session.get(self.url, headers=self.headers, timeout=self.timeout_sec)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog request failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogUnavailableError(f"Catalog response is not JSON: {exc}") from exc

        catalogs = parse_catalog_payload(payload)
        log.info(
            "Fetched catalogs from %s (%d attack types, %d impacts, %d statuses)",
            self.url,
            len(catalogs.attack_types),
            len(catalogs.impacts),
            len(catalogs.statuses),
        )
        return catalogs
