"""Tests for the catalog cache, HTTP client and resolver."""

from __future__ import annotations

import pytest
import requests

from safetrade.community.catalog_cache import DEFAULT_TTL_SEC, CatalogCache
from safetrade.community.catalog_client import (
    CatalogUnavailableError,
    HttpCatalogService,
    StaticCatalogService,
    parse_catalog_payload,
)
from safetrade.community.catalog_resolver import CatalogResolver
from safetrade.contracts.catalog import (
    UNKNOWN_NAME,
    CatalogData,
    CatalogEntry,
    default_catalogs,
)
from safetrade.contracts.enums import CatalogKind

# ── Helpers ──────────────────────────────────────────────────────────────


def _live_catalogs() -> CatalogData:
    """A catalog that differs from the defaults so fallbacks are visible."""
    return CatalogData(
        attack_types=[CatalogEntry(1, "email"), CatalogEntry(7, "qr_code")],
        impacts=[CatalogEntry(1, "ninguno"), CatalogEntry(2, "robo_datos")],
        statuses=[CatalogEntry(1, "nuevo"), CatalogEntry(2, "cerrado")],
    )


class CountingService:
    """Catalog service that records calls and can be told to fail."""

    def __init__(self, catalogs: CatalogData | None = None, error: Exception | None = None):
        self.catalogs = catalogs or _live_catalogs()
        self.error = error
        self.calls = 0

    def get_catalogs(self) -> CatalogData:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.catalogs


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, bad_json: bool = False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.requests: list[dict] = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


# ═══════════════════════════════════════════════════════════════════════════
#  CatalogCache
# ═══════════════════════════════════════════════════════════════════════════


class TestCatalogCache:
    def test_empty_returns_none(self, clock):
        assert CatalogCache(clock).get() is None

    def test_hit_within_ttl(self, clock):
        cache = CatalogCache(clock, ttl_sec=60)
        value = _live_catalogs()
        cache.set(value)
        clock.advance(59)
        assert cache.get() is value

    def test_expired_at_ttl(self, clock):
        cache = CatalogCache(clock, ttl_sec=60)
        cache.set(_live_catalogs())
        clock.advance(60)
        assert cache.get() is None

    def test_clear(self, clock):
        cache = CatalogCache(clock)
        cache.set(_live_catalogs())
        cache.clear()
        assert cache.get() is None
        assert cache.expires_at is None

    def test_default_ttl_is_five_minutes(self, clock):
        cache = CatalogCache(clock)
        assert cache.ttl_sec == DEFAULT_TTL_SEC == 300.0

    def test_negative_ttl_rejected(self, clock):
        with pytest.raises(ValueError):
            CatalogCache(clock, ttl_sec=-1)


# ═══════════════════════════════════════════════════════════════════════════
#  parse_catalog_payload / HttpCatalogService
# ═══════════════════════════════════════════════════════════════════════════


class TestParsePayload:
    def test_wrapped_shape(self):
        payload = {"success": True, "data": _live_catalogs().to_dict()}
        assert parse_catalog_payload(payload) == _live_catalogs()

    def test_bare_shape(self):
        assert parse_catalog_payload(_live_catalogs().to_dict()) == _live_catalogs()

    @pytest.mark.parametrize("payload", [[], "oops", {"data": []}, {"success": True}])
    def test_invalid_structure(self, payload):
        with pytest.raises(CatalogUnavailableError, match="Invalid catalog data structure"):
            parse_catalog_payload(payload)

    def test_incomplete_catalog(self):
        payload = {"attackTypes": [{"id": 1, "name": "email"}], "impacts": [], "statuses": []}
        with pytest.raises(CatalogUnavailableError, match="missing"):
            parse_catalog_payload(payload)

    def test_malformed_row(self):
        payload = {"attackTypes": [{"name": "email"}], "impacts": [], "statuses": []}
        with pytest.raises(CatalogUnavailableError, match="Malformed"):
            parse_catalog_payload(payload)


class TestHttpCatalogService:
    def test_success(self):
        session = FakeSession(FakeResponse({"data": _live_catalogs().to_dict()}))
        svc = HttpCatalogService("http://api.local/", timeout_sec=3, token="t0k", session=session)
        assert svc.get_catalogs() == _live_catalogs()
        sent = session.requests[0]
        assert sent["url"] == "http://api.local/reportes/catalogs"
        assert sent["timeout"] == 3
        assert sent["headers"]["Authorization"] == "Bearer t0k"

    def test_no_token_no_auth_header(self):
        svc = HttpCatalogService("http://api.local", session=FakeSession())
        assert "Authorization" not in svc.headers

    def test_http_error_wrapped(self):
        session = FakeSession(FakeResponse(status_code=500))
        svc = HttpCatalogService("http://api.local", session=session)
        with pytest.raises(CatalogUnavailableError, match="request failed"):
            svc.get_catalogs()

    def test_connection_error_wrapped(self):
        session = FakeSession(error=requests.ConnectionError("refused"))
        svc = HttpCatalogService("http://api.local", session=session)
        with pytest.raises(CatalogUnavailableError):
            svc.get_catalogs()

    def test_non_json_wrapped(self):
        session = FakeSession(FakeResponse(bad_json=True))
        svc = HttpCatalogService("http://api.local", session=session)
        with pytest.raises(CatalogUnavailableError, match="not JSON"):
            svc.get_catalogs()


# ═══════════════════════════════════════════════════════════════════════════
#  CatalogResolver
# ═══════════════════════════════════════════════════════════════════════════


class TestCatalogResolver:
    def test_without_service_uses_defaults(self, clock):
        resolver = CatalogResolver(clock=clock)
        assert resolver.get_catalogs() == default_catalogs()
        assert resolver.fetch_count == 0

    def test_one_fetch_within_ttl(self, clock):
        svc = CountingService()
        resolver = CatalogResolver(svc, CatalogCache(clock, ttl_sec=300), clock)
        for _ in range(5):
            assert resolver.get_catalogs() == _live_catalogs()
            clock.advance(30)
        assert svc.calls == 1

    def test_exactly_one_refetch_after_expiry(self, clock):
        svc = CountingService()
        resolver = CatalogResolver(svc, CatalogCache(clock, ttl_sec=300), clock)
        resolver.get_catalogs()
        clock.advance(minutes=5)
        resolver.get_catalogs()
        resolver.get_catalogs()
        assert svc.calls == 2
        assert resolver.fetch_count == 2

    def test_service_error_falls_back_to_defaults(self, clock):
        svc = CountingService(error=CatalogUnavailableError("down"))
        resolver = CatalogResolver(svc, CatalogCache(clock), clock)
        assert resolver.get_catalogs() == default_catalogs()

    def test_fallback_not_cached(self, clock):
        svc = CountingService(error=RuntimeError("down"))
        resolver = CatalogResolver(svc, CatalogCache(clock), clock)
        resolver.get_catalogs()
        svc.error = None
        assert resolver.get_catalogs() == _live_catalogs()
        assert svc.calls == 2

    def test_incomplete_catalog_falls_back(self, clock):
        svc = CountingService(catalogs=CatalogData(attack_types=[CatalogEntry(1, "email")]))
        resolver = CatalogResolver(svc, CatalogCache(clock), clock)
        assert resolver.get_catalogs() == default_catalogs()
        assert resolver.cache.get() is None

    def test_fallback_is_logged(self, clock, caplog):
        svc = CountingService(error=RuntimeError("boom"))
        resolver = CatalogResolver(svc, CatalogCache(clock), clock)
        with caplog.at_level("WARNING"):
            resolver.get_catalogs()
        assert "using default catalogs" in caplog.text

    def test_refresh_forces_fetch(self, clock):
        svc = CountingService()
        resolver = CatalogResolver(svc, CatalogCache(clock), clock)
        resolver.get_catalogs()
        resolver.refresh()
        assert svc.calls == 2

    def test_resolve_name(self, clock):
        resolver = CatalogResolver(StaticCatalogService(_live_catalogs()), clock=clock)
        assert resolver.resolve_name(CatalogKind.ATTACK_TYPE, 7) == "qr_code"
        assert resolver.resolve_name("status", 2) == "cerrado"

    def test_resolve_unknown_id(self, clock):
        resolver = CatalogResolver(clock=clock)
        assert resolver.resolve_name(CatalogKind.IMPACT, 99) == UNKNOWN_NAME
        assert resolver.resolve_name(CatalogKind.IMPACT, None) == UNKNOWN_NAME

    def test_resolve_id(self, clock):
        resolver = CatalogResolver(clock=clock)
        assert resolver.resolve_id(CatalogKind.ATTACK_TYPE, "whatsapp") == 3
        assert resolver.resolve_id(CatalogKind.ATTACK_TYPE, "carta") is None
        assert resolver.resolve_id(CatalogKind.ATTACK_TYPE, "") is None

    def test_name_maps(self, clock):
        maps = CatalogResolver(clock=clock).name_maps()
        assert set(maps) == set(CatalogKind)
        assert maps[CatalogKind.IMPACT][4] == "cuenta_comprometida"
