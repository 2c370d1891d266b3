"""Shared fixtures for SafeTrade community insights tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from safetrade.contracts.catalog import CatalogData, default_catalogs
from safetrade.contracts.report import Report
from safetrade.shared.clock import FixedClock

# Reference instant for all tests: Monday 2026-10-19 12:00 UTC
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

# ── Helper: create Report with sensible defaults ────────────────────────


def make_report(
    *,
    id: int = 1,
    is_anonymous: bool = False,
    attack_type: int = 1,
    impact: int = 1,
    status: int = 1,
    incident_date: str = "2026-10-18T09:00:00Z",
    created_at: str = "2026-10-18T10:00:00Z",
    user_id: int | None = None,
    updated_at: str = "",
    evidence_url: str | None = None,
    attack_origin: str | None = None,
    suspicious_url: str | None = None,
    message_content: str | None = None,
    description: str | None = None,
    admin_note: str | None = None,
) -> Report:
    return Report(
        id=id,
        is_anonymous=is_anonymous,
        attack_type=attack_type,
        impact=impact,
        status=status,
        incident_date=incident_date,
        created_at=created_at,
        user_id=user_id,
        updated_at=updated_at,
        evidence_url=evidence_url,
        attack_origin=attack_origin,
        suspicious_url=suspicious_url,
        message_content=message_content,
        description=description,
        admin_note=admin_note,
    )


def make_reports(attack_types: list[int], *, impact: int = 1, start_id: int = 1) -> list[Report]:
    """One report per entry of *attack_types*, ids ascending."""
    return [
        make_report(id=start_id + i, attack_type=at, impact=impact)
        for i, at in enumerate(attack_types)
    ]


# ── Timestamp helpers ────────────────────────────────────────────────────


def ts_offset(base: datetime = NOW, **delta: float) -> str:
    """ISO-8601 UTC timestamp *delta* before *base* (e.g. ``days=3``)."""
    dt = base - timedelta(**delta)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def catalogs() -> CatalogData:
    """Seed catalogs: 6 attack types, 4 impacts, 4 statuses."""
    return default_catalogs()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def sample_report() -> Report:
    return make_report(
        id=42,
        user_id=7,
        is_anonymous=False,
        attack_type=3,
        impact=3,
        status=2,
        incident_date="2026-10-10T08:30:00Z",
        created_at="2026-10-10T09:00:00Z",
        updated_at="2026-10-11T09:00:00Z",
        evidence_url="https://evidence.example/42.png",
        attack_origin="+52 55 1234 5678",
        suspicious_url="http://pago-seguro.example",
        message_content="Hola, soy tu sobrino",
        description="Extorsión por WhatsApp",
        admin_note="Escalado",
    )
