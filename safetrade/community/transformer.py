"""Convert reports and search filters between catalog ids and legacy catalog names.

Every mapping is total:
  * an id missing from the catalog becomes ``"Desconocido"``;
  * a legacy name missing from the catalog leaves the normalized field
    unset (``None``), so a search simply runs without that filter.

Under a stable catalog the two directions are inverse:
``from_legacy_report(to_legacy_report(r)) == r``.
"""

from __future__ import annotations

import logging
from typing import Any

from safetrade.contracts.catalog import UNKNOWN_NAME, CatalogData, display_name
from safetrade.contracts.enums import CatalogKind
from safetrade.contracts.report import (
    LegacyFilters,
    LegacyReport,
    LegacyReportSummary,
    Report,
    ReportFilters,
)

log = logging.getLogger(__name__)


class ReportTransformer:
    def __init__(self, catalogs: CatalogData) -> None:
        self.catalogs = catalogs
        self._names = {kind: catalogs.name_map(kind) for kind in CatalogKind}
        self._ids = {kind: catalogs.id_map(kind) for kind in CatalogKind}

    # ── lookups ───────────────────────────────────────────────────────────

    def name_of(self, kind: CatalogKind, catalog_id: int | None) -> str:
        if catalog_id is None:
            return UNKNOWN_NAME
        return self._names[kind].get(catalog_id, UNKNOWN_NAME)

    def id_of(self, kind: CatalogKind, name: str | None) -> int | None:
        if not name:
            return None
        found = self._ids[kind].get(name)
        if found is None:
            log.debug("No %s named %r in catalog", kind.value, name)
        return found

    # ── reports ───────────────────────────────────────────────────────────

    def to_legacy_report(self, report: Report) -> LegacyReport:
        return LegacyReport(
            id=report.id,
            user_id=report.user_id,
            attack_type=self.name_of(CatalogKind.ATTACK_TYPE, report.attack_type),
            incident_date=report.incident_date,
            impact_level=self.name_of(CatalogKind.IMPACT, report.impact),
            description=report.description or "",
            attack_origin=report.attack_origin or "",
            is_anonymous=report.is_anonymous,
            status=self.name_of(CatalogKind.STATUS, report.status),
            admin_notes=report.admin_note,
            evidence_urls=[report.evidence_url] if report.evidence_url else [],
            created_at=report.created_at,
            updated_at=report.updated_at,
            suspicious_url=report.suspicious_url,
            message_content=report.message_content,
        )

    def to_legacy_summary(self, report: Report) -> LegacyReportSummary:
        return LegacyReportSummary(
            id=report.id,
            attack_type=self.name_of(CatalogKind.ATTACK_TYPE, report.attack_type),
            incident_date=report.incident_date,
            impact_level=self.name_of(CatalogKind.IMPACT, report.impact),
            status=self.name_of(CatalogKind.STATUS, report.status),
            is_anonymous=report.is_anonymous,
            user_id=report.user_id,
            attack_origin=report.attack_origin or "",
            created_at=report.created_at,
        )

    def from_legacy_report(self, legacy: LegacyReport) -> Report:
        """Rebuild the normalized report.

        Unknown names map to ``None``; callers that persist the result must
        check the catalog fields first.
        """
        return Report(
            id=legacy.id,
            is_anonymous=legacy.is_anonymous,
            attack_type=self.id_of(CatalogKind.ATTACK_TYPE, legacy.attack_type),
            impact=self.id_of(CatalogKind.IMPACT, legacy.impact_level),
            status=self.id_of(CatalogKind.STATUS, legacy.status),
            incident_date=legacy.incident_date,
            created_at=legacy.created_at,
            user_id=legacy.user_id,
            updated_at=legacy.updated_at,
            evidence_url=legacy.evidence_urls[0] if legacy.evidence_urls else None,
            attack_origin=legacy.attack_origin or None,
            suspicious_url=legacy.suspicious_url,
            message_content=legacy.message_content,
            description=legacy.description or None,
            admin_note=legacy.admin_notes,
        )

    # ── filters ───────────────────────────────────────────────────────────

    def to_legacy_filters(self, filters: ReportFilters) -> LegacyFilters:
        legacy = LegacyFilters(
            query=filters.query,
            is_anonymous=filters.is_anonymous,
            date_from=filters.date_from,
            date_to=filters.date_to,
            page=filters.page,
            limit=filters.limit,
        )
        if filters.status is not None and filters.status in self._names[CatalogKind.STATUS]:
            legacy.status = self._names[CatalogKind.STATUS][filters.status]
        if filters.attack_type is not None and filters.attack_type in self._names[CatalogKind.ATTACK_TYPE]:
            legacy.attack_type = self._names[CatalogKind.ATTACK_TYPE][filters.attack_type]
        if filters.impact is not None and filters.impact in self._names[CatalogKind.IMPACT]:
            legacy.impact_level = self._names[CatalogKind.IMPACT][filters.impact]
        return legacy

    def from_legacy_filters(self, legacy: LegacyFilters) -> ReportFilters:
        return ReportFilters(
            query=legacy.query,
            status=self.id_of(CatalogKind.STATUS, legacy.status),
            attack_type=self.id_of(CatalogKind.ATTACK_TYPE, legacy.attack_type),
            impact=self.id_of(CatalogKind.IMPACT, legacy.impact_level),
            is_anonymous=legacy.is_anonymous,
            date_from=legacy.date_from,
            date_to=legacy.date_to,
            page=legacy.page,
            limit=legacy.limit,
        )

    # ── select options ────────────────────────────────────────────────────

    def options(self, kind: CatalogKind) -> list[dict[str, Any]]:
        """``[{value, label, display_name}]`` for form selects."""
        return [
            {"value": e.id, "label": e.name, "display_name": display_name(kind, e.name)}
            for e in self.catalogs.entries(kind)
        ]
