"""CommunityService — the surface the presentation layer calls.

Wires the report store, the catalog resolver and the clock into the pure
aggregation functions:

    get_trends(period)      -> TrendSummary       (windowed reports)
    get_analytics()         -> AnalyticsOverview  (all reports)
    get_community_alert()   -> AlertState         (7-day trends + analytics)

plus the legacy/normalized report and filter mappings.
"""

from __future__ import annotations

import logging
from datetime import datetime

from safetrade.community.alert_classifier import classify_alert
from safetrade.community.analytics import summarize
from safetrade.community.catalog_cache import CatalogCache
from safetrade.community.catalog_client import HttpCatalogService
from safetrade.community.catalog_resolver import CatalogResolver
from safetrade.community.settings import CommunitySettings
from safetrade.community.store import ReportStore, within_window
from safetrade.community.transformer import ReportTransformer
from safetrade.community.trends import aggregate_trends
from safetrade.contracts.catalog import CatalogData
from safetrade.contracts.enums import TrendPeriod
from safetrade.contracts.insights import AlertState, AnalyticsOverview, TrendSummary
from safetrade.contracts.report import (
    LegacyFilters,
    LegacyReport,
    LegacyReportSummary,
    Report,
    ReportFilters,
)
from safetrade.shared.clock import Clock, SystemClock, isoformat_z

log = logging.getLogger(__name__)

ALERT_PERIOD = TrendPeriod.SEVEN_DAYS


class CommunityService:
    def __init__(
        self,
        store: ReportStore,
        resolver: CatalogResolver | None = None,
        clock: Clock | None = None,
        settings: CommunitySettings | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self.settings = settings or CommunitySettings()
        self.resolver = resolver or CatalogResolver(clock=self.clock)

    @classmethod
    def from_settings(
        cls,
        store: ReportStore,
        settings: CommunitySettings,
        clock: Clock | None = None,
    ) -> CommunityService:
        """Build the service with an HTTP catalog source when one is configured."""
        clock = clock or SystemClock()
        service = None
        if settings.catalog_url:
            service = HttpCatalogService(settings.catalog_url, timeout_sec=settings.catalog_timeout_sec)
        resolver = CatalogResolver(
            service=service,
            cache=CatalogCache(clock, ttl_sec=settings.catalog_ttl_sec),
            clock=clock,
        )
        return cls(store, resolver=resolver, clock=clock, settings=settings)

    # ── insights ──────────────────────────────────────────────────────────

    def get_trends(self, period: TrendPeriod | str | None = None) -> TrendSummary:
        period = TrendPeriod.parse(period or self.settings.default_period)
        reports = self.store.get_reports_in_window(period.days)
        return aggregate_trends(reports, self.resolver.get_catalogs(), period, self.settings.precision)

    def get_analytics(self) -> AnalyticsOverview:
        return self._summarize(self.store.list_reports(), self.resolver.get_catalogs(), self.clock.now())

    def _summarize(self, reports: list[Report], catalogs: CatalogData, now: datetime) -> AnalyticsOverview:
        return summarize(
            reports,
            catalogs,
            now=now,
            highest_impact_id=self.settings.highest_impact_id,
            resolved_status_names=self.settings.resolved_statuses,
            precision=self.settings.precision,
        )

    def get_community_alert(self) -> AlertState:
        """Alert for a single instant: window, overview and ``generated_at`` share ``now``."""
        now = self.clock.now()
        catalogs = self.resolver.get_catalogs()
        reports = self.store.list_reports()
        trends = aggregate_trends(
            within_window(reports, ALERT_PERIOD.days, now), catalogs, ALERT_PERIOD, self.settings.precision
        )
        overview = self._summarize(reports, catalogs, now)
        return classify_alert(
            overview,
            trends,
            generated_at=isoformat_z(now),
            rules=self.settings.alert_rules,
        )

    # ── legacy compatibility ──────────────────────────────────────────────

    def transformer(self) -> ReportTransformer:
        return ReportTransformer(self.resolver.get_catalogs())

    def to_legacy_report(self, report: Report) -> LegacyReport:
        return self.transformer().to_legacy_report(report)

    def to_legacy_summary(self, report: Report) -> LegacyReportSummary:
        return self.transformer().to_legacy_summary(report)

    def from_legacy_report(self, legacy: LegacyReport) -> Report:
        return self.transformer().from_legacy_report(legacy)

    def to_legacy_filters(self, filters: ReportFilters) -> LegacyFilters:
        return self.transformer().to_legacy_filters(filters)

    def from_legacy_filters(self, legacy: LegacyFilters) -> ReportFilters:
        return self.transformer().from_legacy_filters(legacy)

    def search_legacy(self, legacy: LegacyFilters) -> list[LegacyReportSummary]:
        """Run a legacy-shaped search and answer in the legacy list shape."""
        transformer = self.transformer()
        filters = transformer.from_legacy_filters(legacy)
        reports = self.store.list_reports(filters)
        log.info("Legacy search matched %d reports", len(reports))
        return [transformer.to_legacy_summary(r) for r in reports]
