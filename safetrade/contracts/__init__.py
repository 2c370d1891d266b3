"""Canonical data structures shared by all modules."""

from safetrade.contracts.catalog import (
    UNKNOWN_NAME,
    CatalogData,
    CatalogEntry,
    default_catalogs,
)
from safetrade.contracts.enums import AlertLevel, CatalogKind, TrendPeriod
from safetrade.contracts.insights import (
    AlertState,
    AnalyticsOverview,
    DistributionItem,
    TrendSummary,
)
from safetrade.contracts.report import (
    LegacyFilters,
    LegacyReport,
    LegacyReportSummary,
    Report,
    ReportFilters,
)

__all__ = [
    "UNKNOWN_NAME",
    "AlertLevel",
    "AlertState",
    "AnalyticsOverview",
    "CatalogData",
    "CatalogEntry",
    "CatalogKind",
    "DistributionItem",
    "LegacyFilters",
    "LegacyReport",
    "LegacyReportSummary",
    "Report",
    "ReportFilters",
    "TrendPeriod",
    "TrendSummary",
    "default_catalogs",
]
