"""Community counters over the full report history.

Boundaries
──────────
    One ``now`` is taken for the whole computation. "Today" is the calendar
    day of ``now`` in ``now``'s own timezone (server local time when the
    value comes from ``SystemClock``); report ``created_at`` values are
    converted into that zone before comparing dates. "This week" and "this
    month" are the trailing 7 and 30 days ending at ``now``.

Highest impact
──────────────
    ``highest_impact_count`` counts reports whose impact equals
    ``highest_impact_id``. When no id is configured, the largest impact id
    in the catalog is used (the catalog lists impacts from least to most
    severe).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from safetrade.community.trends import DEFAULT_PRECISION, build_distribution, percentages
from safetrade.contracts.catalog import CatalogData
from safetrade.contracts.enums import CatalogKind
from safetrade.contracts.insights import AnalyticsOverview
from safetrade.contracts.report import Report
from safetrade.shared.clock import isoformat_z

log = logging.getLogger(__name__)

DEFAULT_RESOLVED_STATUSES: tuple[str, ...] = ("cerrado",)


def _ts(iso: str) -> datetime:
    return datetime.fromisoformat(iso.replace("Z", "+00:00"))


def _local(iso: str, now: datetime) -> datetime | None:
    """Parse *iso* into *now*'s timezone; naive values are taken as already local."""
    try:
        dt = _ts(iso)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=now.tzinfo)
    return dt.astimezone(now.tzinfo)


def highest_impact(catalogs: CatalogData) -> int | None:
    """Default "most severe" impact id: the largest id in the impact catalog."""
    ids = [e.id for e in catalogs.impacts]
    return max(ids) if ids else None


def summarize(
    reports: Iterable[Report],
    catalogs: CatalogData,
    now: datetime,
    highest_impact_id: int | None = None,
    resolved_status_names: Iterable[str] = DEFAULT_RESOLVED_STATUSES,
    precision: int = DEFAULT_PRECISION,
) -> AnalyticsOverview:
    """Compute the AnalyticsOverview for *reports* at instant *now*.

    Args:
        reports: All reports (no window applied).
        catalogs: Catalog snapshot used for status names and the default
            highest-impact id.
        now: Timezone-aware reference instant.
        highest_impact_id: Impact id treated as most severe.
        resolved_status_names: Status names that count as resolved; every
            other status counts as pending.
        precision: Decimals for percentages.

    Returns:
        AnalyticsOverview; all zeros for an empty input.
    """
    reports = list(reports)
    overview = AnalyticsOverview(generated_at=isoformat_z(now))
    overview.status_distribution = build_distribution(
        (r.status for r in reports), catalogs, CatalogKind.STATUS, precision
    )

    if not reports:
        log.info("No reports — empty analytics overview")
        return overview

    if highest_impact_id is None:
        highest_impact_id = highest_impact(catalogs)

    status_names = catalogs.name_map(CatalogKind.STATUS)
    resolved = set(resolved_status_names)
    today = now.date()
    week_start = now - timedelta(days=7)
    month_start = now - timedelta(days=30)

    overview.total_reports = len(reports)
    for r in reports:
        created = _local(r.created_at, now)
        if created is not None:
            if created.date() == today:
                overview.reports_today += 1
            if week_start <= created <= now:
                overview.reports_this_week += 1
            if month_start <= created <= now:
                overview.reports_this_month += 1
        else:
            log.warning("Report %s has an unparseable created_at: %r", r.id, r.created_at)

        if r.impact == highest_impact_id:
            overview.highest_impact_count += 1

        if r.is_anonymous:
            overview.anonymous_reports += 1
        else:
            overview.identified_reports += 1

        if status_names.get(r.status) in resolved:
            overview.resolved_reports += 1
        else:
            overview.pending_reports += 1

    overview.anonymous_pct, overview.identified_pct = percentages(
        [overview.anonymous_reports, overview.identified_reports], precision
    )

    log.info(
        "Analytics: total=%d, today=%d, highest_impact=%d, anonymous=%.1f%%",
        overview.total_reports,
        overview.reports_today,
        overview.highest_impact_count,
        overview.anonymous_pct,
    )
    return overview
