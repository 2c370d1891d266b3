"""Attack-type and impact distributions over a window of reports.

Windowing is the caller's job: ``aggregate_trends`` receives the reports
that already fall inside the period.

Distribution rules
──────────────────
  * every catalog entry is listed, with count 0 when no report references it;
  * ids missing from the catalog are grouped under their id with the name
    ``"Desconocido"``;
  * items are ordered by count descending, ties broken by the lower id;
  * percentages are rounded with the largest-remainder method, so a
    non-empty distribution sums to exactly 100 and an empty one to 0.

Main threat
───────────
  The name of the first attack-type item (highest count, lowest id on ties).
  An empty window reports ``"Sin datos"``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from safetrade.contracts.catalog import UNKNOWN_NAME, CatalogData
from safetrade.contracts.enums import CatalogKind, TrendPeriod
from safetrade.contracts.insights import DistributionItem, TrendSummary
from safetrade.contracts.report import Report

log = logging.getLogger(__name__)

NO_DATA_THREAT = "Sin datos"
DEFAULT_PRECISION = 1


def percentages(counts: list[int], precision: int = DEFAULT_PRECISION) -> list[float]:
    """Split 100% across *counts* with largest-remainder rounding.

    Works in integer units of ``10**-precision`` percent so the rounded
    values always add up to exactly 100 (or all zeros when the total is 0).
    Equal remainders favour the earlier position.
    """
    total = sum(counts)
    if total <= 0:
        return [0.0 for _ in counts]

    scale = 10**precision
    units = 100 * scale
    quotients: list[int] = []
    remainders: list[int] = []
    for c in counts:
        q, r = divmod(c * units, total)
        quotients.append(q)
        remainders.append(r)

    leftover = units - sum(quotients)
    order = sorted(range(len(counts)), key=lambda i: (-remainders[i], i))
    for i in order[:leftover]:
        quotients[i] += 1

    return [round(q / scale, precision) for q in quotients]


def build_distribution(
    ids: Iterable[int],
    catalogs: CatalogData,
    kind: CatalogKind,
    precision: int = DEFAULT_PRECISION,
) -> list[DistributionItem]:
    """Count *ids* against the catalog of *kind* and return sorted items."""
    counts = Counter(ids)
    names = catalogs.name_map(kind)

    items = [DistributionItem(id=cid, name=name, count=counts.get(cid, 0)) for cid, name in names.items()]
    for cid in sorted(set(counts) - set(names)):
        items.append(DistributionItem(id=cid, name=UNKNOWN_NAME, count=counts[cid]))

    items.sort(key=lambda it: (-it.count, it.id))
    for item, pct in zip(items, percentages([it.count for it in items], precision)):
        item.percentage = pct
    return items


def aggregate_trends(
    reports: list[Report],
    catalogs: CatalogData,
    period: TrendPeriod | str = TrendPeriod.THIRTY_DAYS,
    precision: int = DEFAULT_PRECISION,
) -> TrendSummary:
    """Build the TrendSummary for *reports* already filtered to *period*."""
    period = TrendPeriod.parse(period)
    summary = TrendSummary(period=period, days=period.days, total_reports=len(reports))

    summary.attack_type_distribution = build_distribution(
        (r.attack_type for r in reports), catalogs, CatalogKind.ATTACK_TYPE, precision
    )
    summary.impact_distribution = build_distribution(
        (r.impact for r in reports), catalogs, CatalogKind.IMPACT, precision
    )

    if reports and summary.attack_type_distribution:
        top = summary.attack_type_distribution[0]
        summary.main_threat = top.name
        summary.main_threat_id = top.id
    else:
        summary.main_threat = NO_DATA_THREAT

    log.info(
        "Trends [%s]: reports=%d, main_threat=%s",
        period.value,
        summary.total_reports,
        summary.main_threat,
    )
    return summary
