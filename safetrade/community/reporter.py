"""Reporting: write community insights as JSON, CSV and TXT."""

from __future__ import annotations

import csv
import io
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from safetrade.contracts.insights import (
    AlertState,
    AnalyticsOverview,
    DistributionItem,
    TrendSummary,
)

log = logging.getLogger(__name__)

DISTRIBUTION_CSV_COLUMNS = ["dimension", "id", "name", "count", "percentage"]


def _atomic_write(path: str | Path, content: str) -> None:
    """Write *content* to *path* through a temp file + ``os.replace``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        dir=str(target.parent),
        prefix=f".{target.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, target)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def to_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_json(payload: dict[str, Any], path: str | Path) -> None:
    _atomic_write(path, to_json(payload) + "\n")
    log.info("Wrote %s", path)


def _distribution_rows(dimension: str, items: list[DistributionItem]) -> list[list[object]]:
    return [[dimension, i.id, i.name, i.count, i.percentage] for i in items]


def write_distribution_csv(trends: TrendSummary, path: str | Path) -> None:
    rows = _distribution_rows("attack_type", trends.attack_type_distribution)
    rows += _distribution_rows("impact", trends.impact_distribution)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(DISTRIBUTION_CSV_COLUMNS)
    writer.writerows(rows)
    _atomic_write(path, buf.getvalue())
    log.info("Wrote distributions → %s (%d rows)", path, len(rows))


def render_summary_txt(
    trends: TrendSummary,
    overview: AnalyticsOverview,
    alert: AlertState,
) -> str:
    """Plain-text community summary."""
    sep = "=" * 64
    lines = [
        sep,
        "  SafeTrade — Resumen comunitario",
        sep,
        f"  Generado:            {alert.generated_at}",
        f"  Nivel de alerta:     {alert.level.label.upper()}",
        f"  {alert.message}",
        "",
        "  Analytics",
        f"    Reportes totales:  {overview.total_reports}",
        f"    Reportes hoy:      {overview.reports_today}",
        f"    Últimos 7 días:    {overview.reports_this_week}",
        f"    Últimos 30 días:   {overview.reports_this_month}",
        f"    Impacto máximo:    {overview.highest_impact_count}",
        f"    Anónimos:          {overview.anonymous_reports} ({overview.anonymous_pct:.1f}%)",
        f"    Identificados:     {overview.identified_reports} ({overview.identified_pct:.1f}%)",
        f"    Pendientes:        {overview.pending_reports}",
        f"    Resueltos:         {overview.resolved_reports}",
        "",
        f"  Tendencias ({trends.period.value}, {trends.total_reports} reportes)",
        f"    Amenaza principal: {trends.main_threat}",
    ]
    for item in trends.attack_type_distribution:
        lines.append(f"    {item.name:<22} {item.count:>5}  {item.percentage:5.1f}%")
    lines.append("")
    lines.append("  Impacto")
    for item in trends.impact_distribution:
        lines.append(f"    {item.name:<22} {item.count:>5}  {item.percentage:5.1f}%")
    lines.append("")
    lines.append("  Recomendaciones")
    for rec in alert.recommendations:
        lines.append(f"    - {rec}")
    lines.append(sep)
    return "\n".join(lines) + "\n"


def write_outputs(
    trends: TrendSummary,
    overview: AnalyticsOverview,
    alert: AlertState,
    out_dir: str | Path,
) -> None:
    """Write trends.json, analytics.json, alert.json, distributions.csv, summary.txt."""
    out = Path(out_dir)
    write_json(trends.to_dict(), out / "trends.json")
    write_json(overview.to_dict(), out / "analytics.json")
    write_json(alert.to_dict(), out / "alert.json")
    write_distribution_csv(trends, out / "distributions.csv")
    _atomic_write(out / "summary.txt", render_summary_txt(trends, overview, alert))
    log.info("Outputs written to %s/", out)
