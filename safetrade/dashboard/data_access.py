"""Data loading and filtering for the admin dashboard."""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from safetrade.community.transformer import ReportTransformer
from safetrade.contracts.report import REPORT_CSV_COLUMNS, Report

log = logging.getLogger(__name__)

# ── paths (relative to repo root) ───────────────────────────────────────────

ROOT = Path(__file__).resolve().parent.parent.parent
REPORTS_PATH = Path(os.environ.get("SAFETRADE_REPORTS", ROOT / "data" / "reports.csv"))
CONFIG_DIR = ROOT / "config"

# ── retry settings ──────────────────────────────────────────────────────────

_MAX_READ_RETRIES = 3
_READ_RETRY_DELAY_SEC = 0.15


def file_mtime_str(path: Path) -> str:
    """Human-readable mtime of *path*, or 'N/A'."""
    try:
        ts = os.path.getmtime(path)
    except OSError:
        return "N/A"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _read_csv_safe(path: Path, **kwargs) -> pd.DataFrame | None:
    """Read a CSV, retrying while the file is being replaced."""
    for attempt in range(1, _MAX_READ_RETRIES + 1):
        if not path.exists():
            return None
        if path.stat().st_size == 0:
            if attempt < _MAX_READ_RETRIES:
                time.sleep(_READ_RETRY_DELAY_SEC)
                continue
            return None
        try:
            return pd.read_csv(path, **kwargs)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, OSError) as exc:
            log.debug(
                "CSV read attempt %d/%d for %s failed: %s",
                attempt,
                _MAX_READ_RETRIES,
                path,
                exc,
            )
            if attempt < _MAX_READ_RETRIES:
                time.sleep(_READ_RETRY_DELAY_SEC)
    return None


# ── loaders ─────────────────────────────────────────────────────────────────


def load_reports_frame(path: Path = REPORTS_PATH) -> pd.DataFrame | None:
    """Load the report export; text columns stay strings, blanks become ''."""
    df = _read_csv_safe(path, dtype=str, keep_default_na=False)
    if df is None:
        return None
    missing = [c for c in ("id", "attack_type", "impact", "created_at") if c not in df.columns]
    if missing:
        log.warning("Report export %s lacks columns: %s", path, ", ".join(missing))
        return None
    return df


def frame_to_reports(df: pd.DataFrame) -> list[Report]:
    """Convert export rows into Report records, skipping malformed rows."""
    reports: list[Report] = []
    cols = [c for c in REPORT_CSV_COLUMNS if c in df.columns]
    for idx, row in enumerate(df[cols].to_dict(orient="records")):
        try:
            reports.append(Report.from_dict(row))
        except (KeyError, ValueError) as exc:
            log.warning("Skipping report row %d: %s", idx, exc)
    return reports


def legacy_frame(reports: list[Report], transformer: ReportTransformer) -> pd.DataFrame:
    """Reports in the legacy (catalog name) shape, one row per report."""
    rows = [transformer.to_legacy_summary(r).to_dict() for r in reports]
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True, errors="coerce")
    df["incident_date"] = pd.to_datetime(df["incident_date"], utc=True, errors="coerce")
    return df


def daily_counts(reports: list[Report], days: int, now: datetime) -> pd.DataFrame:
    """Reports per calendar day over the trailing *days*, zero-filled."""
    end = pd.Timestamp(now).tz_convert("UTC").normalize()
    start = end - pd.Timedelta(days=days - 1)
    full_range = pd.date_range(start=start, end=end, freq="D")

    created = pd.to_datetime(
        pd.Series([r.created_at for r in reports], dtype="object"), utc=True, errors="coerce"
    ).dropna()
    created = created[(created >= start) & (created < end + pd.Timedelta(days=1))]
    agg = created.dt.floor("D").value_counts()
    out = agg.reindex(full_range, fill_value=0).rename_axis("day").reset_index(name="count")
    return out


# ── filtering ───────────────────────────────────────────────────────────────


def filter_legacy(
    df: pd.DataFrame,
    *,
    attack_types: list[str] | None = None,
    statuses: list[str] | None = None,
    impacts: list[str] | None = None,
    anonymous: bool | None = None,
) -> pd.DataFrame:
    """Apply sidebar filters to the legacy reports frame."""
    if df.empty:
        return df
    mask = pd.Series(True, index=df.index)
    if attack_types:
        mask &= df["attack_type"].isin(attack_types)
    if statuses:
        mask &= df["status"].isin(statuses)
    if impacts:
        mask &= df["impact_level"].isin(impacts)
    if anonymous is not None:
        mask &= df["is_anonymous"] == anonymous
    return df.loc[mask].copy()
