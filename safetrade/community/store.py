"""Snapshot access to report rows, with the helpers that filter and page them.

The backend database is an external collaborator; this module defines the
``ReportStore`` contract the community core reads from and an in-memory
implementation fed by CSV/JSONL exports.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Protocol

from safetrade.contracts.report import Report, ReportFilters
from safetrade.shared.clock import Clock, SystemClock

log = logging.getLogger(__name__)


def _ts(iso: str) -> datetime:
    """Parse ISO-8601 timestamp to datetime."""
    return datetime.fromisoformat(iso.replace("Z", "+00:00"))


def _aware(iso: str, ref: datetime) -> datetime | None:
    try:
        dt = _ts(iso)
    except (TypeError, ValueError):
        return None
    return dt.replace(tzinfo=ref.tzinfo) if dt.tzinfo is None else dt


class ReportStore(Protocol):
    def list_reports(self, filters: ReportFilters | None = None) -> list[Report]:
        ...

    def get_reports_in_window(self, days: int) -> list[Report]:
        ...


# ═══════════════════════════════════════════════════════════════════════════
#  Loaders
# ═══════════════════════════════════════════════════════════════════════════


def load_reports_csv(path: str | Path) -> list[Report]:
    """Load reports from a CSV export with a ``REPORT_CSV_COLUMNS`` header."""
    reports: list[Report] = []
    with open(path, encoding="utf-8", newline="") as fh:
        reader = csv.DictReader(fh)
        for line_no, row in enumerate(reader, 2):
            try:
                reports.append(Report.from_dict(row))
            except (KeyError, ValueError) as exc:
                log.warning("Skipping CSV line %d: %s", line_no, exc)
    log.info("Loaded %d reports from CSV: %s", len(reports), path)
    return reports


def load_reports_jsonl(path: str | Path) -> list[Report]:
    """Load reports from a JSONL (one JSON object per line) file."""
    reports: list[Report] = []
    with open(path, encoding="utf-8") as fh:
        for line_no, line in enumerate(fh, 1):
            line = line.strip()
            if not line:
                continue
            try:
                reports.append(Report.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, ValueError) as exc:
                log.warning("Skipping JSONL line %d: %s", line_no, exc)
    log.info("Loaded %d reports from JSONL: %s", len(reports), path)
    return reports


def load_reports(path: str | Path) -> list[Report]:
    """Auto-detect format by file extension and load reports."""
    p = Path(path)
    if p.suffix in (".jsonl", ".ndjson"):
        return load_reports_jsonl(p)
    return load_reports_csv(p)


# ═══════════════════════════════════════════════════════════════════════════
#  Filtering
# ═══════════════════════════════════════════════════════════════════════════


def within_window(reports: list[Report], days: int, now: datetime) -> list[Report]:
    """Reports whose ``created_at`` lies in ``[now - days, now]``."""
    start = now - timedelta(days=days)
    selected = []
    for r in reports:
        created = _aware(r.created_at, now)
        if created is not None and start <= created <= now:
            selected.append(r)
    return selected


def _matches_query(report: Report, query: str) -> bool:
    needle = query.lower()
    haystack = (
        report.description,
        report.attack_origin,
        report.suspicious_url,
        report.message_content,
    )
    return any(needle in field.lower() for field in haystack if field)


def _incident_day(report: Report) -> date | None:
    try:
        return _ts(report.incident_date).date()
    except (TypeError, ValueError):
        return None


def _date_bound(name: str, value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` bound; an unparseable one is dropped with a warning."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        log.warning("Ignoring %s filter with invalid date %r", name, value)
        return None


def filter_reports(reports: list[Report], filters: ReportFilters) -> list[Report]:
    """Apply every set field of *filters*; ``None`` fields are ignored.

    ``date_from``/``date_to`` are inclusive ``YYYY-MM-DD`` bounds on
    ``incident_date``. Pagination is not applied here.
    """
    date_from = _date_bound("date_from", filters.date_from)
    date_to = _date_bound("date_to", filters.date_to)

    result = []
    for r in reports:
        if filters.status is not None and r.status != filters.status:
            continue
        if filters.attack_type is not None and r.attack_type != filters.attack_type:
            continue
        if filters.impact is not None and r.impact != filters.impact:
            continue
        if filters.is_anonymous is not None and r.is_anonymous != filters.is_anonymous:
            continue
        if filters.query and not _matches_query(r, filters.query):
            continue
        if date_from or date_to:
            day = _incident_day(r)
            if day is None:
                continue
            if date_from and day < date_from:
                continue
            if date_to and day > date_to:
                continue
        result.append(r)
    return result


def paginate(reports: list[Report], page: int | None, limit: int | None) -> list[Report]:
    if not limit or limit <= 0:
        return reports
    page = max(page or 1, 1)
    start = (page - 1) * limit
    return reports[start:start + limit]


class InMemoryReportStore:
    """ReportStore over a list of reports (CSV/JSONL export, fixtures)."""

    def __init__(self, reports: list[Report], clock: Clock | None = None) -> None:
        self._reports = list(reports)
        self.clock = clock or SystemClock()

    @classmethod
    def from_file(cls, path: str | Path, clock: Clock | None = None) -> InMemoryReportStore:
        return cls(load_reports(path), clock=clock)

    def __len__(self) -> int:
        return len(self._reports)

    def add(self, report: Report) -> None:
        self._reports.append(report)

    def list_reports(self, filters: ReportFilters | None = None) -> list[Report]:
        """Filtered reports, newest ``created_at`` first, paginated."""
        reports = self._reports if filters is None else filter_reports(self._reports, filters)
        now = self.clock.now()
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        reports = sorted(
            reports,
            key=lambda r: (_aware(r.created_at, now) or oldest, r.id),
            reverse=True,
        )
        if filters is not None:
            reports = paginate(reports, filters.page, filters.limit)
        return reports

    def get_reports_in_window(self, days: int) -> list[Report]:
        selected = within_window(self._reports, days, self.clock.now())
        log.debug("Window %dd: %d of %d reports", days, len(selected), len(self._reports))
        return selected
