"""Report records: the normalized (catalog-ID) shape and the legacy (name) shape."""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any

# CSV column order of the report export
REPORT_CSV_COLUMNS: list[str] = [
    "id",
    "user_id",
    "is_anonymous",
    "attack_type",
    "impact",
    "status",
    "incident_date",
    "created_at",
    "updated_at",
    "evidence_url",
    "attack_origin",
    "suspicious_url",
    "message_content",
    "description",
    "admin_note",
]

log = logging.getLogger(__name__)

# status assigned by the backend to newly created reports
DEFAULT_STATUS_ID = 1

_TRUE_VALUES = {"true", "1", "yes", "si", "sí", "t", "y"}


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text != "" else None


def _opt_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass(slots=True)
class Report:
    """One incident report as stored by the backend (catalog references by id)."""

    # ── mandatory ──
    id: int
    is_anonymous: bool
    attack_type: int        # -> attack_type catalog
    impact: int             # -> impact catalog
    status: int             # -> status catalog
    incident_date: str      # ISO-8601
    created_at: str         # ISO-8601, used for windowing

    # ── optional ──
    user_id: int | None = None
    updated_at: str = ""
    evidence_url: str | None = None
    attack_origin: str | None = None
    suspicious_url: str | None = None
    message_content: str | None = None
    description: str | None = None
    admin_note: str | None = None

    # ── serialisation ─────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    def to_csv_row(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)
        row = []
        for col in REPORT_CSV_COLUMNS:
            value = getattr(self, col)
            if value is None:
                row.append("")
            elif isinstance(value, bool):
                row.append("true" if value else "false")
            else:
                row.append(value)
        writer.writerow(row)
        return buf.getvalue().rstrip("\r\n")

    @staticmethod
    def csv_header() -> str:
        return ",".join(REPORT_CSV_COLUMNS)

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> Report:
        """Build a Report from a CSV DictReader row or a JSON object.

        A missing ``status`` takes ``DEFAULT_STATUS_ID`` and is logged.
        Raises ``KeyError`` if a mandatory field is missing and
        ``ValueError`` if a numeric field cannot be parsed.
        """
        report_id = int(row["id"])
        status = row.get("status")
        if status is None or status == "":
            log.warning("Report %d has no status, using default %d", report_id, DEFAULT_STATUS_ID)
            status = DEFAULT_STATUS_ID
        return cls(
            id=report_id,
            is_anonymous=_as_bool(row.get("is_anonymous", False)),
            attack_type=int(row["attack_type"]),
            impact=int(row["impact"]),
            status=int(status),
            incident_date=str(row.get("incident_date") or row["created_at"]),
            created_at=str(row["created_at"]),
            user_id=_opt_int(row.get("user_id")),
            updated_at=str(row.get("updated_at") or ""),
            evidence_url=_opt_str(row.get("evidence_url")),
            attack_origin=_opt_str(row.get("attack_origin")),
            suspicious_url=_opt_str(row.get("suspicious_url")),
            message_content=_opt_str(row.get("message_content")),
            description=_opt_str(row.get("description")),
            admin_note=_opt_str(row.get("admin_note")),
        )


@dataclass(slots=True)
class LegacyReport:
    """String-enum report shape expected by older admin and mobile clients."""

    id: int
    user_id: int | None
    attack_type: str
    incident_date: str
    impact_level: str
    description: str
    attack_origin: str
    is_anonymous: bool
    status: str
    admin_notes: str | None
    evidence_urls: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    device_info: str | None = None  # no longer collected
    suspicious_url: str | None = None
    message_content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class LegacyReportSummary:
    """Row of the legacy reports list."""

    id: int
    attack_type: str
    incident_date: str
    impact_level: str
    status: str
    is_anonymous: bool
    user_id: int | None
    attack_origin: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ReportFilters:
    """Normalized search filters; ``None`` means "do not filter on this field"."""

    query: str | None = None
    status: int | None = None
    attack_type: int | None = None
    impact: int | None = None
    is_anonymous: bool | None = None
    date_from: str | None = None  # YYYY-MM-DD, inclusive
    date_to: str | None = None    # YYYY-MM-DD, inclusive
    page: int | None = None
    limit: int | None = None


@dataclass(slots=True)
class LegacyFilters:
    """Search filters as sent by legacy clients (catalog names, not ids)."""

    query: str | None = None
    status: str | None = None
    attack_type: str | None = None
    impact_level: str | None = None
    is_anonymous: bool | None = None
    date_from: str | None = None
    date_to: str | None = None
    page: int | None = None
    limit: int | None = None
