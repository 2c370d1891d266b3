"""Derived community insights: trend summary, analytics overview, alert state.

None of these are persisted; they are recomputed on every request from a
snapshot of report rows.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from safetrade.contracts.enums import AlertLevel, TrendPeriod


@dataclass(slots=True)
class DistributionItem:
    """Count and share of one catalog entry inside a distribution."""

    id: int
    name: str
    count: int = 0
    percentage: float = 0.0


@dataclass(slots=True)
class TrendSummary:
    period: TrendPeriod
    days: int
    total_reports: int = 0
    attack_type_distribution: list[DistributionItem] = field(default_factory=list)
    impact_distribution: list[DistributionItem] = field(default_factory=list)
    main_threat: str = ""
    main_threat_id: int | None = None

    @property
    def top_attack_percentage(self) -> float:
        """Share of the leading attack type, 0.0 when there is none."""
        if not self.attack_type_distribution:
            return 0.0
        return self.attack_type_distribution[0].percentage

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "days": self.days,
            "total_reports": self.total_reports,
            "attack_type_distribution": [asdict(i) for i in self.attack_type_distribution],
            "impact_distribution": [asdict(i) for i in self.impact_distribution],
            "main_threat": self.main_threat,
            "main_threat_id": self.main_threat_id,
        }


@dataclass(slots=True)
class AnalyticsOverview:
    """Community-wide counters over the full (unwindowed) report history."""

    total_reports: int = 0
    reports_today: int = 0
    reports_this_week: int = 0
    reports_this_month: int = 0
    highest_impact_count: int = 0
    anonymous_reports: int = 0
    identified_reports: int = 0
    anonymous_pct: float = 0.0
    identified_pct: float = 0.0
    pending_reports: int = 0
    resolved_reports: int = 0
    status_distribution: list[DistributionItem] = field(default_factory=list)
    generated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status_distribution"] = [asdict(i) for i in self.status_distribution]
        return data


@dataclass(slots=True)
class AlertState:
    """Traffic-light community alert."""

    level: AlertLevel
    message: str
    generated_at: str
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "label": self.level.label,
            "message": self.message,
            "generated_at": self.generated_at,
            "recommendations": list(self.recommendations),
        }
