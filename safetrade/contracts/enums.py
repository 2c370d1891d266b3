"""Canonical enumerations shared by the community modules."""

from __future__ import annotations

from enum import Enum


class CatalogKind(str, Enum):
    ATTACK_TYPE = "attack_type"
    IMPACT = "impact"
    STATUS = "status"


class TrendPeriod(str, Enum):
    """Trailing windows accepted by the trends endpoint."""

    SEVEN_DAYS = "7days"
    THIRTY_DAYS = "30days"
    NINETY_DAYS = "90days"

    @property
    def days(self) -> int:
        return int(self.value.removesuffix("days"))

    @classmethod
    def parse(cls, value: str | TrendPeriod) -> TrendPeriod:
        """Return the period for *value* or raise ``ValueError``."""
        if isinstance(value, TrendPeriod):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown trend period '{value}' (expected one of: {allowed})") from None


class AlertLevel(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def label(self) -> str:
        """Spanish label used by the public API and the mobile client."""
        return _ALERT_LABELS[self]


_ALERT_LABELS = {
    AlertLevel.GREEN: "verde",
    AlertLevel.YELLOW: "amarillo",
    AlertLevel.RED: "rojo",
}
