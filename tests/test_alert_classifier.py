"""Tests for safetrade.community.alert_classifier — traffic-light alert."""

from __future__ import annotations

import pytest

from safetrade.community.alert_classifier import (
    DEFAULT_RULES,
    RECOMMENDATIONS,
    AlertRule,
    classify_alert,
    classify_level,
    high_impact_percentage,
)
from safetrade.contracts.enums import AlertLevel, TrendPeriod
from safetrade.contracts.insights import AnalyticsOverview, DistributionItem, TrendSummary

GENERATED_AT = "2026-10-19T12:00:00Z"


def _overview(total: int, high: int) -> AnalyticsOverview:
    return AnalyticsOverview(total_reports=total, highest_impact_count=high)


def _trends(top_pct: float, main_threat: str = "whatsapp") -> TrendSummary:
    return TrendSummary(
        period=TrendPeriod.SEVEN_DAYS,
        days=7,
        total_reports=10,
        attack_type_distribution=[DistributionItem(3, main_threat, 1, top_pct)],
        main_threat=main_threat,
        main_threat_id=3,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  classify_level()
# ═══════════════════════════════════════════════════════════════════════════


class TestClassifyLevel:
    @pytest.mark.parametrize(
        "high,top,expected",
        [
            (45, 10, AlertLevel.RED),
            (10, 65, AlertLevel.RED),
            (25, 10, AlertLevel.YELLOW),
            (10, 45, AlertLevel.YELLOW),
            (5, 5, AlertLevel.GREEN),
            (0, 0, AlertLevel.GREEN),
        ],
    )
    def test_decision_table(self, high, top, expected):
        assert classify_level(high, top) is expected

    def test_thresholds_are_strict(self):
        assert classify_level(40.0, 60.0) is AlertLevel.YELLOW
        assert classify_level(20.0, 40.0) is AlertLevel.GREEN

    def test_just_over_threshold(self):
        assert classify_level(40.01, 0) is AlertLevel.RED
        assert classify_level(0, 40.01) is AlertLevel.YELLOW

    def test_custom_rules(self):
        rules = [AlertRule(AlertLevel.RED, high_impact_over=10, top_attack_over=100)]
        assert classify_level(11, 0, rules) is AlertLevel.RED
        assert classify_level(5, 90, rules) is AlertLevel.GREEN

    def test_first_matching_rule_wins(self):
        assert DEFAULT_RULES[0].level is AlertLevel.RED
        assert classify_level(50, 50) is AlertLevel.RED


# ═══════════════════════════════════════════════════════════════════════════
#  classify_alert()
# ═══════════════════════════════════════════════════════════════════════════


class TestClassifyAlert:
    def test_zero_reports_is_green(self):
        alert = classify_alert(_overview(0, 0), _trends(0.0, "Sin datos"), GENERATED_AT)
        assert alert.level is AlertLevel.GREEN
        assert alert.generated_at == GENERATED_AT

    def test_high_impact_none_when_empty(self):
        assert high_impact_percentage(_overview(0, 0)) is None
        assert high_impact_percentage(_overview(4, 1)) == 25.0

    def test_red_alert(self):
        alert = classify_alert(_overview(20, 9), _trends(10.0), GENERATED_AT)
        assert alert.level is AlertLevel.RED
        assert "whatsapp" in alert.message
        assert alert.recommendations == list(RECOMMENDATIONS[AlertLevel.RED])

    def test_yellow_alert_mentions_threat(self):
        alert = classify_alert(_overview(20, 5), _trends(10.0, "SMS"), GENERATED_AT)
        assert alert.level is AlertLevel.YELLOW
        assert "SMS" in alert.message

    def test_green_alert(self):
        alert = classify_alert(_overview(20, 1), _trends(5.0), GENERATED_AT)
        assert alert.level is AlertLevel.GREEN
        assert "normales" in alert.message
        assert len(alert.recommendations) == len(RECOMMENDATIONS[AlertLevel.GREEN])

    def test_deterministic_except_timestamp(self):
        a = classify_alert(_overview(20, 9), _trends(70.0), "2026-10-19T12:00:00Z")
        b = classify_alert(_overview(20, 9), _trends(70.0), "2026-10-20T12:00:00Z")
        assert (a.level, a.message, a.recommendations) == (b.level, b.message, b.recommendations)
        assert a.generated_at != b.generated_at

    def test_recommendations_are_a_copy(self):
        alert = classify_alert(_overview(20, 1), _trends(5.0), GENERATED_AT)
        alert.recommendations.append("x")
        assert "x" not in RECOMMENDATIONS[AlertLevel.GREEN]
