"""Tests for safetrade.community.trends — distributions and main threat."""

from __future__ import annotations

import pytest

from safetrade.community.trends import (
    NO_DATA_THREAT,
    aggregate_trends,
    build_distribution,
    percentages,
)
from safetrade.contracts.catalog import UNKNOWN_NAME
from safetrade.contracts.enums import CatalogKind, TrendPeriod
from tests.conftest import make_report, make_reports

# ═══════════════════════════════════════════════════════════════════════════
#  percentages()
# ═══════════════════════════════════════════════════════════════════════════


class TestPercentages:
    def test_all_zero(self):
        assert percentages([0, 0, 0]) == [0.0, 0.0, 0.0]

    def test_empty_list(self):
        assert percentages([]) == []

    def test_thirds_sum_to_exactly_100(self):
        pcts = percentages([1, 1, 1])
        assert sum(pcts) == pytest.approx(100.0, abs=1e-9)
        # the leftover unit goes to the earliest position
        assert pcts == [33.4, 33.3, 33.3]

    def test_single_group_is_100(self):
        assert percentages([0, 7, 0]) == [0.0, 100.0, 0.0]

    def test_precision_zero(self):
        pcts = percentages([1, 2], precision=0)
        assert pcts == [33.0, 67.0]

    def test_sevenths(self):
        pcts = percentages([1] * 7)
        assert sum(pcts) == pytest.approx(100.0, abs=1e-9)
        assert all(p in (14.2, 14.3) for p in pcts)


# ═══════════════════════════════════════════════════════════════════════════
#  build_distribution()
# ═══════════════════════════════════════════════════════════════════════════


class TestBuildDistribution:
    def test_lists_every_catalog_entry(self, catalogs):
        items = build_distribution([], catalogs, CatalogKind.ATTACK_TYPE)
        assert [i.id for i in items] == [1, 2, 3, 4, 5, 6]
        assert all(i.count == 0 and i.percentage == 0.0 for i in items)

    def test_sorted_by_count_then_id(self, catalogs):
        items = build_distribution([3, 3, 5, 5, 1], catalogs, CatalogKind.ATTACK_TYPE)
        assert [(i.id, i.count) for i in items[:3]] == [(3, 2), (5, 2), (1, 1)]
        # zero-count entries keep id order
        assert [i.id for i in items[3:]] == [2, 4, 6]

    def test_unknown_id_grouped_as_desconocido(self, catalogs):
        items = build_distribution([99, 99, 1], catalogs, CatalogKind.IMPACT)
        unknown = [i for i in items if i.id == 99]
        assert len(unknown) == 1
        assert unknown[0].name == UNKNOWN_NAME
        assert unknown[0].count == 2
        assert items[0].id == 99


# ═══════════════════════════════════════════════════════════════════════════
#  aggregate_trends()
# ═══════════════════════════════════════════════════════════════════════════


class TestAggregateTrends:
    def test_empty_window_is_all_zero(self, catalogs):
        summary = aggregate_trends([], catalogs, "7days")
        assert summary.total_reports == 0
        assert summary.period is TrendPeriod.SEVEN_DAYS
        assert summary.days == 7
        assert len(summary.attack_type_distribution) == 6
        assert len(summary.impact_distribution) == 4
        assert sum(i.percentage for i in summary.attack_type_distribution) == 0
        assert sum(i.percentage for i in summary.impact_distribution) == 0
        assert summary.main_threat == NO_DATA_THREAT
        assert summary.main_threat_id is None
        assert summary.top_attack_percentage == 0.0

    def test_percentages_sum_to_100(self, catalogs):
        reports = make_reports([1, 1, 2, 3, 3, 3, 4, 5, 6, 6, 2])
        summary = aggregate_trends(reports, catalogs, TrendPeriod.THIRTY_DAYS)
        total = sum(i.percentage for i in summary.attack_type_distribution)
        assert total == pytest.approx(100.0, abs=0.1)
        total_impact = sum(i.percentage for i in summary.impact_distribution)
        assert total_impact == pytest.approx(100.0, abs=0.1)

    def test_counts_and_main_threat(self, catalogs):
        reports = make_reports([1, 3, 3, 3, 2])
        summary = aggregate_trends(reports, catalogs)
        top = summary.attack_type_distribution[0]
        assert (top.id, top.name, top.count) == (3, "whatsapp", 3)
        assert top.percentage == 60.0
        assert summary.main_threat == "whatsapp"
        assert summary.main_threat_id == 3
        assert summary.top_attack_percentage == 60.0

    def test_main_threat_tie_lowest_id_wins(self, catalogs):
        reports = make_reports([4, 2, 4, 2])
        summary = aggregate_trends(reports, catalogs)
        assert summary.main_threat == "SMS"
        assert summary.main_threat_id == 2

    def test_impact_distribution(self, catalogs):
        reports = [
            make_report(id=1, impact=4),
            make_report(id=2, impact=4),
            make_report(id=3, impact=1),
            make_report(id=4, impact=2),
        ]
        summary = aggregate_trends(reports, catalogs)
        impact = {i.name: (i.count, i.percentage) for i in summary.impact_distribution}
        assert impact["cuenta_comprometida"] == (2, 50.0)
        assert impact["ninguno"] == (1, 25.0)
        assert impact["robo_dinero"] == (0, 0.0)

    def test_default_period_is_30_days(self, catalogs):
        assert aggregate_trends([], catalogs).period is TrendPeriod.THIRTY_DAYS

    def test_invalid_period_raises(self, catalogs):
        with pytest.raises(ValueError, match="Unknown trend period"):
            aggregate_trends([], catalogs, "14days")

    def test_to_dict_shape(self, catalogs):
        summary = aggregate_trends(make_reports([1, 2]), catalogs, "90days")
        data = summary.to_dict()
        assert data["period"] == "90days"
        assert data["days"] == 90
        assert data["total_reports"] == 2
        assert set(data["attack_type_distribution"][0]) == {"id", "name", "count", "percentage"}
