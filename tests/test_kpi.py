"""Tests for the KPI calculations.

Tests cover:
- Half-up percentage rounding and the zero-denominator case
- Compliance rate from a response set
- Per-inspection stats from a progress snapshot
- Aggregation across inspections and per-date trend
"""

from __future__ import annotations

import pytest

from officine.kpi import (
    aggregate,
    compliance_rate,
    inspection_stats,
    percent,
    progress_from_responses,
    read_field,
    trend,
)
from officine.schemas.inspections import Progress, Response


def _inspection(
    total: int, answered: int, conforme: int, status: str = "completed", date: str = "2024-01-15",
) -> dict:
    """Helper to build an inspection mapping carrying a progress snapshot."""
    return {
        "status": status,
        "date_inspection": date,
        "progress": {
            "total": total,
            "answered": answered,
            "conforme": conforme,
            "non_conforme": answered - conforme,
        },
    }


class TestPercent:
    @pytest.mark.parametrize(
        ("part", "whole", "expected"),
        [
            (2, 3, 67),
            (1, 3, 33),
            (1, 2, 50),
            (1, 8, 13),  # 12.5 rounds up
            (5, 8, 63),  # 62.5 rounds up
            (0, 5, 0),
            (5, 5, 100),
        ],
    )
    def test_rounding(self, part: int, whole: int, expected: int) -> None:
        assert percent(part, whole) == expected

    def test_zero_denominator(self) -> None:
        assert percent(0, 0) == 0
        assert percent(3, 0) == 0


class TestComplianceRate:
    def test_two_of_three(self) -> None:
        """{1: T, 2: T, 3: F} → round(2/3 × 100) = 67."""
        assert compliance_rate({1: {"conforme": True}, 2: {"conforme": True}, 3: {"conforme": False}}) == 67

    def test_unanswered_excluded(self) -> None:
        responses = [{"conforme": True}, {"conforme": None}, {"conforme": None}]
        assert compliance_rate(responses) == 100

    def test_empty(self) -> None:
        assert compliance_rate({}) == 0
        assert compliance_rate(None) == 0
        assert compliance_rate([{"conforme": None}]) == 0

    def test_accepts_response_models(self) -> None:
        responses = [
            Response(criterion_id=1, conforme=True, updated_at="2024-01-15 10:00:00"),
            Response(criterion_id=2, conforme=False, updated_at="2024-01-15 10:00:01"),
        ]
        assert compliance_rate(responses) == 50

    def test_monotonic_in_conforme(self) -> None:
        """Turning a non-conforme answer into conforme never lowers the rate."""
        answers = [False] * 6
        previous = compliance_rate([{"conforme": a} for a in answers])
        for i in range(len(answers)):
            answers[i] = True
            current = compliance_rate([{"conforme": a} for a in answers])
            assert current >= previous
            previous = current
        assert previous == 100


class TestProgressFromResponses:
    def test_counts(self) -> None:
        p = progress_from_responses([{"conforme": True}, {"conforme": False}, {"conforme": None}])
        assert p == Progress(total=3, answered=2, conforme=1, non_conforme=1)

    def test_invariants(self) -> None:
        p = progress_from_responses([{"conforme": v} for v in (True, None, False, True, None)])
        assert p.answered <= p.total
        assert p.conforme + p.non_conforme == p.answered


class TestInspectionStats:
    def test_from_progress(self) -> None:
        stats = inspection_stats(_inspection(total=100, answered=80, conforme=60))
        assert stats.compliance_rate == 75
        assert stats.completion_rate == 80
        assert stats.pending == 20
        assert stats.non_conforme == 20

    def test_none(self) -> None:
        assert inspection_stats(None) is None

    def test_fresh_inspection(self) -> None:
        stats = inspection_stats({"status": "draft"})
        assert stats.total_criteria == 0
        assert stats.completion_rate == 0
        assert stats.compliance_rate == 0

    def test_accepts_progress_model(self) -> None:
        record = {"progress": Progress(total=4, answered=2, conforme=1, non_conforme=1)}
        assert inspection_stats(record).completion_rate == 50


class TestAggregate:
    def test_empty(self) -> None:
        stats = aggregate([])
        assert stats.total_inspections == 0
        assert stats.by_status == {}
        assert stats.average_compliance_rate == 0
        assert aggregate(None).total_inspections == 0

    def test_totals(self) -> None:
        stats = aggregate([
            _inspection(10, 10, 8, status="completed"),
            _inspection(10, 4, 1, status="in_progress"),
            _inspection(10, 10, 10, status="completed"),
        ])
        assert stats.total_inspections == 3
        assert stats.by_status == {"completed": 2, "in_progress": 1}
        assert stats.total_criteria == 30
        assert stats.total_conforme == 19
        assert stats.total_non_conforme == 5

    def test_average_is_unweighted_mean(self) -> None:
        # Rates 100 and 50: the mean of rates is 75 even though 11/12 answers conform
        stats = aggregate([
            _inspection(10, 10, 10),
            _inspection(2, 2, 1),
        ])
        assert stats.average_compliance_rate == 75

    def test_average_rounds_half_up(self) -> None:
        stats = aggregate([_inspection(2, 2, 2), _inspection(2, 2, 1), _inspection(2, 2, 1), _inspection(2, 2, 1)])
        # (100 + 50 + 50 + 50) / 4 = 62.5
        assert stats.average_compliance_rate == 63


class TestTrend:
    def test_grouped_by_date_oldest_first(self) -> None:
        points = trend([
            _inspection(4, 4, 4, date="2024-02-01"),
            _inspection(4, 4, 2, date="2024-01-10"),
            _inspection(4, 4, 0, date="2024-02-01"),
        ])
        assert [p.date for p in points] == ["2024-01-10", "2024-02-01"]
        assert [p.total_inspections for p in points] == [1, 2]
        assert [p.compliance_rate for p in points] == [50, 50]

    def test_empty(self) -> None:
        assert trend([]) == []
        assert trend(None) == []


def test_read_field_mapping_and_attribute() -> None:
    assert read_field({"a": 1}, "a") == 1
    assert read_field({"a": 1}, "b", "x") == "x"
    assert read_field(Progress(total=3), "total") == 3
