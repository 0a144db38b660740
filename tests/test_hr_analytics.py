from __future__ import annotations

from backend.app.services.hr_analytics import (
    MOCK_EMPLOYEES,
    compute_metrics,
    employees_frame,
    headcount_by_position,
)


def test_metrics_on_mock_dataset() -> None:
    metrics = compute_metrics(employees_frame())

    assert metrics["total_employees"] == len(MOCK_EMPLOYEES) == 8
    assert metrics["active_employees"] == 6
    assert metrics["turnover_rate"] == 25
    assert metrics["avg_training_hours"] == 39


def test_metrics_round_half_up() -> None:
    rows = [
        {"id": 1, "name": "A", "position": "QA", "is_active": True, "training_hours": 10, "hire_date": "2024-01-01"},
        {"id": 2, "name": "B", "position": "QA", "is_active": False, "training_hours": 15, "hire_date": "2024-01-01"},
    ]
    metrics = compute_metrics(employees_frame(rows))
    assert metrics["turnover_rate"] == 50
    assert metrics["avg_training_hours"] == 13


def test_metrics_on_empty_frame() -> None:
    assert compute_metrics(employees_frame([])) == {
        "total_employees": 0,
        "active_employees": 0,
        "turnover_rate": 0,
        "avg_training_hours": 0,
    }


def test_headcount_by_position_keeps_first_seen_order() -> None:
    counts = headcount_by_position(employees_frame())

    assert [c["position"] for c in counts][:3] == ["Frontend Developer", "Backend Developer", "UI Designer"]
    assert {"position": "Frontend Developer", "count": 2} in counts
    assert sum(c["count"] for c in counts) == 8
