from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd


# Mock dataset backing the analytics dashboard.
MOCK_EMPLOYEES: List[Dict[str, Any]] = [
    {"id": 1, "name": "Anna Ivanova", "position": "Frontend Developer", "is_active": True, "training_hours": 45, "hire_date": "2023-01-15", "quit_date": None},
    {"id": 2, "name": "Petr Smirnov", "position": "Backend Developer", "is_active": True, "training_hours": 32, "hire_date": "2023-03-20", "quit_date": None},
    {"id": 3, "name": "Maria Kozlova", "position": "UI Designer", "is_active": False, "training_hours": 28, "hire_date": "2023-02-10", "quit_date": "2023-11-15"},
    {"id": 4, "name": "Sergey Popov", "position": "Project Manager", "is_active": True, "training_hours": 52, "hire_date": "2023-04-05", "quit_date": None},
    {"id": 5, "name": "Elena Sokolova", "position": "QA Engineer", "is_active": False, "training_hours": 35, "hire_date": "2023-01-20", "quit_date": "2023-10-30"},
    {"id": 6, "name": "Dmitry Volkov", "position": "DevOps Engineer", "is_active": True, "training_hours": 40, "hire_date": "2023-05-12", "quit_date": None},
    {"id": 7, "name": "Olga Morozova", "position": "Business Analyst", "is_active": True, "training_hours": 38, "hire_date": "2023-06-01", "quit_date": None},
    {"id": 8, "name": "Alexander Lebedev", "position": "Frontend Developer", "is_active": True, "training_hours": 42, "hire_date": "2023-03-15", "quit_date": None},
]

COLUMNS = ["id", "name", "position", "is_active", "training_hours", "hire_date", "quit_date"]


def employees_frame(records: Optional[List[Dict[str, Any]]] = None) -> pd.DataFrame:
    rows = MOCK_EMPLOYEES if records is None else records
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["hire_date"] = pd.to_datetime(df["hire_date"], errors="coerce")
    df["quit_date"] = pd.to_datetime(df["quit_date"], errors="coerce")
    return df


def _round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; dashboards expect 12.5 -> 13.
    return int(x + 0.5) if x >= 0 else -int(-x + 0.5)


def compute_metrics(df: pd.DataFrame) -> Dict[str, int]:
    total = int(len(df))
    if total == 0:
        return {"total_employees": 0, "active_employees": 0, "turnover_rate": 0, "avg_training_hours": 0}

    active = int(df["is_active"].astype(bool).sum())
    return {
        "total_employees": total,
        "active_employees": active,
        "turnover_rate": _round_half_up((total - active) / total * 100),
        "avg_training_hours": _round_half_up(float(df["training_hours"].sum()) / total),
    }


def headcount_by_position(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """[{"position": ..., "count": ...}] in first-seen order."""
    if df.empty:
        return []
    counts = df.groupby("position", sort=False).size()
    return [{"position": str(p), "count": int(c)} for p, c in counts.items()]


def employees_payload(df: pd.DataFrame) -> List[Dict[str, Any]]:
    out = []
    for row in df.to_dict(orient="records"):
        out.append({
            "id": int(row["id"]),
            "name": row["name"],
            "position": row["position"],
            "is_active": bool(row["is_active"]),
            "training_hours": int(row["training_hours"]),
            "hire_date": row["hire_date"].date().isoformat() if pd.notna(row["hire_date"]) else None,
            "quit_date": row["quit_date"].date().isoformat() if pd.notna(row["quit_date"]) else None,
        })
    return out
