from __future__ import annotations

from fastapi import APIRouter
from backend.app.services import hr_analytics

router = APIRouter()

@router.get("/employees")
def data_employees() -> dict:
    df = hr_analytics.employees_frame()
    return {"ok": True, "employees": hr_analytics.employees_payload(df)}

@router.get("/metrics")
def data_metrics() -> dict:
    df = hr_analytics.employees_frame()
    return {
        "ok": True,
        "metrics": hr_analytics.compute_metrics(df),
        "by_position": hr_analytics.headcount_by_position(df),
    }
