from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from ..calendar import jobs_for_month, jobs_on_day
from ..quote_store import QuoteStore
from .estimates import get_store

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/")
def month_jobs(
    year: int = Query(None),
    month: int = Query(None, ge=1, le=12),
    store: QuoteStore = Depends(get_store),
):
    """Scheduled quotes overlapping a month (defaults to the current month)."""
    today = date.today()
    year = year or today.year
    month = month or today.month
    jobs = jobs_for_month(store.list_all(), year, month)
    return {
        "year": year,
        "month": month,
        "jobs": [job.model_dump(mode="json") for job in jobs],
    }


@router.get("/day/{day}")
def day_jobs(day: str, store: QuoteStore = Depends(get_store)):
    try:
        parsed = date.fromisoformat(day)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"day must be YYYY-MM-DD, got {day}")
    jobs = jobs_on_day(store.list_all(), parsed)
    return {"day": parsed.isoformat(), "jobs": [job.model_dump(mode="json") for job in jobs]}
