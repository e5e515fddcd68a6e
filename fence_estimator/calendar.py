"""
Calendar jobs — scheduled date ranges derived from saved quotes.

A quote shows on the calendar once it has both startDate and endDate
(end is exclusive). Grid layout is left to the client.
"""

from datetime import date
from typing import List

from pydantic import BaseModel

from .models import QuoteStatus


class CalendarJob(BaseModel):
    id: str
    title: str
    status: QuoteStatus
    start: date
    end: date  # exclusive


def in_range(day: date, start: date, end_exclusive: date) -> bool:
    return start <= day < end_exclusive


def month_bounds(year: int, month: int) -> tuple:
    """(first day of month, first day of next month)."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def jobs_from_quotes(quotes) -> List[CalendarJob]:
    jobs = []
    for q in quotes:
        if q.start_date is None or q.end_date is None:
            continue
        jobs.append(CalendarJob(
            id=q.id,
            title=q.title,
            status=q.status,
            start=q.start_date,
            end=q.end_date,
        ))
    return jobs


def jobs_for_month(quotes, year: int, month: int) -> List[CalendarJob]:
    """Jobs whose [start, end) range touches the given month, earliest first."""
    month_start, month_end = month_bounds(year, month)
    jobs = [
        job for job in jobs_from_quotes(quotes)
        if job.start < month_end and job.end > month_start
    ]
    return sorted(jobs, key=lambda job: (job.start, job.end))


def jobs_on_day(quotes, day: date) -> List[CalendarJob]:
    """Jobs scheduled on one calendar cell."""
    return [job for job in jobs_from_quotes(quotes) if in_range(day, job.start, job.end)]
