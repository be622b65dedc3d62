"""Mood statistics routes: summary, monthly averages, calendar."""

import asyncio
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from journal.stats import calendar_month, compute_stats, monthly_averages
from web.auth import get_current_user
from web.deps import get_config, get_entry_store
from web.models import CalendarDayOut, CalendarOut, MonthlyOut, StatsOut

router = APIRouter(prefix="/api/stats", tags=["stats"])


async def _user_entries(user_id: str):
    return await asyncio.to_thread(get_entry_store().get_user_entries, user_id)


@router.get("", response_model=StatsOut)
async def get_stats(user: dict = Depends(get_current_user)):
    return StatsOut(**compute_stats(await _user_entries(user["id"])))


@router.get("/monthly", response_model=MonthlyOut)
async def get_monthly(
    months: int | None = Query(default=None, ge=1, le=120),
    user: dict = Depends(get_current_user),
):
    """Average mood per calendar month, oldest first; None for empty months."""
    months_back = months or get_config().stats.months_back
    return MonthlyOut(**monthly_averages(await _user_entries(user["id"]), date.today(), months_back))


@router.get("/calendar", response_model=CalendarOut)
async def get_calendar(
    year: int | None = None,
    month: int | None = None,
    user: dict = Depends(get_current_user),
):
    today = date.today()
    try:
        cal = calendar_month(
            await _user_entries(user["id"]),
            year if year is not None else today.year,
            month if month is not None else today.month,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CalendarOut(
        year=cal.year,
        month=cal.month,
        title=cal.title,
        days=[CalendarDayOut(**vars(d)) for d in cal.days],
    )
