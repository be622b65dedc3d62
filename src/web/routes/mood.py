"""Mood scoring routes (no persistence)."""

import asyncio

import structlog
from fastapi import APIRouter, Depends, HTTPException

from journal.advice import get_mood_advice, mood_band, mood_emoji
from journal.sentiment import MoodAnalysis
from journal.stats import today_entries
from web.auth import get_current_user
from web.deps import get_entry_store, get_scorer_for_user
from web.models import AdviceOut, AnalysisOut, AnalyzeRequest, MoodResult

logger = structlog.get_logger()

router = APIRouter(prefix="/api/mood", tags=["mood"])


def advice_out(score: int) -> AdviceOut:
    advice = get_mood_advice(score)
    return AdviceOut(
        emoji=mood_emoji(score),
        band=mood_band(score),
        title=advice.title,
        messages=list(advice.messages),
    )


def analysis_out(analysis: MoodAnalysis) -> AnalysisOut:
    return AnalysisOut(**analysis.to_dict())


@router.post("/analyze", response_model=MoodResult)
async def analyze(body: AnalyzeRequest, user: dict = Depends(get_current_user)):
    scorer = get_scorer_for_user(user["id"])
    try:
        analysis = await asyncio.to_thread(scorer.score, body.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("mood.analyzed", user_id=user["id"], source=analysis.source)
    return MoodResult(analysis=analysis_out(analysis), advice=advice_out(analysis.mood_score))


@router.get("/today", response_model=MoodResult)
async def analyze_today(user: dict = Depends(get_current_user)):
    """Score today's entries combined into one text."""
    store = get_entry_store()
    entries = await asyncio.to_thread(store.get_user_entries, user["id"])
    todays = today_entries(entries)
    if not todays:
        raise HTTPException(status_code=404, detail="No entries today")
    scorer = get_scorer_for_user(user["id"])
    try:
        analysis = await asyncio.to_thread(scorer.analyze_today, todays)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if analysis is None:
        raise HTTPException(status_code=404, detail="No entries today")
    return MoodResult(
        analysis=analysis_out(analysis),
        advice=advice_out(analysis.mood_score),
        entry_count=len(todays),
    )
