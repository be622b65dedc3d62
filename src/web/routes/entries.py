"""Journal entry routes: list, create (optionally scored), bulk delete."""

import asyncio
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from journal.stats import backdated_timestamp, sort_entries
from shared_types import SortOrder
from web.auth import get_current_user
from web.deps import get_entry_store, get_scorer_for_user
from web.models import DeleteResult, EntryCreate, EntryCreated, EntryOut
from web.routes.mood import advice_out, analysis_out

logger = structlog.get_logger()

router = APIRouter(prefix="/api/entries", tags=["entries"])


@router.get("", response_model=list[EntryOut])
async def list_entries(
    order: SortOrder = Query(default=SortOrder.DESC),
    user: dict = Depends(get_current_user),
):
    store = get_entry_store()
    entries = await asyncio.to_thread(store.get_user_entries, user["id"])
    return [EntryOut(**e.to_dict()) for e in sort_entries(entries, order)]


@router.post("", response_model=EntryCreated, status_code=status.HTTP_201_CREATED)
async def create_entry(body: EntryCreate, user: dict = Depends(get_current_user)):
    """Save an entry. Without an explicit mood the text is scored first."""
    analysis = None
    mood = body.mood
    if mood is None:
        scorer = get_scorer_for_user(user["id"])
        try:
            analysis = await asyncio.to_thread(scorer.score, body.text)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        mood = analysis.mood_score

    created_at = backdated_timestamp(body.date) if body.date else datetime.now()
    store = get_entry_store()
    try:
        entry_id = await asyncio.to_thread(
            store.add_entry, user["id"], mood, body.text, created_at
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("entries.created", user_id=user["id"], entry_id=entry_id, scored=analysis is not None)
    return EntryCreated(
        entry=EntryOut(id=entry_id, user_id=user["id"], mood=mood, text=body.text, created_at=created_at),
        analysis=analysis_out(analysis) if analysis else None,
        advice=advice_out(mood),
    )


@router.delete("", response_model=DeleteResult)
async def delete_entries(user: dict = Depends(get_current_user)):
    store = get_entry_store()
    deleted = await asyncio.to_thread(store.delete_all_entries, user["id"])
    logger.info("entries.deleted_all", user_id=user["id"], count=deleted)
    return DeleteResult(deleted=deleted)
