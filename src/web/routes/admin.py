"""Admin listing routes."""

import asyncio

from fastapi import APIRouter, Depends

from web.auth import get_admin_user
from web.deps import get_entry_store
from web.models import EntryOut, UserOut
from web.user_store import list_users

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=list[UserOut])
async def get_users(user: dict = Depends(get_admin_user)):
    return [UserOut(**u) for u in list_users()]


@router.get("/entries", response_model=list[EntryOut])
async def get_entries(user: dict = Depends(get_admin_user)):
    """Every entry across users, newest first."""
    entries = await asyncio.to_thread(get_entry_store().get_all_entries)
    entries.sort(key=lambda e: e.created_at, reverse=True)
    return [EntryOut(**e.to_dict()) for e in entries]
