"""API key and settings management routes (per-user)."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from llm import REMOTE_PROVIDERS
from web.auth import get_current_user
from web.deps import SECRET_KEY_FIELDS, get_secret_key, get_settings_mask_for_user
from web.models import SettingsResponse, SettingsUpdate
from web.user_store import delete_user_secret, set_user_secret

logger = structlog.get_logger()

router = APIRouter(prefix="/api/settings", tags=["settings"])

_ALLOWED_PROVIDERS = {"local", "auto", *REMOTE_PROVIDERS}


@router.get("", response_model=SettingsResponse)
async def get_settings(user: dict = Depends(get_current_user)):
    """Return per-user settings with bool mask for secrets."""
    mask = get_settings_mask_for_user(user["id"])
    logger.info(
        "settings.get",
        user_id=user["id"],
        keys_set={k: v for k, v in mask.items() if k.endswith("_set")},
    )
    return SettingsResponse(**mask)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    body: SettingsUpdate,
    user: dict = Depends(get_current_user),
):
    """Encrypt and save per-user settings."""
    if body.llm_provider is not None and body.llm_provider not in _ALLOWED_PROVIDERS:
        raise HTTPException(status_code=400, detail=f"Unknown provider: {body.llm_provider}")

    fernet_key = get_secret_key()
    update_data = body.model_dump(exclude_none=True)

    for key, value in update_data.items():
        set_user_secret(user["id"], key, str(value), fernet_key)

    logger.info("settings.updated", user_id=user["id"], keys=list(update_data.keys()))
    return SettingsResponse(**get_settings_mask_for_user(user["id"]))


@router.delete("", response_model=SettingsResponse)
async def clear_settings(user: dict = Depends(get_current_user)):
    """Forget the user's provider and API key; scoring falls back to shared config."""
    for key in ["llm_provider", *SECRET_KEY_FIELDS]:
        delete_user_secret(user["id"], key)
    logger.info("settings.cleared", user_id=user["id"])
    return SettingsResponse(**get_settings_mask_for_user(user["id"]))
