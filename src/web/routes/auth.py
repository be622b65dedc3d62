"""Signup, login, and current-user routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from web.auth import AccountError, authenticate, create_access_token, create_account, get_current_user
from web.models import LoginRequest, SignupRequest, TokenResponse, UserOut
from web.user_store import DuplicateEmailError

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest):
    try:
        user = create_account(body.name, body.email, body.password, body.confirm)
    except (AccountError, DuplicateEmailError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("auth.signup", user_id=user["id"])
    return UserOut(**user)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest):
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    logger.info("auth.login", user_id=user["id"])
    return TokenResponse(access_token=create_access_token(user), user=UserOut(**user))


@router.get("/me", response_model=UserOut)
async def get_me(user: dict = Depends(get_current_user)):
    return UserOut(**user)
