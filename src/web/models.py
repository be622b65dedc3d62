"""Pydantic request/response schemas for the web API."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from journal.storage import MAX_TEXT_LENGTH
from shared_types import MOOD_MAX, MOOD_MIN

# --- Auth ---


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    confirm: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    email: str
    name: str
    created_at: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


# --- Settings ---


class SettingsUpdate(BaseModel):
    """Update user settings / API keys."""

    llm_provider: Optional[str] = None
    llm_api_key: Optional[str] = None


class SettingsResponse(BaseModel):
    """Settings with bool mask for secrets (never raw keys)."""

    llm_provider: Optional[str] = None
    llm_model: Optional[str] = None
    llm_api_key_set: bool = False
    llm_api_key_hint: Optional[str] = None


# --- Entries ---


def _strip_text(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Please write something in your journal")
    return v


class EntryCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)
    mood: Optional[int] = Field(None, ge=MOOD_MIN, le=MOOD_MAX)
    date: Optional[dt.date] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _strip_text(v)

    @field_validator("date")
    @classmethod
    def not_in_future(cls, v: Optional[dt.date]) -> Optional[dt.date]:
        if v is not None and v > dt.date.today():
            raise ValueError("Entries cannot be dated in the future")
        return v


class EntryOut(BaseModel):
    id: str
    user_id: str
    mood: int
    text: str
    created_at: dt.datetime


class AdviceOut(BaseModel):
    emoji: str
    band: str
    title: str
    messages: list[str]


class AnalysisOut(BaseModel):
    mood_score: int
    analysis: str
    source: str
    emotions: list[str] = []


class EntryCreated(BaseModel):
    entry: EntryOut
    analysis: Optional[AnalysisOut] = None
    advice: AdviceOut


class DeleteResult(BaseModel):
    deleted: int


# --- Mood ---


class AnalyzeRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _strip_text(v)


class MoodResult(BaseModel):
    analysis: AnalysisOut
    advice: AdviceOut
    entry_count: Optional[int] = None


# --- Stats ---


class StatsOut(BaseModel):
    total_entries: int
    average_mood: float | str
    streak: int


class MonthlyOut(BaseModel):
    labels: list[str]
    values: list[Optional[float]]


class CalendarDayOut(BaseModel):
    date: dt.date
    day: int
    in_month: bool
    has_entries: bool
    entry_count: int


class CalendarOut(BaseModel):
    year: int
    month: int
    title: str
    days: list[CalendarDayOut]
