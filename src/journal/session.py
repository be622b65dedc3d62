"""Per-session view state: signed-in user, sort order, selected day, calendar cursor."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import structlog

from journal.stats import backdated_timestamp, shift_month
from shared_types import SortOrder

logger = structlog.get_logger()


def _current_year() -> int:
    return date.today().year


def _current_month() -> int:
    return date.today().month


@dataclass
class JournalSession:
    """View state owned by one UI session. Dropped entirely on logout."""

    user: Optional[dict] = None
    sort_order: str = SortOrder.DESC.value
    selected_date: Optional[date] = None
    calendar_year: int = field(default_factory=_current_year)
    calendar_month: int = field(default_factory=_current_month)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user and self.user.get("id"))

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") if self.user else None

    def login(self, user: dict) -> None:
        self.user = {"id": user["id"], "email": user.get("email"), "name": user.get("name")}

    def logout(self) -> None:
        fresh = JournalSession()
        self.__dict__.update(fresh.__dict__)

    def toggle_sort(self) -> str:
        self.sort_order = SortOrder.ASC.value if self.sort_order == SortOrder.DESC else SortOrder.DESC.value
        return self.sort_order

    def select_date(self, day: date) -> None:
        self.selected_date = day
        self.calendar_year, self.calendar_month = day.year, day.month

    def clear_selection(self) -> None:
        self.selected_date = None

    def prev_month(self) -> tuple[int, int]:
        self.calendar_year, self.calendar_month = shift_month(self.calendar_year, self.calendar_month, -1)
        return self.calendar_year, self.calendar_month

    def next_month(self) -> tuple[int, int]:
        self.calendar_year, self.calendar_month = shift_month(self.calendar_year, self.calendar_month, 1)
        return self.calendar_year, self.calendar_month

    def entry_timestamp(self, now: Optional[datetime] = None) -> datetime:
        """created_at for the next entry: noon of the selected day, else now."""
        if self.selected_date:
            return backdated_timestamp(self.selected_date)
        return now or datetime.now()

    def to_dict(self) -> dict:
        return {
            "user": self.user,
            "sort_order": self.sort_order,
            "selected_date": self.selected_date.isoformat() if self.selected_date else None,
            "calendar_year": self.calendar_year,
            "calendar_month": self.calendar_month,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JournalSession":
        session = cls()
        session.user = data.get("user")
        if data.get("sort_order") in (SortOrder.DESC, SortOrder.ASC):
            session.sort_order = data["sort_order"]
        if data.get("selected_date"):
            session.selected_date = date.fromisoformat(data["selected_date"])
        if data.get("calendar_year") and data.get("calendar_month"):
            session.calendar_year = int(data["calendar_year"])
            session.calendar_month = int(data["calendar_month"])
        return session


class SessionFile:
    """JSON file holding the CLI session; restored on start, removed on logout."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> JournalSession:
        """Stored session, or a fresh one if missing/corrupt."""
        if not self.path.exists():
            return JournalSession()
        try:
            return JournalSession.from_dict(json.loads(self.path.read_text()))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("session.load_failed", path=str(self.path), error=str(e))
            return JournalSession()

    def save(self, session: JournalSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(session.to_dict(), indent=2))
        try:
            self.path.chmod(0o600)
        except OSError:
            pass

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
