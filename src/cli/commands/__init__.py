"""CLI command modules."""

from .account import login, logout, signup, whoami
from .entries import clear, history, write
from .mood import analyze, today
from .serve import serve
from .settings import key
from .stats import calendar, chart, stats

__all__ = [
    "signup",
    "login",
    "logout",
    "whoami",
    "write",
    "history",
    "clear",
    "analyze",
    "today",
    "stats",
    "chart",
    "calendar",
    "key",
    "serve",
]
