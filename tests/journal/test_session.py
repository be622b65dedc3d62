"""Tests for per-session view state and its file persistence."""

import json
from datetime import date, datetime

from journal.session import JournalSession, SessionFile

USER = {"id": "u1", "email": "a@b.com", "name": "Ann"}


class TestJournalSession:
    def test_defaults(self):
        s = JournalSession()
        assert not s.is_authenticated
        assert s.user_id is None
        assert s.sort_order == "desc"
        assert s.selected_date is None
        assert (s.calendar_year, s.calendar_month) == (date.today().year, date.today().month)

    def test_login_logout(self):
        s = JournalSession()
        s.login(USER)
        assert s.is_authenticated
        assert s.user_id == "u1"
        s.toggle_sort()
        s.select_date(date(2024, 5, 6))
        s.logout()
        assert not s.is_authenticated
        assert s.sort_order == "desc"
        assert s.selected_date is None

    def test_toggle_sort(self):
        s = JournalSession()
        assert s.toggle_sort() == "asc"
        assert s.toggle_sort() == "desc"

    def test_select_date_moves_calendar(self):
        s = JournalSession()
        s.select_date(date(2023, 11, 20))
        assert (s.calendar_year, s.calendar_month) == (2023, 11)

    def test_month_navigation_wraps_year(self):
        s = JournalSession(calendar_year=2025, calendar_month=1)
        assert s.prev_month() == (2024, 12)
        assert s.next_month() == (2025, 1)
        assert s.next_month() == (2025, 2)

    def test_entry_timestamp(self):
        s = JournalSession()
        now = datetime(2025, 3, 15, 18, 45)
        assert s.entry_timestamp(now) == now
        s.select_date(date(2025, 3, 10))
        assert s.entry_timestamp(now) == datetime(2025, 3, 10, 12, 0)
        s.clear_selection()
        assert s.entry_timestamp(now) == now

    def test_dict_roundtrip(self):
        s = JournalSession()
        s.login(USER)
        s.toggle_sort()
        s.select_date(date(2024, 2, 29))
        restored = JournalSession.from_dict(s.to_dict())
        assert restored == s

    def test_from_dict_ignores_bad_sort(self):
        assert JournalSession.from_dict({"sort_order": "sideways"}).sort_order == "desc"


class TestSessionFile:
    def test_missing_file_gives_fresh_session(self, tmp_path):
        assert not SessionFile(tmp_path / "nope.json").load().is_authenticated

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "sub" / "session.json"
        sf = SessionFile(path)
        s = JournalSession()
        s.login(USER)
        sf.save(s)
        assert json.loads(path.read_text())["user"]["id"] == "u1"
        assert sf.load().user_id == "u1"
        assert path.stat().st_mode & 0o777 == 0o600

    def test_corrupt_file_gives_fresh_session(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert not SessionFile(path).load().is_authenticated

    def test_clear(self, tmp_path):
        sf = SessionFile(tmp_path / "session.json")
        sf.save(JournalSession())
        sf.clear()
        assert not sf.path.exists()
        sf.clear()
