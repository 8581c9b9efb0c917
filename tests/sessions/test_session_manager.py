from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.timecard_system.timecard_system.sessions.model import SessionIdentity
from src.timecard_system.timecard_system.sessions.service import SessionManager
from src.timecard_system.timecard_system.sessions.sheet_session_repository import SheetSessionRepository
from src.timecard_system.timecard_system.sheets.memory_sheet_store import InMemorySheetStore

T0 = datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_manager(store=None, clock=None, secret="test-secret"):
    store = store if store is not None else InMemorySheetStore()
    clock = clock or FakeClock(T0)
    return SessionManager(SheetSessionRepository(store), secret_key=secret, clock=clock), store, clock


def test_new_token_is_valid_immediately():
    manager, _, _ = make_manager()
    token = manager.create("John Doe", "Driver")
    assert manager.validate(token) is True


def test_token_expires_after_eight_hours():
    manager, _, clock = make_manager()
    token = manager.create("John Doe", "Driver")

    clock.advance(hours=7, minutes=59)
    assert manager.validate(token) is True

    clock.advance(minutes=1, seconds=1)
    assert manager.validate(token) is False


def test_session_row_records_eight_hour_window():
    manager, store, _ = make_manager()
    token = manager.create("John Doe", "Driver")

    row = store.get_rows("Sessions")[1]
    assert row[0] == token
    created = datetime.fromisoformat(row[3])
    expires = datetime.fromisoformat(row[4])
    assert created == T0
    assert expires - created == timedelta(hours=8)


def test_resolve_returns_identity():
    manager, _, _ = make_manager()
    token = manager.create("Jane Smith", "Manager")
    assert manager.resolve(token) == SessionIdentity(username="Jane Smith", role="Manager")


def test_resolve_fails_closed():
    manager, _, _ = make_manager()
    assert manager.resolve(None) is None
    assert manager.resolve("") is None
    assert manager.resolve("not-a-token") is None


def test_signed_token_without_session_row_is_rejected():
    manager, store, _ = make_manager()
    token = manager.create("John Doe", "Driver")
    store.delete_row("Sessions", 2)
    assert manager.validate(token) is False


def test_token_signed_with_another_key_is_rejected():
    manager, store, clock = make_manager()
    other, _, _ = make_manager(store=InMemorySheetStore(), clock=clock, secret="other-secret")
    forged = other.create("John Doe", "Manager")
    # Even with a matching row, the signature must check out.
    store.insert_sheet("Sessions", ["Token", "Username", "Role", "Created At", "Expires At"])
    store.append_row("Sessions", [forged, "John Doe", "Manager", T0.isoformat(), (T0 + timedelta(hours=8)).isoformat()])
    assert manager.validate(forged) is False


def test_manually_expired_row_is_rejected():
    manager, store, _ = make_manager()
    token = manager.create("John Doe", "Driver")
    store.write_cell("Sessions", 2, 5, (T0 - timedelta(minutes=1)).isoformat())
    assert manager.validate(token) is False


def test_unreadable_expiry_fails_closed():
    manager, store, _ = make_manager()
    token = manager.create("John Doe", "Driver")
    store.write_cell("Sessions", 2, 5, "someday")
    assert manager.validate(token) is False


def test_multiple_sessions_per_user_are_allowed():
    manager, _, clock = make_manager()
    first = manager.create("John Doe", "Driver")
    clock.advance(minutes=5)
    second = manager.create("John Doe", "Driver")
    assert first != second
    assert manager.validate(first) and manager.validate(second)


def test_expired_rows_linger_until_next_login():
    manager, store, clock = make_manager()
    manager.create("John Doe", "Driver")
    clock.advance(hours=9)

    assert len(store.get_rows("Sessions")) == 2

    fresh = manager.create("Jane Smith", "Manager")
    rows = store.get_rows("Sessions")
    assert len(rows) == 2
    assert rows[1][0] == fresh


def test_sweep_removes_only_expired_rows():
    manager, store, clock = make_manager()
    manager.create("A", "Driver")
    manager.create("B", "Driver")
    clock.advance(hours=4)
    keep = manager.create("C", "Driver")
    clock.advance(hours=5)

    assert manager.sweep() == 2
    rows = store.get_rows("Sessions")
    assert [r[0] for r in rows[1:]] == [keep]


class InterleavedSessions(SheetSessionRepository):
    """Runs `between` once, after the sweep has read the rows and before it deletes."""

    def __init__(self, store, between):
        super().__init__(store)
        self._between = between

    def list_all(self):
        sessions = super().list_all()
        between, self._between = self._between, None
        if between:
            between()
        return sessions


def test_overlapping_sweeps_keep_live_sessions():
    store = InMemorySheetStore()
    clock = FakeClock(T0)
    other, _, _ = make_manager(store=store, clock=clock)
    other.create("A", "Driver")
    other.create("B", "Driver")
    clock.advance(hours=9)

    live = []
    slow = SessionManager(
        InterleavedSessions(store, lambda: live.append(other.create("C", "Driver"))),
        secret_key="test-secret",
        clock=clock,
    )

    assert slow.sweep() == 0
    assert other.validate(live[0]) is True
    assert [r[0] for r in store.get_rows("Sessions")[1:]] == live


def test_sweep_removes_rows_with_unreadable_timestamps():
    manager, store, _ = make_manager()
    manager.create("A", "Driver")
    keep = manager.create("B", "Driver")
    store.write_cell("Sessions", 2, 5, "someday")

    assert manager.sweep() == 1
    assert [r[0] for r in store.get_rows("Sessions")[1:]] == [keep]
