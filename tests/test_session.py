from __future__ import annotations

import pytest

from scoreboard_api.delivery import MalformedTokenError
from scoreboard_api.manual import ManualEdit
from scoreboard_api.models import MatchState, default_state
from scoreboard_api.session import ScoringSession
from scoreboard_api.storage import MemoryStore, StorageError


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def session(store: MemoryStore) -> ScoringSession:
    return ScoringSession(store=store, history_limit=5, strict=False)


def test_blank_token_is_a_no_op(session: ScoringSession, store: MemoryStore) -> None:
    assert session.record_delivery("   ") is False
    assert session.record_delivery("") is False
    assert len(session.history) == 0
    assert store.load() is None
    assert session.state == default_state()


def test_delivery_is_persisted(session: ScoringSession, store: MemoryStore) -> None:
    assert session.record_delivery("6") is True
    assert store.load() == session.state
    assert store.load().score.runs == 6


def test_undo_restores_pre_delivery_state(session: ScoringSession, store: MemoryStore) -> None:
    session.record_delivery("1")
    before = store.load()

    session.record_delivery("4")
    assert session.undo() is True
    assert session.state == before
    assert store.load() == before


def test_undo_with_empty_history(session: ScoringSession) -> None:
    assert session.undo() is False
    assert session.state == default_state()


def test_history_bound_respected(session: ScoringSession) -> None:
    for _ in range(8):
        session.record_delivery("1")
    assert len(session.history) == 5

    undone = 0
    while session.undo():
        undone += 1
    assert undone == 5
    assert session.state.score.runs == 3


def test_reset_clears_everything(session: ScoringSession, store: MemoryStore) -> None:
    for t in ["4", "W", "1"]:
        session.record_delivery(t)
    session.set_logo("teamA", "data:image/png;base64,AAAA")

    session.reset()
    assert session.state == default_state()
    assert len(session.history) == 0
    assert store.load() == default_state()
    assert session.undo() is False


def test_manual_edit_is_undoable(session: ScoringSession) -> None:
    session.apply_manual_edit(ManualEdit(team_a_code="AUS", team_b_code="ENG", runs="50", overs="5.2", batter1_name="A", batter2_name="B", bowler_name="C"))
    assert session.state.score.total_legal_balls == 32

    assert session.undo() is True
    assert session.state == default_state()


def test_set_logo_skips_history(session: ScoringSession, store: MemoryStore) -> None:
    session.set_logo("teamB", "data:image/png;base64,BBBB")
    assert len(session.history) == 0
    assert store.load().team_b.logo == "data:image/png;base64,BBBB"

    with pytest.raises(ValueError):
        session.set_logo("teamC", "x")


def test_strict_session_rejects_unknown_token(store: MemoryStore) -> None:
    session = ScoringSession(store=store, strict=True)
    with pytest.raises(MalformedTokenError):
        session.record_delivery("4a")
    assert len(session.history) == 0
    assert session.state == default_state()


def test_restore_from_saved_state(store: MemoryStore) -> None:
    first = ScoringSession(store=store)
    first.record_delivery("4")

    second = ScoringSession.restore(store)
    assert second.state == first.state
    assert len(second.history) == 0


def test_restore_ignores_corrupt_document(store: MemoryStore) -> None:
    store._data[store.key] = "{broken"
    session = ScoringSession.restore(store)
    assert session.state == default_state()


def test_view_and_form_fields(session: ScoringSession) -> None:
    for t in ["2"] * 6 + ["0"] * 3:
        session.record_delivery(t)

    view = session.view()
    assert view["score"]["overs_display"] == "1.3"
    assert view["score"]["crr_display"] == "8.00"
    assert view["history_size"] == 5

    form = session.form_fields()
    assert form.overs == "1.3"
    assert form.runs == 12
    assert form.striker == session.state.striker_index()


class BrokenStore(MemoryStore):
    """Store whose writes start failing once `fail` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def save(self, state: MatchState) -> None:
        if self.fail:
            raise StorageError("disk full")
        super().save(state)


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


def test_failed_save_rolls_back_delivery(broken_store: BrokenStore) -> None:
    session = ScoringSession(store=broken_store)
    broken_store.fail = True

    with pytest.raises(StorageError):
        session.record_delivery("4")

    assert session.state == default_state()
    assert len(session.history) == 0

    # retrying once storage recovers scores the ball exactly once
    broken_store.fail = False
    session.record_delivery("4")
    assert session.state.score.runs == 4
    assert len(session.history) == 1


def test_failed_save_rolls_back_manual_edit(broken_store: BrokenStore) -> None:
    session = ScoringSession(store=broken_store)
    broken_store.fail = True

    with pytest.raises(StorageError):
        session.apply_manual_edit(ManualEdit(runs="50", overs="5.2"))

    assert session.state == default_state()
    assert len(session.history) == 0


def test_failed_save_keeps_undo_history(broken_store: BrokenStore) -> None:
    session = ScoringSession(store=broken_store)
    session.record_delivery("1")
    session.record_delivery("6")
    before = session.view()
    broken_store.fail = True

    with pytest.raises(StorageError):
        session.undo()
    assert session.view() == before
    assert len(session.history) == 2

    with pytest.raises(StorageError):
        session.reset()
    assert session.view() == before

    with pytest.raises(StorageError):
        session.set_logo("teamA", "data:image/png;base64,AAAA")
    assert session.state.team_a.logo == ""

    broken_store.fail = False
    assert session.undo() is True
    assert session.state.score.runs == 1
