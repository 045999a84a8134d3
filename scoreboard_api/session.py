from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from scoreboard_api import config
from scoreboard_api.history import HistoryStack
from scoreboard_api.manual import ManualEdit, apply_manual_edit, edit_from_state
from scoreboard_api.models import MatchState, TeamSlot, default_state
from scoreboard_api.overs_math import format_overs
from scoreboard_api.scoring import record_delivery
from scoreboard_api.storage import MemoryStore, StateStore, StorageError, create_store

logger = logging.getLogger(__name__)

NOTHING_TO_UNDO = "Nothing to undo"


class ScoringSession:
    """
    Owns the live scoreboard: the MatchState, its undo history and the store
    it is persisted to.

    Every mutating operation snapshots first (except logo uploads), mutates,
    then saves before returning, so the display can re-render from `view()`.
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        history_limit: int = config.HISTORY_LIMIT,
        strict: bool = config.STRICT_TOKENS,
        state: Optional[MatchState] = None,
    ) -> None:
        self.store: StateStore = store if store is not None else MemoryStore()
        self.history = HistoryStack(history_limit)
        self.strict = strict
        self.state: MatchState = state if state is not None else default_state()

    @classmethod
    def restore(
        cls,
        store: StateStore,
        history_limit: int = config.HISTORY_LIMIT,
        strict: bool = config.STRICT_TOKENS,
    ) -> "ScoringSession":
        """Start from whatever the store holds; default state on first run or unreadable data."""
        try:
            saved = store.load()
        except StorageError as e:
            logger.warning("Ignoring unreadable saved scoreboard: %s", e)
            saved = None

        if saved is None:
            logger.info("No saved scoreboard, starting from default state")

        return cls(store=store, history_limit=history_limit, strict=strict, state=saved)

    # ---- operations ----

    def record_delivery(self, token: str) -> bool:
        """
        Score one delivery. A blank token is ignored and returns False.
        Raises MalformedTokenError for unknown tokens in strict mode.
        """
        if token is None or not str(token).strip():
            return False

        with self._committing():
            record_delivery(self.state, token, history=self.history, strict=self.strict)

        logger.info(
            "Delivery %r -> %d/%d (%s ov)",
            str(token).strip(),
            self.state.score.runs,
            self.state.score.wickets,
            format_overs(self.state.score.total_legal_balls),
        )
        return True

    def apply_manual_edit(self, edit: ManualEdit) -> None:
        with self._committing():
            apply_manual_edit(self.state, edit, history=self.history)
        logger.info("Manual edit applied")

    def undo(self) -> bool:
        if not self.history:
            logger.warning(NOTHING_TO_UNDO)
            return False

        with self._committing():
            self.state = self.history.pop()
        logger.info("Undo -> %d snapshot(s) left", len(self.history))
        return True

    def reset(self) -> None:
        """Back to the default scoreboard. History is cleared, so this cannot be undone."""
        with self._committing():
            self.state = default_state()
            self.history.clear()
        logger.info("Scoreboard reset")

    def set_logo(self, team: TeamSlot, logo: str) -> None:
        with self._committing():
            self.state.team(team).logo = logo or ""

    # ---- read side ----

    def form_fields(self) -> ManualEdit:
        return edit_from_state(self.state)

    def view(self) -> Dict[str, Any]:
        d = self.state.to_dict()
        d["score"]["overs_display"] = format_overs(self.state.score.total_legal_balls)
        d["score"]["crr_display"] = f"{self.state.score.crr:.2f}"
        d["history_size"] = len(self.history)
        return d

    @contextmanager
    def _committing(self) -> Iterator[None]:
        """
        Run a mutation and persist the result. If saving fails, the live
        state and history go back to what they were and StorageError propagates,
        so the operation either fully happens or not at all.
        """
        before_state = copy.deepcopy(self.state)
        before_history = self.history.entries()
        try:
            yield
            self.store.save(self.state)
        except StorageError:
            self.state = before_state
            self.history.replace(before_history)
            logger.error("Saving scoreboard failed, change rolled back")
            raise


def create_session() -> ScoringSession:
    store = create_store(config.STORAGE_BACKEND, config.STORAGE_DIR, config.STORAGE_KEY)
    return ScoringSession.restore(store, history_limit=config.HISTORY_LIMIT, strict=config.STRICT_TOKENS)
