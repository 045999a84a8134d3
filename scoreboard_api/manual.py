# scoreboard_api/manual.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from scoreboard_api.history import HistoryStack
from scoreboard_api.models import MatchState
from scoreboard_api.overs_math import format_overs, typed_overs_to_balls
from scoreboard_api.scoring import recompute

FieldValue = Union[str, int, float, None]


@dataclass
class ManualEdit:
    """
    One full set of values read off the operator's edit form.

    Numeric fields may arrive as raw strings; anything that does not parse
    is taken as 0.
    """
    team_a_code: str = ""
    team_b_code: str = ""
    title: str = ""
    toss: str = ""

    runs: FieldValue = 0
    wickets: FieldValue = 0
    overs: FieldValue = 0

    batter1_name: str = ""
    batter1_runs: FieldValue = 0
    batter1_balls: FieldValue = 0
    batter2_name: str = ""
    batter2_runs: FieldValue = 0
    batter2_balls: FieldValue = 0
    striker: int = 0  # 0 -> batter 1 on strike, 1 -> batter 2

    bowler_name: str = ""


def _safe_int(x: object, default: int = 0) -> int:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default
        return int(float(sx))
    except (TypeError, ValueError, OverflowError):
        return default


def _safe_float(x: object, default: float = 0.0) -> float:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default
        value = float(sx)
        return value if math.isfinite(value) else default
    except (TypeError, ValueError):
        return default


def apply_manual_edit(
    state: MatchState,
    edit: ManualEdit,
    history: Optional[HistoryStack] = None,
) -> MatchState:
    """
    Overwrite the scoreboard with hand-entered values.

    Fields are written verbatim, except overs: the typed value is decomposed
    back into a legal-ball count (lossy) and only replaces total_legal_balls
    when it disagrees. Derived stats are then recomputed, which includes the
    end-of-over strike swap when the ball count sits on an over boundary.

    Team logos and the bowler's recent-ball strip are left alone.
    """
    if history is not None:
        history.push(state)

    state.team_a.code = str(edit.team_a_code)
    state.team_b.code = str(edit.team_b_code)
    state.match.title = str(edit.title)
    state.match.toss = str(edit.toss)

    state.score.runs = _safe_int(edit.runs)
    state.score.wickets = _safe_int(edit.wickets)

    b1, b2 = state.batsmen
    b1.name = str(edit.batter1_name)
    b1.runs = _safe_int(edit.batter1_runs)
    b1.balls = _safe_int(edit.batter1_balls)
    b2.name = str(edit.batter2_name)
    b2.runs = _safe_int(edit.batter2_runs)
    b2.balls = _safe_int(edit.batter2_balls)
    state.set_striker(1 if _safe_int(edit.striker) == 1 else 0)

    state.bowler.name = str(edit.bowler_name)

    implied_balls = max(0, typed_overs_to_balls(_safe_float(edit.overs)))
    if implied_balls != state.score.total_legal_balls:
        state.score.total_legal_balls = implied_balls

    return recompute(state)


def edit_from_state(state: MatchState) -> ManualEdit:
    """Current values, as an edit form would be pre-filled with them."""
    b1, b2 = state.batsmen
    return ManualEdit(
        team_a_code=state.team_a.code,
        team_b_code=state.team_b.code,
        title=state.match.title,
        toss=state.match.toss,
        runs=state.score.runs,
        wickets=state.score.wickets,
        overs=format_overs(state.score.total_legal_balls),
        batter1_name=b1.name,
        batter1_runs=b1.runs,
        batter1_balls=b1.balls,
        batter2_name=b2.name,
        batter2_runs=b2.runs,
        batter2_balls=b2.balls,
        striker=state.striker_index(),
        bowler_name=state.bowler.name,
    )
