# scoreboard_api/scoring.py
from __future__ import annotations

from typing import Optional

from scoreboard_api.delivery import DeliveryOutcome, parse_delivery
from scoreboard_api.history import HistoryStack
from scoreboard_api.models import MatchState
from scoreboard_api.overs_math import overs_display, run_rate, split_balls


def recompute(state: MatchState) -> MatchState:
    """
    Derive overs + run rate from total_legal_balls and runs.

    Also applies end-of-over strike rotation: whenever the ball count sits on
    a completed over, strike swaps. This is independent of the odd-run swap
    in record_delivery, so an odd score off the sixth ball swaps twice
    (striker keeps strike for the next over).
    """
    score = state.score
    _, balls_in_over = split_balls(score.total_legal_balls)

    score.overs = overs_display(score.total_legal_balls)
    score.crr = run_rate(score.runs, score.total_legal_balls)

    if balls_in_over == 0 and score.total_legal_balls > 0:
        state.swap_strike()

    return state


def apply_outcome(state: MatchState, outcome: DeliveryOutcome) -> MatchState:
    """Apply an already-classified delivery to the state in place."""
    score = state.score

    # 1) Team total
    score.runs += outcome.runs_scored
    if outcome.is_wicket:
        score.wickets += 1  # no ceiling at 10

    # 2) Legal balls (drives overs)
    if outcome.is_legal:
        score.total_legal_balls += 1

    # 3) Striker stats; only plain run counts are credited to the bat
    striker = state.striker()
    if outcome.counts_for_batter_balls:
        striker.balls += 1
    if outcome.is_numeric:
        striker.runs += outcome.runs_scored

    # 4) Bowler's recent strip
    state.bowler.log_ball(outcome.raw or outcome.token)

    # 5) Batters crossed
    if outcome.is_numeric and outcome.runs_scored % 2 == 1:
        state.swap_strike()

    # 6) Overs / crr / end-of-over rotation
    return recompute(state)


def record_delivery(
    state: MatchState,
    token: str,
    history: Optional[HistoryStack] = None,
    strict: bool = False,
) -> MatchState:
    """
    Score a single delivery token against the state in place.

    If `history` is given, the pre-delivery state is snapshotted first so the
    delivery can be undone exactly. In strict mode the token is parsed before
    the snapshot, so a rejected token leaves history untouched.
    Returns the same state instance (for chaining).
    """
    outcome = parse_delivery(token, strict=strict)

    if history is not None:
        history.push(state)

    return apply_outcome(state, outcome)
