from __future__ import annotations

import re
from dataclasses import dataclass

WICKET = "W"
WIDE = "WD"
NO_BALL = "NB"

# Full-match integers only: "4", "+4", "04". "4a" and "1.5" are not runs.
# No minus sign: runs off the bat are never negative, so "-1" falls through to a dot ball.
_RUNS_RE = re.compile(r"^\+?\d+$")


class MalformedTokenError(ValueError):
    """Raised in strict mode for a token that is neither a keyword nor a run count."""
    pass


@dataclass(frozen=True)
class DeliveryOutcome:
    """
    Classification of a single delivery token.

    Attributes
    ----------
    token : str
        Normalized (stripped, upper-cased) token, used for classification.
    runs_scored : int
        Runs added to the team total.
    is_legal : bool
        Counts toward the six balls of an over.
    is_wicket : bool
        Adds one to the wickets column.
    counts_for_batter_balls : bool
        Adds one to the striker's balls faced.
    is_numeric : bool
        Token was a plain run count: runs go to the striker and odd runs rotate strike.
    raw : str
        Token as entered (stripped, case kept), as logged against the bowler.
    """

    token: str
    runs_scored: int
    is_legal: bool
    is_wicket: bool
    counts_for_batter_balls: bool
    is_numeric: bool = False
    raw: str = ""


def parse_delivery(raw: str, strict: bool = False) -> DeliveryOutcome:
    """
    Classify a delivery token.

        W  -> wicket, legal, 0 runs
        WD -> wide, 1 run, not legal, not a ball faced
        NB -> no-ball, 1 run, not legal, ball faced
        N  -> N runs off the bat
        anything else -> dot ball (or MalformedTokenError when strict)
    """
    entered = str(raw).strip()
    token = entered.upper()

    if token == WICKET:
        return DeliveryOutcome(token, 0, is_legal=True, is_wicket=True, counts_for_batter_balls=True, raw=entered)

    if token == WIDE:
        return DeliveryOutcome(token, 1, is_legal=False, is_wicket=False, counts_for_batter_balls=False, raw=entered)

    if token == NO_BALL:
        return DeliveryOutcome(token, 1, is_legal=False, is_wicket=False, counts_for_batter_balls=True, raw=entered)

    if _RUNS_RE.fullmatch(token):
        return DeliveryOutcome(
            token,
            int(token),
            is_legal=True,
            is_wicket=False,
            counts_for_batter_balls=True,
            is_numeric=True,
            raw=entered,
        )

    if strict:
        raise MalformedTokenError(f"Unrecognised delivery token: {raw!r}")

    # Loose default: unknown tokens score as a legal dot ball
    return DeliveryOutcome(token, 0, is_legal=True, is_wicket=False, counts_for_batter_balls=True, raw=entered)
