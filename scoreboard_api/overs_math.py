# scoreboard_api/overs_math.py
from __future__ import annotations

import math
from typing import Tuple, Union

BALLS_PER_OVER = 6
OversLike = Union[str, int, float]


def split_balls(balls: int) -> Tuple[int, int]:
    """
    balls -> (completed overs, balls into the current over)
    Example: 9 -> (1, 3)
    """
    if balls < 0:
        raise ValueError("Balls cannot be negative")
    return balls // BALLS_PER_OVER, balls % BALLS_PER_OVER


def overs_display(balls: int) -> float:
    """
    Cricket overs notation as a number: X.Y where X is complete overs and
    Y is balls in the current over (0-5).

    NOT decimal overs: 9 balls -> 1.3 (not 1.5).
    """
    complete_overs, balls_in_over = split_balls(balls)
    return float(f"{complete_overs}.{balls_in_over}")


def format_overs(balls: int) -> str:
    complete_overs, balls_in_over = split_balls(balls)
    return f"{complete_overs}.{balls_in_over}"


def balls_to_overs_float(balls: int) -> float:
    if balls <= 0:
        return 0.0
    return balls / float(BALLS_PER_OVER)


def run_rate(runs: int, balls: int) -> float:
    """Runs per TRUE over (true division, unlike the overs display)."""
    overs = balls_to_overs_float(balls)
    if overs == 0.0:
        return 0.0
    return runs / overs


def typed_overs_to_balls(overs: OversLike) -> int:
    """
    Best-effort decomposition of a hand-typed overs value back into balls:

        floor(overs) * 6 + round(fraction * 10)

    "2.4" -> 16. Unlike strict overs notation the ball digit is not
    range-checked ("1.7" -> 13), since typed values are reconciled, not validated.
    Halves round up ("0.25" -> 3).
    """
    value = float(overs)
    whole = math.floor(value)
    fraction = value - whole
    return int(whole) * BALLS_PER_OVER + int(math.floor(fraction * 10 + 0.5))
