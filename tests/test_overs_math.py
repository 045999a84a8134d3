from __future__ import annotations

import pytest

from scoreboard_api.overs_math import format_overs, overs_display, run_rate, split_balls, typed_overs_to_balls


def test_overs_use_cricket_notation() -> None:
    assert split_balls(9) == (1, 3)
    assert overs_display(9) == 1.3
    assert format_overs(9) == "1.3"
    assert format_overs(12) == "2.0"
    assert overs_display(0) == 0.0


def test_run_rate_uses_true_overs() -> None:
    assert run_rate(12, 9) == pytest.approx(8.0)
    assert run_rate(5, 0) == 0.0


def test_negative_balls_rejected() -> None:
    with pytest.raises(ValueError):
        split_balls(-1)


@pytest.mark.parametrize(
    "typed,balls",
    [("2.4", 16), (1.3, 9), ("0", 0), (5, 30), (0.25, 3), ("1.7", 13)],
)
def test_typed_overs_to_balls(typed, balls: int) -> None:
    assert typed_overs_to_balls(typed) == balls
