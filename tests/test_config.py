from __future__ import annotations

import pytest

from scoreboard_api import config


@pytest.mark.parametrize("raw,expected", [("35", 35), (" 50 ", 50), ("-3", -3), ("abc", 20), ("--5", 20), ("", 20)])
def test_env_int(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    monkeypatch.setenv("SCOREBOARD_TEST_INT", raw)
    assert config._env_int("SCOREBOARD_TEST_INT", 20) == expected


def test_env_int_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SCOREBOARD_TEST_INT", raising=False)
    assert config._env_int("SCOREBOARD_TEST_INT", 20) == 20


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCOREBOARD_TEST_FLAG", "1")
    assert config._env_flag("SCOREBOARD_TEST_FLAG") is True
    monkeypatch.setenv("SCOREBOARD_TEST_FLAG", "yes")
    assert config._env_flag("SCOREBOARD_TEST_FLAG") is False


def test_validate_config_rejects_bad_history_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "HISTORY_LIMIT", 0)
    with pytest.raises(RuntimeError):
        config.validate_config()
