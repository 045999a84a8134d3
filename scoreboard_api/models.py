from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

# Bowler's recent-delivery strip shown on the scoreboard
MAX_RECENT_BALLS = 8

TeamSlot = Literal["teamA", "teamB"]


# -----------------------------
# Match metadata
# -----------------------------
@dataclass
class MatchInfo:
    title: str = ""
    toss: str = ""


@dataclass
class TeamInfo:
    code: str
    logo: str = ""  # opaque image reference (data URL etc.), empty when not uploaded


# -----------------------------
# Score
# -----------------------------
@dataclass
class Score:
    """
    Team score.

    `overs` is a DISPLAY value in cricket notation (1 over 3 balls -> 1.3),
    derived from `total_legal_balls`. Never do arithmetic on it.
    """
    runs: int = 0
    wickets: int = 0
    overs: float = 0.0
    total_legal_balls: int = 0
    crr: float = 0.0


# -----------------------------
# Players
# -----------------------------
@dataclass
class Batter:
    name: str
    runs: int = 0
    balls: int = 0
    active: bool = False


@dataclass
class Bowler:
    name: str = "Bowler"
    balls: List[str] = field(default_factory=list)

    def log_ball(self, token: str) -> None:
        self.balls.append(token)
        if len(self.balls) > MAX_RECENT_BALLS:
            del self.balls[: len(self.balls) - MAX_RECENT_BALLS]


# -----------------------------
# Aggregate
# -----------------------------
@dataclass
class MatchState:
    """
    Everything the scoreboard shows. This is the unit that gets snapshotted
    for undo and written to storage.

    `batsmen` always has exactly two slots and exactly one of them is active.
    """
    team_a: TeamInfo
    team_b: TeamInfo
    batsmen: List[Batter]
    match: MatchInfo = field(default_factory=MatchInfo)
    score: Score = field(default_factory=Score)
    bowler: Bowler = field(default_factory=Bowler)

    # ---- strike helpers ----

    def striker_index(self) -> int:
        for idx, b in enumerate(self.batsmen):
            if b.active:
                return idx
        return 0

    def striker(self) -> Batter:
        return self.batsmen[self.striker_index()]

    def set_striker(self, index: int) -> None:
        if index not in (0, 1):
            raise ValueError(f"Striker index must be 0 or 1, got {index}")
        for idx, b in enumerate(self.batsmen):
            b.active = idx == index

    def swap_strike(self) -> None:
        for b in self.batsmen:
            b.active = not b.active

    def team(self, slot: TeamSlot) -> TeamInfo:
        if slot == "teamA":
            return self.team_a
        if slot == "teamB":
            return self.team_b
        raise ValueError(f"Unknown team slot: {slot}")

    # ---- serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match": {"title": self.match.title, "toss": self.match.toss},
            "teamA": {"code": self.team_a.code, "logo": self.team_a.logo},
            "teamB": {"code": self.team_b.code, "logo": self.team_b.logo},
            "score": {
                "runs": self.score.runs,
                "wickets": self.score.wickets,
                "overs": self.score.overs,
                "total_legal_balls": self.score.total_legal_balls,
                "crr": self.score.crr,
            },
            "batsmen": [
                {"name": b.name, "runs": b.runs, "balls": b.balls, "active": b.active}
                for b in self.batsmen
            ],
            "bowler": {"name": self.bowler.name, "balls": list(self.bowler.balls)},
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchState":
        """
        Rebuild a MatchState from a stored document.

        Missing sections fall back to the default state so documents saved by
        older versions (no `match`, no `total_legal_balls`) still load.
        """
        base = default_state()

        m = d.get("match") or {}
        ta = d.get("teamA") or {}
        tb = d.get("teamB") or {}
        sc = d.get("score") or {}
        bw = d.get("bowler") or {}
        raw_batsmen = list(d.get("batsmen") or [])

        batsmen: List[Batter] = []
        for idx, fallback in enumerate(base.batsmen):
            raw = raw_batsmen[idx] if idx < len(raw_batsmen) else {}
            batsmen.append(
                Batter(
                    name=str(raw.get("name", fallback.name)),
                    runs=_as_int(raw.get("runs"), 0),
                    balls=_as_int(raw.get("balls"), 0),
                    active=bool(raw.get("active", fallback.active)),
                )
            )

        state = cls(
            match=MatchInfo(title=str(m.get("title", "")), toss=str(m.get("toss", ""))),
            team_a=TeamInfo(code=str(ta.get("code", base.team_a.code)), logo=str(ta.get("logo") or "")),
            team_b=TeamInfo(code=str(tb.get("code", base.team_b.code)), logo=str(tb.get("logo") or "")),
            score=Score(
                runs=_as_int(sc.get("runs"), 0),
                wickets=_as_int(sc.get("wickets"), 0),
                overs=_as_float(sc.get("overs"), 0.0),
                total_legal_balls=_as_int(sc.get("total_legal_balls"), 0),
                crr=_as_float(sc.get("crr"), 0.0),
            ),
            batsmen=batsmen,
            bowler=Bowler(
                name=str(bw.get("name", base.bowler.name)),
                balls=[str(x) for x in (bw.get("balls") or [])][-MAX_RECENT_BALLS:],
            ),
        )

        # Repair the one-striker invariant for hand-edited documents
        if sum(1 for b in state.batsmen if b.active) != 1:
            state.set_striker(0)

        return state


def default_state() -> MatchState:
    """Fresh scoreboard: zeroed score, placeholder names, Batter 1 on strike."""
    return MatchState(
        team_a=TeamInfo(code="BAN"),
        team_b=TeamInfo(code="IND"),
        batsmen=[
            Batter(name="Batter 1", active=True),
            Batter(name="Batter 2", active=False),
        ],
    )


def _as_int(x: Optional[object], default: int) -> int:
    try:
        if x is None:
            return default
        return int(x)
    except (TypeError, ValueError):
        return default


def _as_float(x: Optional[object], default: float) -> float:
    try:
        if x is None:
            return default
        return float(x)
    except (TypeError, ValueError):
        return default
