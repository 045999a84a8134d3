# main.py (live scoreboard)
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from scoreboard_api.config import LOG_LEVEL, validate_config
from scoreboard_api.delivery import MalformedTokenError
from scoreboard_api.manual import ManualEdit
from scoreboard_api.session import NOTHING_TO_UNDO, ScoringSession, create_session
from scoreboard_api.storage import StorageError

logger = logging.getLogger(__name__)

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Cricket Scoreboard API",
    version="0.1.0",
    description="Live two-team cricket scoreboard: ball-by-ball scoring, manual overrides, undo and reset",
)


@app.on_event("startup")
def on_startup():
    validate_config()
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.session = create_session()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
def _session() -> ScoringSession:
    session = getattr(app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Scoreboard session not initialised")
    return session


def _persist_failed(e: StorageError) -> HTTPException:
    logger.error("Persisting scoreboard failed: %s", e)
    return HTTPException(status_code=500, detail=f"Unable to save scoreboard: {str(e)}")


# -----------------------
# Read side (display + form pre-fill)
# -----------------------
@app.get("/api/state")
def get_state():
    return _session().view()


@app.get("/api/state/form")
def get_form_fields():
    return ManualEditIn.from_edit(_session().form_fields()).model_dump()


# -----------------------
# Ball-by-ball scoring
# -----------------------
class DeliveryRequest(BaseModel):
    token: str = Field(..., description='Delivery token: runs ("0"-"6"), "W", "WD" or "NB"')


@app.post("/api/deliveries")
def post_delivery(req: DeliveryRequest):
    session = _session()
    try:
        applied = session.record_delivery(req.token)
    except MalformedTokenError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise _persist_failed(e)

    return {"applied": applied, "state": session.view()}


# -----------------------
# Manual overrides
# -----------------------
# null is accepted and read as 0, like any other unparseable value
NumberLike = Optional[Union[int, float, str]]


class ManualEditIn(BaseModel):
    team_a_code: str = ""
    team_b_code: str = ""
    title: str = ""
    toss: str = ""

    runs: NumberLike = 0
    wickets: NumberLike = 0
    overs: NumberLike = Field(0, description="Cricket notation as typed, e.g. 12.4")

    batter1_name: str = ""
    batter1_runs: NumberLike = 0
    batter1_balls: NumberLike = 0
    batter2_name: str = ""
    batter2_runs: NumberLike = 0
    batter2_balls: NumberLike = 0
    striker: Literal[0, 1] = Field(0, description="0 = batter 1 on strike, 1 = batter 2")

    bowler_name: str = ""

    def to_edit(self) -> ManualEdit:
        return ManualEdit(**self.model_dump())

    @classmethod
    def from_edit(cls, edit: ManualEdit) -> "ManualEditIn":
        return cls(**vars(edit))


@app.post("/api/manual")
def post_manual_edit(req: ManualEditIn):
    session = _session()
    try:
        session.apply_manual_edit(req.to_edit())
    except StorageError as e:
        raise _persist_failed(e)

    return {"applied": True, "state": session.view()}


# -----------------------
# Undo / reset
# -----------------------
@app.post("/api/undo")
def post_undo():
    session = _session()
    try:
        undone = session.undo()
    except StorageError as e:
        raise _persist_failed(e)

    resp: Dict[str, Any] = {"undone": undone, "state": session.view()}
    if not undone:
        resp["notice"] = NOTHING_TO_UNDO
    return resp


@app.post("/api/reset")
def post_reset():
    session = _session()
    try:
        session.reset()
    except StorageError as e:
        raise _persist_failed(e)

    return {"reset": True, "state": session.view()}


# -----------------------
# Team logos (uploaded image already resolved to a reference by the client)
# -----------------------
class LogoRequest(BaseModel):
    logo: str = Field("", description="Opaque image reference, e.g. a data: URL. Empty clears it.")


@app.put("/api/teams/{team}/logo")
def put_team_logo(team: str, req: LogoRequest):
    if team not in ("teamA", "teamB"):
        raise HTTPException(status_code=404, detail=f"Unknown team: {team}")

    session = _session()
    try:
        session.set_logo(team, req.logo)
    except StorageError as e:
        raise _persist_failed(e)

    return {"team": team, "state": session.view()}
