import logging
import math
import os
from typing import Any, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from iml_proxy import __version__
from iml_proxy.config import get_log_level, get_port, get_public_dir, must_env
from iml_proxy.services import api_client

logging.basicConfig(level=get_log_level())

app = FastAPI(title="IMLeagues Proxy", version=__version__)


# --- Pydantic Models ---
class ScoreSubmission(BaseModel):
    gameType: Optional[Any] = None
    team1Score: Optional[Any] = None
    team2Score: Optional[Any] = None
    comments: Optional[Any] = None


class SessionStatus(BaseModel):
    authenticated: bool
    loggedInAt: Optional[float] = None


class HealthStatus(BaseModel):
    ok: bool
    data: SessionStatus


def _fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def _server_error(route: str, e: Exception) -> JSONResponse:
    logging.error(f"{route} failed: {e}")
    return _fail(500, str(e))


def _parse_game_id(raw: str) -> Optional[Union[int, float]]:
    """
    Accepts any finite number, keeping integral values as int.
    0x/0o/0b prefixes are read as integers; digit separators are refused.
    """
    raw = raw.strip()
    if "_" in raw:
        return None
    try:
        if raw[:2].lower() in ("0x", "0o", "0b"):
            return int(raw, 0)
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logging.warning(f"Rejected request to {request.url.path}: {details}")
    return _fail(400, f"Invalid request: {details}")


@app.get("/health/status", response_model=HealthStatus)
def get_health_status():
    """Reports whether an IMLeagues session is currently cached."""
    session = api_client.session_manager.session
    return {
        "ok": True,
        "data": {
            "authenticated": session is not None,
            "loggedInAt": session.logged_in_at if session else None,
        },
    }


@app.post("/api/iml/login")
def login():
    """Forces a fresh IMLeagues login. Call this first."""
    try:
        session = api_client.login()
    except Exception as e:
        return _server_error("login", e)
    return {"ok": True, "jwtTokenIndexForSPA": session.token_index}


@app.get("/api/iml/games")
def list_games(start: Optional[str] = None, end: Optional[str] = None):
    """Games of the configured network between two ISO datetimes."""
    try:
        network_id = must_env("IML_NETWORK_ID")
        if not start or not end:
            return _fail(400, "Missing start/end query params (ISO datetime strings).")
        data = api_client.list_games(network_id, start, end)
    except Exception as e:
        return _server_error("list_games", e)
    return {"ok": True, "data": data}


@app.get("/api/iml/teams/{team_id}/members")
def get_team_members(team_id: str):
    try:
        data = api_client.get_team_members(team_id)
    except Exception as e:
        return _server_error("get_team_members", e)
    return {"ok": True, "data": data}


@app.post("/api/iml/games/{game_id}/savescore")
def save_score(game_id: str, submission: Optional[ScoreSubmission] = None):
    """
    Saves the final score of a game (admin).
    Inputs are checked before anything is sent, including the lazy login.
    """
    try:
        parsed_game_id = _parse_game_id(game_id)
        if parsed_game_id is None:
            return _fail(400, "Invalid gameId")
        submission = submission or ScoreSubmission()
        if submission.gameType is None:
            return _fail(400, "Missing gameType (number)")

        data = api_client.save_score(
            parsed_game_id,
            submission.gameType,
            team1_score=submission.team1Score,
            team2_score=submission.team2Score,
            comments=submission.comments,
        )
    except Exception as e:
        return _server_error("save_score", e)
    return {"ok": True, "data": data}


# Mounted last so the API routes above take precedence.
if os.path.isdir(get_public_dir()):
    app.mount("/", StaticFiles(directory=get_public_dir(), html=True), name="public")


if __name__ == "__main__":
    import uvicorn
    port = get_port()
    logging.info(f"Server running: http://localhost:{port}")
    uvicorn.run("iml_proxy.main:app", host="0.0.0.0", port=port)
