"""
Endpoint paths and payload shapes of the IMLeagues API.

Several values here are not documented by IMLeagues and were worked out from
their public help pages (the gameResult code, the bearer auth scheme). They
are kept in this module so they can be corrected without touching the
session or forwarding code.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote

LOGIN_PATH = "admin/account/login"
SAVE_SCORE_PATH = "v3/me/games/savescore"

# Client context sent with every login. Constants of this deployment.
LOGIN_CONTEXT = {
    "forAdminSite": True,
    "forApp": False,
    "isSSO": False,
    "isHttps": True,
    "isMobileDevice": False,
    "isElectron": False,
    "clientType": 0,
    "timezone": -300,  # minutes, Indiana standard time (UTC-5)
}

# Assumed to mean "played/complete".
GAME_RESULT_PLAYED = 1


def _encode(value: Any) -> str:
    return quote(str(value), safe="")


def build_login_payload(email: str, password: str, school_id: str = "") -> Dict[str, Any]:
    return {
        "schoolId": school_id,
        "email": email,
        "password": password,
        **LOGIN_CONTEXT,
    }


def games_path(network_id: str, start: str, end: str) -> str:
    return f"networks/{_encode(network_id)}/games?start={_encode(start)}&end={_encode(end)}"


def team_members_path(team_id: str) -> str:
    return f"teams/{_encode(team_id)}/members"


def _score_text(score: Any) -> str:
    """Scores are sent as text, written the way a JSON client would write them."""
    if score is None:
        return ""
    if isinstance(score, bool):
        return "true" if score else "false"
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def build_score_payload(
    game_id: Any,
    game_type: Any,
    team1_score: Any = None,
    team2_score: Any = None,
    comments: Optional[str] = None,
) -> Dict[str, Any]:
    # periodDetails stays empty until a sport needs per-period scores.
    return {
        "gameResult": GAME_RESULT_PLAYED,
        "periodDetails": [],
        "team1Score": _score_text(team1_score),
        "team2Score": _score_text(team2_score),
        "comments": comments if comments is not None else "",
        "gameId": game_id,
        "gameType": game_type,
    }


class IMLeaguesClient:
    """The IMLeagues operations this proxy exposes, sent through a ProxyForwarder."""

    def __init__(self, forwarder):
        self.forwarder = forwarder

    @property
    def session_manager(self):
        return self.forwarder.session_manager

    def login(self):
        return self.session_manager.login()

    def list_games(self, network_id: str, start: str, end: str) -> Any:
        return self.forwarder.forward(games_path(network_id, start, end))

    def get_team_members(self, team_id: str) -> Any:
        return self.forwarder.forward(team_members_path(team_id))

    def save_score(
        self,
        game_id: Any,
        game_type: Any,
        team1_score: Any = None,
        team2_score: Any = None,
        comments: Optional[str] = None,
    ) -> Any:
        """Submits a final score. Admin only, so a session is established first if needed."""
        self.session_manager.ensure_session()
        payload = build_score_payload(game_id, game_type, team1_score, team2_score, comments)
        return self.forwarder.forward(SAVE_SCORE_PATH, method="POST", body=payload)
