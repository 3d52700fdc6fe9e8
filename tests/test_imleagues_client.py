"""Tests for the IMLeagues endpoint definitions and client."""

import json

from iml_proxy.api.imleagues_client import (
    SAVE_SCORE_PATH,
    build_login_payload,
    build_score_payload,
    games_path,
    team_members_path,
)
from tests.conftest import BASE_URL, make_response, outbound_calls


class TestPaths:

    def test_games_path_encodes_components(self):
        path = games_path("net 42", "2024-03-01T00:00:00Z", "2024-03-08T00:00:00Z")

        assert path == (
            "networks/net%2042/games"
            "?start=2024-03-01T00%3A00%3A00Z&end=2024-03-08T00%3A00%3A00Z"
        )

    def test_team_members_path(self):
        assert team_members_path("12/3") == "teams/12%2F3/members"


class TestPayloads:

    def test_login_payload_includes_credentials(self):
        payload = build_login_payload("a@b.edu", "pw")

        assert payload["email"] == "a@b.edu"
        assert payload["password"] == "pw"
        assert payload["schoolId"] == ""

    def test_score_payload(self):
        payload = build_score_payload(17, 2, 21, 14, "Rain delay")

        assert payload == {
            "gameResult": 1,
            "periodDetails": [],
            "team1Score": "21",
            "team2Score": "14",
            "comments": "Rain delay",
            "gameId": 17,
            "gameType": 2,
        }

    def test_score_payload_defaults(self):
        payload = build_score_payload(17, 2)

        assert payload["team1Score"] == ""
        assert payload["team2Score"] == ""
        assert payload["comments"] == ""

    def test_zero_score_is_kept(self):
        assert build_score_payload(17, 2, 0, 3)["team1Score"] == "0"

    def test_scores_are_written_like_json(self):
        payload = build_score_payload(17, 2, 21.0, False)

        assert payload["team1Score"] == "21"
        assert payload["team2Score"] == "false"

    def test_fractional_score_is_kept(self):
        assert build_score_payload(17, 2, 2.5)["team1Score"] == "2.5"

    def test_comments_pass_through(self):
        assert build_score_payload(17, 2, comments=7)["comments"] == 7


class TestSaveScore:
    """Tests for the lazy login before a score submission."""

    def test_logs_in_once_before_saving(self, iml_env, api_client, http):
        http.post.return_value = make_response(200, {"jwtTokenForSPA": "T1"})
        http.request.return_value = make_response(200, {"success": True})

        result = api_client.save_score(17, 2, 21, 14)

        assert result == {"success": True}
        assert outbound_calls(http) == ["post", "request"]
        args, kwargs = http.request.call_args
        assert args == ("POST", BASE_URL + SAVE_SCORE_PATH)
        assert kwargs["headers"]["Authorization"] == "Bearer T1"
        assert json.loads(kwargs["data"])["gameId"] == 17

    def test_skips_login_with_existing_session(self, iml_env, api_client, session_manager, http):
        http.post.return_value = make_response(200, {"jwtTokenForSPA": "T1"})
        session_manager.login()
        http.reset_mock()
        http.request.return_value = make_response(200, {"success": True})

        api_client.save_score(17, 2)

        assert outbound_calls(http) == ["request"]

    def test_reads_do_not_log_in(self, iml_env, api_client, http):
        http.request.return_value = make_response(200, [])

        api_client.get_team_members("5")

        http.post.assert_not_called()
