import streamlit as st
import requests
import os
from datetime import date, datetime, time, timedelta

# --- Page Configuration ---
st.set_page_config(
    page_title="IMLeagues Score Desk",
    page_icon="🏆",
    layout="wide"
)

# --- Backend API Configuration ---
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")


def call_api(method: str, path: str, **kwargs):
    """Calls the local proxy and returns its JSON envelope, or an error envelope."""
    try:
        response = requests.request(method, f"{API_BASE_URL}{path}", **kwargs)
    except requests.exceptions.RequestException as e:
        return {"ok": False, "error": f"Error connecting to the backend: {e}"}
    try:
        return response.json()
    except ValueError:
        return {"ok": False, "error": f"Unexpected response from the backend ({response.status_code})."}


def show_result(result, success_message: str = None):
    if not result.get("ok"):
        st.error(result.get("error", "Unknown error"))
        return False
    if success_message:
        st.success(success_message)
    return True


def login_section():
    st.sidebar.header("Session")
    if st.sidebar.button("Log in to IMLeagues"):
        result = call_api("POST", "/api/iml/login")
        if result.get("ok"):
            st.sidebar.success("Logged in.")
        else:
            st.sidebar.error(result.get("error", "Login failed"))

    status = call_api("GET", "/health/status")
    session = status.get("data") or {}
    if session.get("authenticated"):
        logged_in_at = datetime.fromtimestamp(session["loggedInAt"])
        st.sidebar.caption(f"Session cached since {logged_in_at:%Y-%m-%d %H:%M}")
    else:
        st.sidebar.caption("No session cached yet.")


def games_section():
    st.subheader("Games")
    col1, col2 = st.columns(2)
    start_day = col1.date_input("From", value=date.today())
    end_day = col2.date_input("To", value=date.today() + timedelta(days=7))
    if st.button("Find games"):
        params = {
            "start": datetime.combine(start_day, time.min).isoformat(),
            "end": datetime.combine(end_day, time.max).isoformat(),
        }
        result = call_api("GET", "/api/iml/games", params=params)
        if show_result(result):
            st.json(result["data"])


def roster_section():
    st.subheader("Team roster")
    team_id = st.text_input("Team ID")
    if st.button("Show roster") and team_id:
        result = call_api("GET", f"/api/iml/teams/{team_id}/members")
        if show_result(result):
            st.json(result["data"])


def score_section():
    st.subheader("Submit score")
    with st.form("save_score"):
        game_id = st.text_input("Game ID")
        game_type = st.number_input("Game type", min_value=0, step=1, value=0)
        col1, col2 = st.columns(2)
        team1_score = col1.text_input("Team 1 score")
        team2_score = col2.text_input("Team 2 score")
        comments = st.text_area("Comments")
        submitted = st.form_submit_button("Save score")

    if submitted:
        payload = {
            "gameType": int(game_type),
            "team1Score": team1_score,
            "team2Score": team2_score,
            "comments": comments,
        }
        result = call_api("POST", f"/api/iml/games/{game_id}/savescore", json=payload)
        if show_result(result, "Score saved."):
            st.json(result["data"])


def main():
    """Main function to run the Streamlit app."""
    st.title("IMLeagues Score Desk 🏆")
    login_section()
    games_section()
    roster_section()
    score_section()


if __name__ == "__main__":
    main()
