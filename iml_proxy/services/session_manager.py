import json
import logging
import os
import time
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional

import requests

from iml_proxy.api.imleagues_client import LOGIN_PATH, build_login_payload
from iml_proxy.config import get_base_url, get_request_timeout, must_env
from iml_proxy.exceptions import AuthError


@dataclass(frozen=True)
class Session:
    """The credential returned by a successful IMLeagues admin login."""
    token: str
    token_index: Optional[str]
    logged_in_at: float


class SessionManager:
    """
    Holds the single IMLeagues session for the process.

    The session is only ever replaced as a whole, and only after a login
    succeeded; a failed re-login keeps the previous session.
    Nothing here tracks expiry: a login happens when one is asked for, or
    lazily through ensure_session() when no session exists yet.
    """
    def __init__(self, http: Optional[requests.Session] = None, base_url: Optional[str] = None):
        self._http = http or requests.Session()
        self._base_url = base_url or get_base_url()
        self._session: Optional[Session] = None
        self._lock = Lock()
        self._login_lock = Lock()

    @property
    def session(self) -> Optional[Session]:
        with self._lock:
            return self._session

    def login(self) -> Session:
        email = must_env("IML_EMAIL")
        password = must_env("IML_PASSWORD")
        school_id = os.getenv("IML_SCHOOL_ID", "")

        payload = build_login_payload(email, password, school_id)
        logging.info(f"Logging in to IMLeagues as {email}...")
        try:
            response = self._http.post(
                self._base_url + LOGIN_PATH,
                json=payload,
                timeout=get_request_timeout(),
            )
        except requests.exceptions.RequestException as e:
            raise AuthError(f"IMLeagues login failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            raise AuthError(
                f"IMLeagues login failed ({response.status_code}): {json.dumps(data)}",
                status_code=response.status_code,
                body=data,
            )
        token = data.get("jwtTokenForSPA") if isinstance(data, dict) else None
        if not token:
            raise AuthError(
                f"Login succeeded but no jwtTokenForSPA returned: {json.dumps(data)}",
                status_code=response.status_code,
                body=data,
            )

        session = Session(
            token=token,
            token_index=data.get("jwtTokenIndexForSPA"),
            logged_in_at=time.time(),
        )
        with self._lock:
            self._session = session
        logging.info("IMLeagues login succeeded, session token cached.")
        return session

    def ensure_session(self) -> Session:
        """Returns the current session, logging in first if there is none."""
        session = self.session
        if session is not None:
            return session
        # Requests that race here wait for the first login instead of starting their own.
        with self._login_lock:
            session = self.session
            if session is not None:
                return session
            return self.login()

    def current_auth_header(self) -> Dict[str, str]:
        session = self.session
        if session is None:
            return {}
        # Bearer is a best guess at what the SPA token expects.
        return {"Authorization": f"Bearer {session.token}"}
