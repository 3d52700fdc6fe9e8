import json
import logging
from typing import Any, Optional

import requests

from iml_proxy.config import get_base_url, get_request_timeout
from iml_proxy.exceptions import UpstreamError
from iml_proxy.services.session_manager import SessionManager


class ProxyForwarder:
    """Sends one authorized call to IMLeagues per local request and relays the result."""

    def __init__(
        self,
        session_manager: SessionManager,
        http: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
    ):
        self.session_manager = session_manager
        self._http = http or requests.Session()
        self._base_url = base_url or get_base_url()

    def build_url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        if path.startswith("/"):
            path = path[1:]
        return self._base_url + path

    def forward(self, path: str, method: str = "GET", body: Any = None) -> Any:
        """
        Issues the call and returns the parsed JSON body, or the raw text when
        the body is empty or not JSON.

        Raises UpstreamError on a non-success status or a transport failure.
        """
        headers = {}
        data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body)
        headers.update(self.session_manager.current_auth_header())

        url = self.build_url(path)
        logging.info(f"{method} {url}")
        try:
            response = self._http.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=get_request_timeout(),
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"IMLeagues API request failed on {path}: {e}") from e

        text = response.text
        parsed = None
        if text:
            try:
                parsed = json.loads(text)
            except ValueError:
                logging.debug(f"Non-JSON response from {path}, relaying raw text.")

        if not response.ok:
            raise UpstreamError(
                f"IMLeagues API error ({response.status_code}) on {path}: {text}",
                status_code=response.status_code,
                body=parsed if parsed is not None else text,
            )
        return parsed if parsed is not None else text
