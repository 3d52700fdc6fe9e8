"""Exceptions raised by the IMLeagues proxy."""
from typing import Any, Optional


class IMLProxyError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(IMLProxyError):
    """A required configuration value is not set."""

    def __init__(self, name: str):
        super().__init__(f"Missing env var: {name}")
        self.name = name


class AuthError(IMLProxyError):
    """The IMLeagues login call failed or returned no token."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamError(IMLProxyError):
    """
    A forwarded IMLeagues call returned a non-success status.

    `status_code` is None when the request never got a response.
    `body` holds the parsed JSON when there was any, otherwise the raw text.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
