import os
from typing import Optional

from dotenv import load_dotenv

from iml_proxy.exceptions import ConfigurationError

load_dotenv()

DEFAULT_BASE_URL = "https://api.imleagues.com/"
DEFAULT_PORT = 3000


def must_env(name: str) -> str:
    """Returns the value of a required setting, failing fast when it is unset or empty."""
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(name)
    return value


def get_base_url() -> str:
    base_url = os.getenv("IML_BASE_URL") or DEFAULT_BASE_URL
    # Relative paths are appended directly, so the base must end with a slash.
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url


def get_port() -> int:
    return int(os.getenv("PORT") or DEFAULT_PORT)


def get_request_timeout() -> Optional[float]:
    """Outbound timeout in seconds; None waits indefinitely."""
    value = os.getenv("IML_REQUEST_TIMEOUT")
    return float(value) if value else None


def get_public_dir() -> str:
    return os.getenv("IML_PUBLIC_DIR", "public")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
