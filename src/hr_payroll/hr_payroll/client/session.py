from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"


@dataclass
class SessionContext:
    """Explicit session state for API consumers.

    Holds the base URL, credentials and the logged-in user, and owns the
    ``requests.Session`` whose cookie jar carries the server session. Passed
    to every client instead of being read from ambient storage.
    """

    base_url: str
    username: str
    password: str
    timeout: float = 10.0
    user: Optional[dict] = None
    http: requests.Session = field(default_factory=requests.Session, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def refresh(self) -> dict:
        """(Re)establish the server session with the stored credentials."""

        self.user = None
        try:
            resp = self.http.post(
                self.url(LOGIN_PATH),
                json={"username": self.username, "password": self.password},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"Login request failed: {e}") from e

        if resp.status_code != 200:
            raise ApiError(error_message(resp), status_code=resp.status_code)

        self.user = envelope_data(resp)
        logger.info("Session refreshed for %s", self.username)
        return self.user

    def clear(self) -> None:
        self.user = None
        self.http.cookies.clear()


def error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"


def envelope_data(resp) -> Any:
    """``data`` member of a ``{"success", "data"}`` response body."""
    try:
        body = resp.json()
    except ValueError as e:
        raise ApiError("Response is not valid JSON", status_code=resp.status_code) from e
    if not isinstance(body, dict):
        raise ApiError("Unexpected response body", status_code=resp.status_code)
    return body.get("data")
