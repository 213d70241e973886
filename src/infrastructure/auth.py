"""Operator sessions and API key checks.

The dashboard has a single operator with static credentials. A successful
login yields an opaque token kept in memory until it expires.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import hmac
import secrets
import threading

from src.infrastructure.logging.logger import get_usage_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _matches(expected: str | None, provided: str | None) -> bool:
    if not expected or provided is None:
        return False
    return hmac.compare_digest(expected.encode(), provided.encode())


class SessionManager:
    """In-memory store of operator session tokens."""

    def __init__(
        self,
        username: str | None,
        password: str | None,
        ttl: timedelta = timedelta(hours=8),
        clock: Callable[[], datetime] | None = None,
        logger=None,
    ) -> None:
        """Initialize the manager.

        Args:
            username: Expected operator login name.
            password: Expected operator password.
            ttl: Lifetime of issued tokens.
            clock: Callable returning the current instant.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._username = username
        self._password = password
        self._ttl = ttl
        self._clock = clock or _utc_now
        self._logger = logger or get_usage_logger()
        self._sessions: dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def login(self, username: str | None, password: str | None) -> str | None:
        """Return a new session token when the credentials match.

        Both comparisons always run so timing does not reveal which field
        was wrong.
        """
        user_ok = _matches(self._username, username)
        password_ok = _matches(self._password, password)
        if not (user_ok and password_ok):
            self._logger.warning(f"Rejected login attempt for '{username}'")
            return None
        token = secrets.token_hex(32)
        expires_at = self._clock() + self._ttl
        with self._lock:
            self._sessions[token] = (username, expires_at)
        self._logger.info(f"Login succeeded for '{username}'")
        return token

    def is_valid(self, token: str | None) -> bool:
        """Return True when ``token`` belongs to an unexpired session."""
        if not token:
            return False
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return False
            if session[1] <= now:
                del self._sessions[token]
                return False
            return True

    def logout(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)


class ApiKeyGate:
    """Checks the bearer key used by the spreadsheet automation."""

    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    def is_valid(self, provided: str | None) -> bool:
        return _matches(self._api_key, provided)


__all__ = ["SessionManager", "ApiKeyGate"]
