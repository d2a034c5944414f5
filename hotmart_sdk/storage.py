"""
Hotmart SDK Token Storage

In-memory holder for the client-credentials access token. Tokens are
never persisted; their lifetime is bounded by the owning client.
"""

import enum
import threading
from dataclasses import dataclass
from typing import Optional


# Subtracted from the advertised token lifetime
EXPIRY_MARGIN_MS = 60_000


class TokenState(str, enum.Enum):
    ABSENT = "absent"
    VALID = "valid"
    STALE = "stale"


@dataclass(frozen=True)
class CachedToken:
    value: str
    expires_at: int  # epoch millis


class TokenCache:
    """
    Single-slot token cache.

    Holds at most one token, which is either absent (never fetched),
    valid (now < expires_at) or stale (expired or invalidated).
    """

    def __init__(self) -> None:
        self._token: Optional[CachedToken] = None
        self._invalidated = False
        self._lock = threading.Lock()

    def state(self, now_ms: int) -> TokenState:
        """Current state of the cache at time now_ms."""
        with self._lock:
            if self._token is None:
                return TokenState.STALE if self._invalidated else TokenState.ABSENT
            if now_ms < self._token.expires_at:
                return TokenState.VALID
            return TokenState.STALE

    def get_valid(self, now_ms: int) -> Optional[str]:
        """Return the cached token value if it has not expired."""
        with self._lock:
            if self._token is not None and now_ms < self._token.expires_at:
                return self._token.value
            return None

    def store(self, value: str, expires_in: int, now_ms: int) -> CachedToken:
        """Cache a freshly issued token; expires_in is in seconds."""
        token = CachedToken(value, now_ms + expires_in * 1000 - EXPIRY_MARGIN_MS)
        with self._lock:
            self._token = token
            self._invalidated = False
        return token

    def invalidate(self, value: Optional[str] = None) -> bool:
        """
        Discard the cached token.

        When value is given the token is only discarded if it is still the
        one cached, so a rejection of an older token leaves a newer one in
        place. Returns True if a token was discarded.
        """
        with self._lock:
            if self._token is None:
                return False
            if value is not None and self._token.value != value:
                return False
            self._token = None
            self._invalidated = True
            return True

    @property
    def expires_at(self) -> Optional[int]:
        with self._lock:
            return self._token.expires_at if self._token else None
