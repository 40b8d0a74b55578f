import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from .config import Region

# Lifetime the token service grants; enforced server-side only.
TOKEN_TTL = timedelta(minutes=10)


@dataclass(frozen=True)
class Token:
    """A bearer token issued for one region."""

    value: str
    issued_at: datetime
    region: Region

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + TOKEN_TTL

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.value}"

    def __repr__(self) -> str:
        return f"Token(region={self.region.value!r}, issued_at={self.issued_at.isoformat()!r})"


class TokenStore:
    """Holds the current token for a client.

    At most one token is current; storing a new one replaces the old one
    regardless of region.
    """

    def __init__(self, token: Optional[Token] = None) -> None:
        self._lock = threading.Lock()
        self._token = token

    def set(self, token: Token) -> None:
        with self._lock:
            self._token = token

    def get(self) -> Optional[Token]:
        with self._lock:
            return self._token

    def get_for(self, region: Union[str, Region]) -> Optional[Token]:
        """Return the current token if it was issued for ``region``."""
        region = Region.parse(region)
        with self._lock:
            if self._token is not None and self._token.region is region:
                return self._token
            return None

    def clear(self) -> None:
        with self._lock:
            self._token = None
