"""JWT token utilities.

Tokens are issued by the identity provider; this service only verifies them.
``create_access_token`` mirrors the provider's format and is used by tooling
and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by a verified token."""

    owner_id: str
    role: str = "user"


class TokenVerifier:
    """Verifies bearer tokens with the secret handed over at startup."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm

    def decode(self, token: str) -> dict | None:
        """Decode and validate a JWT. Returns payload dict or None on failure."""
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            return None

    def identity(self, token: str) -> Identity | None:
        payload = self.decode(token)
        if payload is None or payload.get("sub") is None:
            return None
        return Identity(owner_id=str(payload["sub"]), role=str(payload.get("role", "user")))


def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=60))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)
