# services/token_service.py
import jwt
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from models.schemas import TokenClaims

TOKEN_TTL = timedelta(hours=1)
ALGORITHM = "HS256"


class MissingTokenError(Exception):
    """No credential was presented"""


class InvalidTokenError(Exception):
    """A credential was presented but is malformed, tampered with or expired"""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Take the token out of an 'Authorization: Bearer <token>' header value"""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) < 2:
        return None
    return parts[1]


class TokenService:
    """
    Issues and verifies signed, one-hour session tokens.

    The secret is required; constructing the service without one raises, and
    since the service is built during startup the app will not come up.
    """

    def __init__(self, secret: Optional[str], ttl: timedelta = TOKEN_TTL, clock: Callable[[], datetime] = _utcnow):
        if not secret:
            raise ValueError("JWT_SECRET must be set in environment variables")
        self._secret = secret
        self.ttl = ttl
        self.clock = clock

    def issue(self, user_id: str, username: str) -> str:
        issued_at = self.clock()
        payload = {
            "userId": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "userId", "username"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        # Checked here rather than by PyJWT so the injected clock applies
        if payload["exp"] <= int(self.clock().timestamp()):
            raise InvalidTokenError("Token has expired")

        return TokenClaims(
            user_id=payload["userId"],
            username=payload["username"],
            exp=payload["exp"],
            iat=payload.get("iat"),
        )
