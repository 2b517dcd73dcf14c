from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from pydantic import BaseModel, ValidationError as PayloadError

from app.utils.config import Settings
from app.utils.errors import AuthError


INVALID_TOKEN_MESSAGE = "Token inválido o expirado"


class TokenClaims(BaseModel):
    """Verified token payload. Only produced by `TokenService.verify`."""
    sub: str
    roles: list[str]
    iat: int
    exp: int

    def has_role(self, role: str) -> bool:
        return role in self.roles


class TokenService:
    """Issue and verify HS256 bearer tokens.

    Tokens are self-contained: there is no server-side record, so a token stays
    valid until `exp` even if the client discards it.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self.ttl = timedelta(minutes=settings.access_token_expires_minutes)

    def issue(
        self,
        user_id: str,
        roles: list[str],
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        """Create a signed JWT with subject, roles, issued-at and expiration."""
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "roles": list(roles),
            "iat": int(now.timestamp()),
            "exp": int((now + (ttl or self.ttl)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """Check signature and expiry; raise AuthError on any failure.

        A token is expired from the instant `now >= exp`.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims.model_validate(payload)
        except (JWTError, PayloadError):
            raise AuthError(INVALID_TOKEN_MESSAGE)

        now = now or datetime.now(timezone.utc)
        if int(now.timestamp()) >= claims.exp:
            raise AuthError(INVALID_TOKEN_MESSAGE)
        return claims
