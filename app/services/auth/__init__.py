from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from app.models.user import User
from app.services.auth.passwords import PasswordHasher
from app.services.auth.service import AuthService
from app.services.auth.tokens import INVALID_TOKEN_MESSAGE, TokenClaims, TokenService
from app.utils.base import RoleName
from app.utils.errors import AuthError, ForbiddenError


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/signIn", auto_error=False)

MISSING_TOKEN_MESSAGE = "Token no proporcionado"
FORBIDDEN_MESSAGE = "No tienes permisos para acceder a este recurso"


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_current_claims(
    token: str | None = Depends(oauth2_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Auth dependency that verifies the bearer token and returns its claims.

    Rejects missing, tampered and expired tokens with 401.
    """
    if not token:
        raise AuthError(MISSING_TOKEN_MESSAGE)
    return tokens.verify(token)


def get_current_user(claims: TokenClaims = Depends(get_current_claims)) -> User:
    """Load the user named by a verified token. A deleted subject is treated as an invalid token."""
    user = User.find_by_id(claims.sub)
    if not user:
        raise AuthError(INVALID_TOKEN_MESSAGE)
    return user


def require_role(role: RoleName):
    """Return a FastAPI dependency that admits only tokens carrying `role`."""

    def _dependency(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if not claims.has_role(role.value):
            raise ForbiddenError(FORBIDDEN_MESSAGE)
        return claims

    return _dependency


__all__ = [
    "AuthService",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
    "get_auth_service",
    "get_current_claims",
    "get_current_user",
    "get_token_service",
    "oauth2_scheme",
    "require_role",
]
