from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.services.auth import TokenService
from app.utils.errors import AuthError


NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def test_issue_then_verify_returns_subject_and_roles(tokens: TokenService):
    token = tokens.issue("user-1", ["user", "admin"], now=NOW)
    claims = tokens.verify(token, now=NOW)

    assert claims.sub == "user-1"
    assert claims.roles == ["user", "admin"]
    assert claims.exp - claims.iat == 3600


def test_verify_fails_from_the_expiry_instant(tokens: TokenService):
    token = tokens.issue("user-1", ["user"], ttl=timedelta(seconds=60), now=NOW)

    assert tokens.verify(token, now=NOW + timedelta(seconds=59)).sub == "user-1"
    with pytest.raises(AuthError):
        tokens.verify(token, now=NOW + timedelta(seconds=60))


def test_verify_rejects_tampered_signature(tokens: TokenService):
    token = tokens.issue("user-1", ["user"], now=NOW)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[:-2] + ("AA" if signature[-2:] != "AA" else "BB")])

    with pytest.raises(AuthError):
        tokens.verify(tampered, now=NOW)


def test_verify_rejects_token_signed_with_another_secret(tokens: TokenService):
    forged = jwt.encode(
        {"sub": "user-1", "roles": ["admin"], "iat": int(NOW.timestamp()), "exp": int(NOW.timestamp()) + 60},
        "other-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthError):
        tokens.verify(forged, now=NOW)


def test_verify_rejects_payload_without_roles(tokens: TokenService):
    token = jwt.encode(
        {"sub": "user-1", "iat": int(NOW.timestamp()), "exp": int(NOW.timestamp()) + 60},
        "test-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthError):
        tokens.verify(token, now=NOW)


def test_verify_rejects_garbage(tokens: TokenService):
    with pytest.raises(AuthError):
        tokens.verify("not.a.token")
