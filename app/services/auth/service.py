from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping

from mongoengine import NotUniqueError, ValidationError as SchemaError

from app.models.role import Role
from app.models.user import User, normalize_email
from app.services.auth.passwords import PasswordHasher
from app.services.auth.tokens import TokenService
from app.services.validation import parse_birthdate, validate_sign_up
from app.utils.base import DEFAULT_ROLE
from app.utils.config import Settings
from app.utils.errors import AuthError, ConflictError, InternalError, ValidationError


logger = logging.getLogger(__name__)

SIGN_UP_INVALID_MESSAGE = "Los datos de registro no son válidos"
SIGN_IN_REQUIRED_MESSAGE = "El email y password son requeridos"
SIGN_IN_FAILED_MESSAGE = "Credenciales inválidas"


class AuthService:
    """Sign-up and sign-in orchestration over the user and role stores."""

    def __init__(
        self,
        settings: Settings,
        tokens: TokenService | None = None,
        hasher: PasswordHasher | None = None,
    ):
        self.settings = settings
        self.tokens = tokens or TokenService(settings)
        self.hasher = hasher or PasswordHasher(rounds=settings.password_hash_rounds)

    def sign_up(self, fields: Mapping[str, Any], today: date | None = None) -> User:
        errors = validate_sign_up(fields, today)
        if errors:
            raise ValidationError(SIGN_UP_INVALID_MESSAGE, errors=[e.model_dump() for e in errors])

        email = normalize_email(str(fields["email"]))
        # Early rejection; the unique index below settles concurrent sign-ups
        if User.find_by_email(email):
            raise ConflictError()

        role = Role.get(DEFAULT_ROLE)
        if role is None:
            logger.error("Default role %r is missing; roles were not seeded", DEFAULT_ROLE.value)
            raise InternalError()

        birthdate = parse_birthdate(fields["birthdate"])
        user = User(
            email=email,
            password=self.hasher.hash(str(fields["password"])),
            roles=[role],
            name=str(fields["name"]),
            last_name=str(fields["lastName"]),
            phone_number=str(fields["phoneNumber"]),
            birthdate=datetime(birthdate.year, birthdate.month, birthdate.day, tzinfo=timezone.utc),
            url_profile=str(fields.get("url_profile") or ""),
            address=str(fields.get("adress") or ""),
        )
        try:
            user.save()
        except NotUniqueError:
            logger.info("Sign-up lost a race on an existing email")
            raise ConflictError()
        except SchemaError as exc:
            raise ValidationError(
                SIGN_UP_INVALID_MESSAGE,
                errors=[{"field": field, "message": str(message)} for field, message in exc.to_dict().items()],
            )

        logger.info("User %s signed up", user.id)
        return user

    def sign_in(self, email: str | None, password: str | None) -> str:
        if not email or not password:
            raise ValidationError(SIGN_IN_REQUIRED_MESSAGE)

        user = User.find_by_email(email)
        # Same error either way; callers must not learn whether the email exists
        if not user or not self.hasher.verify(password, user.password):
            logger.warning("Rejected sign-in attempt")
            raise AuthError(SIGN_IN_FAILED_MESSAGE)

        logger.info("User %s signed in", user.id)
        return self.tokens.issue(str(user.id), user.role_names)
