from __future__ import annotations

import logging
from datetime import datetime, timezone

from mongoengine import NotUniqueError

from app.models.role import Role
from app.models.user import User
from app.services.auth.passwords import PasswordHasher
from app.services.validation import parse_birthdate
from app.utils.base import RoleName
from app.utils.config import Settings


logger = logging.getLogger(__name__)


def seed_roles() -> list[Role]:
    """Create every role in `RoleName` that does not exist yet."""
    roles: list[Role] = []
    for name in RoleName:
        role = Role.get(name)
        if not role:
            try:
                role = Role(name=name.value)
                role.save()
                logger.info("Seeded role %s", name.value)
            except NotUniqueError:
                # Another process seeded it between the lookup and the insert
                role = Role.get(name)
        roles.append(role)
    return roles


def seed_admin(settings: Settings) -> User | None:
    """Create the bootstrap admin account from configuration if it is absent."""
    admin_role = Role.get(RoleName.ADMIN)
    if not admin_role:
        logger.warning("Roles are missing; run seed_roles before seed_admin")
        return None

    user = User.find_by_email(settings.admin_email)
    if user:
        return user

    hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    birthdate = parse_birthdate(settings.admin_birthdate)
    user = User(
        email=settings.admin_email,
        password=hasher.hash(settings.admin_password),
        roles=[admin_role],
        name=settings.admin_name,
        last_name=settings.admin_last_name,
        phone_number=settings.admin_phone_number,
        birthdate=datetime(birthdate.year, birthdate.month, birthdate.day, tzinfo=timezone.utc),
        url_profile=settings.admin_url_profile,
        address=settings.admin_address,
    )
    try:
        user.save()
    except NotUniqueError:
        return User.find_by_email(settings.admin_email)
    logger.info("Seeded admin account %s", user.email)
    return user
