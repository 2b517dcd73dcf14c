from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_SYMBOLS = "#$%&*@"
PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[#$%&*@])[A-Za-z\d#$%&*@]{8,}$", re.ASCII)
PHONE_RE = re.compile(r"^\+?[0-9\s\-()]{9,}$")
MINIMUM_AGE = 13

REQUIRED_FIELDS: dict[str, str] = {
    "email": "El email es requerido",
    "password": "La contraseña es requerida",
    "name": "El nombre es requerido",
    "lastName": "El apellido es requerido",
    "phoneNumber": "El teléfono es requerido",
    "birthdate": "La fecha de nacimiento es requerida",
}

EMAIL_MESSAGE = "El email no tiene un formato válido"
PASSWORD_MESSAGE = (
    "La contraseña debe tener al menos 8 caracteres, 1 mayúscula, 1 dígito "
    f"y 1 carácter especial ({PASSWORD_SYMBOLS})"
)
PHONE_MESSAGE = "El número de teléfono no es válido"
BIRTHDATE_MESSAGE = "La fecha de nacimiento no es válida"
AGE_MESSAGE = f"Debes tener al menos {MINIMUM_AGE} años para registrarte"


class FieldError(BaseModel):
    """A single failed check on a sign-up field."""
    field: str
    message: str


def validate_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value))


def validate_password(value: str) -> bool:
    return bool(PASSWORD_RE.fullmatch(value))


def validate_phone(value: str) -> bool:
    return bool(PHONE_RE.fullmatch(value))


def parse_birthdate(value: Any) -> date | None:
    """Parse an ISO date or datetime into a calendar date. Returns None when invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def calculate_age(birthdate: date, today: date) -> int:
    """Full years elapsed between `birthdate` and `today`."""
    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


def validate_age(birthdate: date, today: date | None = None) -> bool:
    today = today or datetime.now(timezone.utc).date()
    return calculate_age(birthdate, today) >= MINIMUM_AGE


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_sign_up(fields: Mapping[str, Any], today: date | None = None) -> list[FieldError]:
    """Run every sign-up check and return all violations, one per failing field.

    Presence is checked first; format checks run only for fields that are present
    so a missing field is reported once.
    """
    errors: list[FieldError] = []
    for field, message in REQUIRED_FIELDS.items():
        if _is_blank(fields.get(field)):
            errors.append(FieldError(field=field, message=message))
    missing = {error.field for error in errors}

    if "email" not in missing and not validate_email(str(fields["email"]).strip().lower()):
        errors.append(FieldError(field="email", message=EMAIL_MESSAGE))

    if "password" not in missing and not validate_password(str(fields["password"])):
        errors.append(FieldError(field="password", message=PASSWORD_MESSAGE))

    if "phoneNumber" not in missing and not validate_phone(str(fields["phoneNumber"]).strip()):
        errors.append(FieldError(field="phoneNumber", message=PHONE_MESSAGE))

    if "birthdate" not in missing:
        birthdate = parse_birthdate(fields["birthdate"])
        if birthdate is None:
            errors.append(FieldError(field="birthdate", message=BIRTHDATE_MESSAGE))
        elif not validate_age(birthdate, today):
            errors.append(FieldError(field="birthdate", message=AGE_MESSAGE))

    return errors
