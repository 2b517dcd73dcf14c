from __future__ import annotations

from datetime import date, datetime
from html import escape
from typing import Any, Iterable, Mapping


MONTHS = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)


def format_date(value: Any) -> str:
    """Long Spanish date, e.g. `25 de abril de 2006`."""
    if not value:
        return "No disponible"
    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        try:
            day = datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
        except ValueError:
            return "Fecha inválida"
    return f"{day.day} de {MONTHS[day.month - 1]} de {day.year}"


def _text(value: Any, fallback: str) -> str:
    return escape(str(value)) if value else fallback


def _role_badges(roles: Iterable[Any]) -> str:
    badges = []
    for role in roles or []:
        name = role if isinstance(role, str) else role.get("name", "")
        badges.append(f'<span class="badge badge-{escape(name)}">{escape(name)}</span>')
    return "".join(badges)


def _info(label: str, value: str) -> str:
    return (
        '<div class="info-item">'
        f'<div class="info-label">{label}</div>'
        f'<div class="info-value">{value}</div>'
        "</div>"
    )


def render_profile(user: Mapping[str, Any]) -> str:
    url = user.get("url_profile")
    url_html = f'<a href="{escape(url)}" target="_blank">{escape(url)}</a>' if url else "No especificada"
    full_name = f"{_text(user.get('name'), 'No especificado')} {escape(user.get('lastName') or '')}".strip()
    birthdate = format_date(user["birthdate"]) if user.get("birthdate") else "No especificada"

    return (
        '<div class="user-card">'
        f"<h3>Mi Perfil {_role_badges(user.get('roles'))}</h3>"
        '<div class="user-info">'
        + _info("Nombre completo:", full_name)
        + _info("Email:", _text(user.get("email"), "No especificado"))
        + _info("Teléfono:", _text(user.get("phoneNumber"), "No especificado"))
        + _info("Fecha de nacimiento:", birthdate)
        + _info("Dirección:", _text(user.get("adress"), "No especificada"))
        + _info("URL de perfil:", url_html)
        + "</div></div>"
    )


def render_user_list(users: list[Mapping[str, Any]]) -> str:
    if not users:
        return (
            "<h3>Lista de Usuarios (0 usuarios registrados)</h3>"
            '<div class="alert alert-info">No hay usuarios registrados en el sistema todavía.</div>'
        )

    cards = []
    for user in users:
        name = f"{_text(user.get('name'), 'No especificado')} {escape(user.get('lastName') or '')}"
        cards.append(
            '<div class="user-card"><div class="user-info">'
            + _info("Nombre:", f"{name} {_role_badges(user.get('roles'))}")
            + _info("Email:", _text(user.get("email"), "No especificado"))
            + _info("Teléfono:", _text(user.get("phoneNumber"), "No especificado"))
            + _info("Registrado:", format_date(user.get("createdAt")))
            + "</div></div>"
        )
    return (
        f"<h3>Lista de Usuarios ({len(users)} usuarios registrados)</h3>"
        f'<div class="user-list">{"".join(cards)}</div>'
    )
