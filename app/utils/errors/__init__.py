from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base application error carrying the HTTP status it maps to.

    `errors` holds field-level detail (e.g. `[{"field": "email", "message": ...}]`)
    when the failure can be attributed to specific inputs.
    """
    status_code: int = 500
    default_message: str = "Error interno del servidor"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_output(self) -> dict[str, Any]:
        output: dict[str, Any] = {"message": self.message}
        if self.errors:
            output["errors"] = self.errors
        return output


class ValidationError(AppError):
    status_code = 400
    default_message = "Datos inválidos"


class AuthError(AppError):
    status_code = 401
    default_message = "Credenciales inválidas"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Acceso denegado"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Ruta no encontrada"


class ConflictError(AppError):
    status_code = 409
    default_message = "El email ya está registrado"


class InternalError(AppError):
    status_code = 500


__all__ = [
    "AppError",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
