from __future__ import annotations

import logging
from typing import Any

import httpx


logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "No se pudo conectar con el servidor"
GENERIC_ERROR_MESSAGE = "Error en la petición"


class ApiError(Exception):
    """Non-2xx response or transport failure. `message` is the server's, verbatim."""

    def __init__(self, message: str, status_code: int = 0, errors: list[dict[str, Any]] | None = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class ApiClient:
    """Thin httpx wrapper over the JSON API.

    Pass `client` to reuse an existing `httpx.Client` (e.g. FastAPI's TestClient).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
        prefix: str = "/api",
    ):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.prefix = prefix

    def close(self) -> None:
        self._client.close()

    def request(self, method: str, path: str, token: str | None = None, json: Any = None) -> Any:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("%s %s%s", method, self.prefix, path)
        try:
            response = self._client.request(method, f"{self.prefix}{path}", headers=headers, json=json)
        except httpx.HTTPError as exc:
            raise ApiError(CONNECTION_ERROR_MESSAGE) from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            body = data if isinstance(data, dict) else {}
            raise ApiError(
                body.get("message") or GENERIC_ERROR_MESSAGE,
                status_code=response.status_code,
                errors=body.get("errors"),
            )
        return data

    def sign_in(self, email: str, password: str) -> dict:
        return self.request("POST", "/auth/signIn", json={"email": email, "password": password})

    def sign_up(self, fields: dict) -> dict:
        return self.request("POST", "/auth/signUp", json=fields)

    def get_profile(self, token: str) -> dict:
        return self.request("GET", "/users/me", token=token)

    def get_all_users(self, token: str) -> list[dict]:
        return self.request("GET", "/users", token=token)
