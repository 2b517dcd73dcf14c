"""Client-side session state.

Token payloads are read here WITHOUT signature verification. The result only
drives what the client shows and where it navigates; the server verifies every
token on its own (see `app.services.auth.tokens`). Nothing in this module may be
used to grant access.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterator

from jose import jwt, JWTError

from app.client.api import ApiClient, ApiError
from app.client.render import render_profile, render_user_list
from app.client.storage import TOKEN_KEY, StorageEvent, TokenStorage
from app.services.validation import validate_sign_up
from app.utils.base import RoleName


logger = logging.getLogger(__name__)


class Page:
    ROOT = "/"
    SIGN_IN = "/signin.html"
    SIGN_UP = "/signup.html"
    USER_DASHBOARD = "/user-dashboard.html"
    ADMIN_DASHBOARD = "/admin-dashboard.html"


class SessionState(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED_USER = "authenticated_user"
    AUTHENTICATED_ADMIN = "authenticated_admin"


class SubmissionInProgressError(RuntimeError):
    """A form submit was attempted while another one is still in flight."""


def decode_token_unverified(token: str | None) -> dict[str, Any] | None:
    """Read the payload segment of a token. Display and routing only."""
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None


def is_auth_page(path: str) -> bool:
    return "signin" in path or "signup" in path


@dataclass
class Notification:
    kind: str
    message: str


@dataclass
class Notifications:
    """Dismissible message area. Messages are kept verbatim."""
    items: list[Notification] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.items.append(Notification("error", message))

    def success(self, message: str) -> None:
        self.items.append(Notification("success", message))

    def dismiss(self, index: int) -> None:
        if 0 <= index < len(self.items):
            del self.items[index]

    def clear(self) -> None:
        self.items.clear()

    @property
    def errors(self) -> list[str]:
        return [n.message for n in self.items if n.kind == "error"]


@dataclass
class DashboardView:
    profile_html: str
    users_html: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    """Anonymous / user / admin session driven by the stored token.

    Every navigation decision is returned as a path and also recorded in
    `location` (and passed to `on_redirect` when given).
    """

    def __init__(
        self,
        api: ApiClient,
        storage: TokenStorage,
        clock: Callable[[], datetime] = _utcnow,
        on_redirect: Callable[[str], None] | None = None,
    ):
        self.api = api
        self.storage = storage
        self.clock = clock
        self.on_redirect = on_redirect
        self.location: str | None = None
        self.notifications = Notifications()
        self._submit_lock = threading.Lock()
        self._unsubscribe = storage.subscribe(self.handle_storage_event, owner=self)

    def close(self) -> None:
        self._unsubscribe()

    # -- state derived from the stored token --

    def token(self) -> str | None:
        return self.storage.get()

    def claims(self) -> dict[str, Any] | None:
        return decode_token_unverified(self.token())

    def is_authenticated(self) -> bool:
        claims = self.claims()
        if not claims:
            return False
        try:
            return float(claims.get("exp", 0)) > self.clock().timestamp()
        except (TypeError, ValueError):
            return False

    def roles(self) -> list[str]:
        claims = self.claims()
        roles = claims.get("roles") if claims else None
        return list(roles) if isinstance(roles, list) else []

    def is_admin(self) -> bool:
        return RoleName.ADMIN.value in self.roles()

    def state(self) -> SessionState:
        if not self.is_authenticated():
            return SessionState.ANONYMOUS
        if self.is_admin():
            return SessionState.AUTHENTICATED_ADMIN
        return SessionState.AUTHENTICATED_USER

    def dashboard_page(self) -> str:
        return Page.ADMIN_DASHBOARD if self.is_admin() else Page.USER_DASHBOARD

    # -- navigation --

    def redirect(self, path: str) -> str:
        self.location = path
        if self.on_redirect:
            self.on_redirect(path)
        return path

    def reconcile(self, path: str) -> str | None:
        """Redirect when the page's audience does not match the session state.

        An expired token is left in storage; only a new sign-in replaces it.
        """
        state = self.state()
        if state is SessionState.ANONYMOUS:
            if not is_auth_page(path):
                return self.redirect(Page.SIGN_IN)
            return None
        if is_auth_page(path) or path == Page.ROOT:
            return self.redirect(self.dashboard_page())
        if path == Page.ADMIN_DASHBOARD and state is not SessionState.AUTHENTICATED_ADMIN:
            return self.redirect(Page.USER_DASHBOARD)
        return None

    def handle_storage_event(self, event: StorageEvent) -> str | None:
        # Token erased from another context: logout everywhere
        if event.key == TOKEN_KEY and not event.new_value:
            return self.redirect(Page.SIGN_IN)
        return None

    # -- actions --

    @contextmanager
    def _submitting(self) -> Iterator[None]:
        if not self._submit_lock.acquire(blocking=False):
            raise SubmissionInProgressError("Ya hay una solicitud en curso")
        try:
            yield
        finally:
            self._submit_lock.release()

    def _show_api_error(self, exc: ApiError) -> None:
        self.notifications.error(exc.message)
        for error in exc.errors:
            if error.get("message"):
                self.notifications.error(error["message"])

    def sign_in(self, email: str, password: str) -> str | None:
        self.notifications.clear()
        with self._submitting():
            try:
                response = self.api.sign_in(email, password)
            except ApiError as exc:
                self._show_api_error(exc)
                return None
        self.storage.set(response["token"], origin=self)
        self.notifications.success("¡Inicio de sesión exitoso!")
        return self.redirect(self.dashboard_page())

    def sign_up(self, fields: dict[str, Any]) -> str | None:
        """Validate locally, reporting every failing field, then submit."""
        self.notifications.clear()
        errors = validate_sign_up(fields)
        if errors:
            for error in errors:
                self.notifications.error(error.message)
            return None

        with self._submitting():
            try:
                self.api.sign_up(fields)
            except ApiError as exc:
                self._show_api_error(exc)
                return None
        self.notifications.success("¡Registro exitoso! Ahora puedes iniciar sesión.")
        return self.redirect(Page.SIGN_IN)

    def logout(self) -> str:
        self.storage.remove(origin=self)
        return self.redirect(Page.SIGN_IN)

    def load_dashboard(self) -> DashboardView | None:
        if not self.is_authenticated():
            self.redirect(Page.SIGN_IN)
            return None

        token = self.token()
        try:
            profile = self.api.get_profile(token)
        except ApiError as exc:
            logger.warning("Profile request failed with status %s", exc.status_code)
            self.notifications.error("Error al cargar los datos del usuario")
            return None

        view = DashboardView(profile_html=render_profile(profile))
        if self.is_admin():
            try:
                view.users_html = render_user_list(self.api.get_all_users(token))
            except ApiError as exc:
                self.notifications.error(f"Error al cargar la lista de usuarios: {exc.message}")
        return view
