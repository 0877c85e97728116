from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING
import logging

from .errors import ApiError
from .models import Admin
from .storage import CredentialVault

if TYPE_CHECKING:
    from .gateway import Gateway


LOGGER = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class SessionStore:
    """Authentication state and sole owner of the persisted credential.

    The starting state only reflects whether a credential is on disk; a stale
    token stays "authenticated" until the first request comes back 401.
    """

    def __init__(self, vault: CredentialVault) -> None:
        self.vault = vault
        self.admin: Admin | None = None
        self.token = vault.load()
        self.state = SessionState.AUTHENTICATED if self.token else SessionState.UNAUTHENTICATED
        self.loading = False
        self.error: str | None = None
        self.otp_sent = False

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    def login(self, gateway: Gateway, email: str, password: str) -> Admin | None:
        self.loading = True
        self.error = None
        try:
            data = gateway.send(
                "POST",
                "/admin/login",
                {"email": email, "password": password},
                fallback="Login failed",
            )
        except ApiError as exc:
            self.loading = False
            self.error = exc.message
            raise
        token = data.get("token")
        if not token:
            self.loading = False
            self.error = "Login failed"
            raise ApiError("Login failed")

        self.loading = False
        self.admin = Admin.from_api(data.get("admin"))
        self.token = str(token)
        self.state = SessionState.AUTHENTICATED
        self.vault.save(self.token)
        LOGGER.info("Signed in as %s", self.admin.name if self.admin else email)
        return self.admin

    def request_registration(
        self, gateway: Gateway, email: str, password: str, admin_secret_key: str
    ) -> dict:
        self.loading = True
        try:
            data = gateway.send(
                "POST",
                "/admin/register-request",
                {"email": email, "password": password, "adminSecretKey": admin_secret_key},
                fallback="OTP Request failed",
            )
        except ApiError as exc:
            self.loading = False
            self.error = exc.message
            raise
        self.loading = False
        self.otp_sent = True
        return data

    def logout(self) -> None:
        self._teardown()
        self.otp_sent = False
        LOGGER.info("Signed out")

    def expire(self) -> None:
        """Drop the session after the server rejected the credential."""
        was_authenticated = self.is_authenticated
        self._teardown()
        if was_authenticated:
            LOGGER.warning("Session expired; credential removed")

    def clear_error(self) -> None:
        self.error = None

    def _teardown(self) -> None:
        self.admin = None
        self.token = None
        self.state = SessionState.UNAUTHENTICATED
        self.vault.clear()
