from __future__ import annotations

from typing import Any, Callable
import logging

import requests

from .errors import ApiError, UnauthorizedError
from .packaging import MultipartBody
from .session import SessionStore


LOGGER = logging.getLogger(__name__)


class Gateway:
    """Single exit point for calls to the admin REST service.

    Each call is sent exactly once: no retry, no cancellation.
    """

    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        *,
        http: requests.Session | None = None,
        timeout: float | None = None,
        navigate: Callable[[str], None] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_store = session_store
        self.http = http or requests.Session()
        self.timeout = timeout
        self.navigate = navigate

    def _headers(self, binary: bool) -> dict[str, str | None]:
        headers: dict[str, str | None] = {"Accept": "application/json"}
        token = self.session_store.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if binary:
            # None drops any session-level Content-Type so requests writes the boundary.
            headers["Content-Type"] = None
        return headers

    def send(
        self,
        method: str,
        path: str,
        body: MultipartBody | dict | None = None,
        *,
        params: dict[str, Any] | None = None,
        fallback: str = "Request failed",
    ) -> dict:
        binary = isinstance(body, MultipartBody)
        kwargs: dict[str, Any] = {
            "headers": self._headers(binary),
            "params": params,
            "timeout": self.timeout,
        }
        if binary:
            kwargs["files"] = body.to_requests_files()
        elif body is not None:
            kwargs["json"] = body

        url = f"{self.base_url}{path}"
        LOGGER.debug("%s %s", method, url)
        try:
            resp = self.http.request(method, url, **kwargs)
        except requests.RequestException as exc:
            LOGGER.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(fallback) from exc

        if resp.status_code == 401:
            LOGGER.warning("%s %s returned 401; ending session", method, path)
            self.session_store.expire()
            if self.navigate is not None:
                self.navigate("/")
            raise UnauthorizedError(_server_message(resp) or fallback, 401)

        if not resp.ok:
            message = _server_message(resp) or fallback
            LOGGER.warning("%s %s returned %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, resp.status_code)

        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {"data": data}


def _server_message(resp: requests.Response) -> str | None:
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return None
