from __future__ import annotations

from pathlib import Path
import json
import sys

import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pic2speak_admin.gateway import Gateway
from pic2speak_admin.session import SessionStore
from pic2speak_admin.storage import CredentialVault


BASE_URL = "https://api.test/api/v1"


def make_response(status: int, payload=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeHttp:
    """Stands in for requests.Session: replays queued replies per (method, path)."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list] = {}
        self.calls: list[dict] = []

    def reply(self, method: str, path: str, status: int = 200, payload=None) -> None:
        self.routes.setdefault((method, path), []).append(make_response(status, payload))

    def reply_with(self, method: str, path: str, handler) -> None:
        self.routes.setdefault((method, path), []).append(handler)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes.setdefault((method, path), []).append(exc)

    def request(self, method: str, url: str, **kwargs):
        path = url[len(BASE_URL):]
        self.calls.append({"method": method, "path": path, **kwargs})
        queue = self.routes.get((method, path))
        if not queue:
            raise AssertionError(f"unexpected request {method} {path}")
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item()
        return item


@pytest.fixture()
def vault(tmp_path: Path) -> CredentialVault:
    return CredentialVault(tmp_path / "session.json")


@pytest.fixture()
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture()
def navigations() -> list[str]:
    return []


@pytest.fixture()
def session_store(vault: CredentialVault) -> SessionStore:
    return SessionStore(vault)


@pytest.fixture()
def gateway(session_store: SessionStore, http: FakeHttp, navigations: list[str]) -> Gateway:
    return Gateway(BASE_URL, session_store, http=http, navigate=navigations.append)
