from __future__ import annotations

import json

import pytest

from pic2speak_admin.errors import ApiError
from pic2speak_admin.session import SessionState, SessionStore
from pic2speak_admin.storage import CredentialVault


def test_starts_unauthenticated_without_stored_credential(vault):
    store = SessionStore(vault)

    assert store.state is SessionState.UNAUTHENTICATED
    assert store.token is None


def test_stored_credential_is_trusted_until_rejected(vault):
    vault.save("maybe-stale")

    store = SessionStore(vault)

    assert store.is_authenticated
    assert store.token == "maybe-stale"
    assert store.admin is None


def test_login_stores_identity_and_persists_token(gateway, http, session_store, vault):
    http.reply(
        "POST",
        "/admin/login",
        200,
        {"admin": {"name": "Priya", "email": "priya@example.com"}, "token": "tok-9"},
    )

    admin = session_store.login(gateway, "priya@example.com", "pw")

    assert admin.name == "Priya"
    assert session_store.is_authenticated
    assert session_store.loading is False
    assert vault.load() == "tok-9"
    assert SessionStore(vault).is_authenticated


def test_failed_login_sets_error_and_stays_signed_out(gateway, http, session_store, vault):
    http.reply("POST", "/admin/login", 400, {"message": "Invalid credentials"})

    with pytest.raises(ApiError):
        session_store.login(gateway, "x@example.com", "bad")

    assert session_store.error == "Invalid credentials"
    assert session_store.loading is False
    assert session_store.state is SessionState.UNAUTHENTICATED
    assert vault.load() is None

    session_store.clear_error()
    assert session_store.error is None


def test_logout_clears_persisted_token(vault):
    vault.save("tok")
    store = SessionStore(vault)

    store.logout()

    assert store.state is SessionState.UNAUTHENTICATED
    assert vault.load() is None


def test_token_slot_leaves_other_keys_alone(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"token": "learner-app"}), encoding="utf-8")
    vault = CredentialVault(path)

    vault.save("admin")
    vault.clear()

    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "learner-app"}


def test_unreadable_credential_file_counts_as_signed_out(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert SessionStore(CredentialVault(path)).state is SessionState.UNAUTHENTICATED


def test_registration_request_marks_otp_sent(gateway, http, session_store):
    http.reply("POST", "/admin/register-request", 200, {"success": True})

    session_store.request_registration(gateway, "new@example.com", "pw", "secret")

    assert session_store.otp_sent is True
    assert http.calls[0]["json"]["adminSecretKey"] == "secret"
