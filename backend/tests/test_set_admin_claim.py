from types import SimpleNamespace

import pytest
from firebase_admin import auth

import set_admin_claim as script


@pytest.fixture()
def fake_users(monkeypatch):
    users = {"ops@example.com": SimpleNamespace(uid="u-ops", email="ops@example.com", custom_claims={"tier": "gold"})}
    written = {}

    def get_user_by_email(email):
        if email not in users:
            raise auth.UserNotFoundError(f"No user record found for the provided email: {email}")
        return users[email]

    monkeypatch.setattr(script, "init_firebase", lambda: None)
    monkeypatch.setattr(auth, "get_user_by_email", get_user_by_email)
    monkeypatch.setattr(auth, "set_custom_user_claims", lambda uid, claims: written.__setitem__(uid, claims))
    return written


def test_grant_keeps_other_claims(fake_users):
    assert script.set_admin_claim("ops@example.com")
    assert fake_users["u-ops"] == {"tier": "gold", "admin": True}


def test_revoke(fake_users):
    assert script.set_admin_claim("ops@example.com", admin=False)
    assert fake_users["u-ops"] == {"tier": "gold"}


def test_unknown_email(fake_users):
    assert not script.set_admin_claim("nobody@example.com")
    assert fake_users == {}
