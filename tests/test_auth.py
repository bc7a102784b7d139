from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from core.auth import AuthGate
from core.errors import InvalidCredential, InvalidCredentials, MissingCredential

from conftest import ADMIN_PASSWORD


@pytest.fixture
def gate(store):
    store.seed_admin_if_absent("pw")
    return AuthGate(store, "gate-secret")


def test_login_returns_signed_token(gate):
    token = gate.login("admin", "pw")
    claims = jwt.decode(token, "gate-secret", algorithms=["HS256"])
    assert claims["username"] == "admin"
    assert claims["sub"] == "admin"
    assert claims["exp"] - claims["iat"] == 8 * 60 * 60


def test_wrong_password_and_unknown_user_look_the_same(gate):
    with pytest.raises(InvalidCredentials) as wrong_password:
        gate.login("admin", "nope")
    with pytest.raises(InvalidCredentials) as unknown_user:
        gate.login("ghost", "pw")
    assert wrong_password.value.message == unknown_user.value.message


def test_token_valid_for_eight_hours(gate, store):
    user = store.find_user_by_username("admin")
    now = datetime.now(timezone.utc)

    fresh = gate.issue_token(user, issued_at=now - timedelta(hours=7, minutes=59))
    assert gate.authenticate(f"Bearer {fresh}") == {"id": user.id, "username": "admin"}

    stale = gate.issue_token(user, issued_at=now - timedelta(hours=8, minutes=1))
    with pytest.raises(InvalidCredential):
        gate.authenticate(f"Bearer {stale}")


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header(gate, header):
    with pytest.raises(MissingCredential) as exc:
        gate.authenticate(header)
    assert exc.value.message == "Missing Authorization"


def test_missing_token(gate):
    with pytest.raises(MissingCredential) as exc:
        gate.authenticate("Bearer")
    assert exc.value.message == "Missing token"


def test_token_signed_with_other_secret(gate, store):
    other = AuthGate(store, "someone-else")
    token = other.login("admin", "pw")
    with pytest.raises(InvalidCredential):
        gate.authenticate(f"Bearer {token}")


def test_garbage_token(gate):
    with pytest.raises(InvalidCredential):
        gate.authenticate("Bearer not.a.jwt")


def test_wrong_scheme(gate):
    token = gate.login("admin", "pw")
    with pytest.raises(InvalidCredential):
        gate.authenticate(f"Basic {token}")


# -------------------------------
# HTTP surface
# -------------------------------

def test_login_endpoint(client):
    res = client.post("/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    assert set(res.json()) == {"token"}


@pytest.mark.parametrize("body", [{}, {"username": "admin"}, {"password": "x"}, {"username": "", "password": ""}])
def test_login_missing_fields(client, body):
    res = client.post("/api/auth/login", json=body)
    assert res.status_code == 400
    assert res.json() == {"message": "Missing credentials"}


def test_login_rejections_share_message(client):
    wrong = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    unknown = client.post("/api/auth/login", json={"username": "ghost", "password": "wrong"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"message": "Invalid username or password"}


def test_me_endpoint(client, auth_headers):
    res = client.get("/api/auth/me", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["username"] == "admin"


def test_me_requires_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json() == {"message": "Missing Authorization"}


def test_oversized_password_rejected_like_unknown_user(gate):
    with pytest.raises(InvalidCredentials) as known_user:
        gate.login("admin", "x" * 5000)
    with pytest.raises(InvalidCredentials) as unknown_user:
        gate.login("ghost", "x" * 5000)
    assert known_user.value.message == unknown_user.value.message


def test_login_endpoint_oversized_password(client):
    admin = client.post("/api/auth/login", json={"username": "admin", "password": "x" * 5000})
    ghost = client.post("/api/auth/login", json={"username": "ghost", "password": "x" * 5000})
    assert admin.status_code == ghost.status_code == 401
    assert admin.json() == ghost.json() == {"message": "Invalid username or password"}
