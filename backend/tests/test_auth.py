import pytest

from goalslayer.core.security import TokenBlacklist, create_access_token, decode_access_token


def test_register_returns_user_and_token(client):
    r = client.post(
        "/api/auth/register",
        json={"email": "Sam@Example.com", "password": "password123", "firstName": "Sam"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["token"]
    assert body["user"]["email"] == "sam@example.com"
    assert body["user"]["firstName"] == "Sam"
    assert "passwordHash" not in body["user"]
    assert "password_hash" not in body["user"]


def test_register_duplicate_email(client, make_user):
    make_user(email="taken@example.com")
    r = client.post("/api/auth/register", json={"email": "taken@example.com", "password": "password123"})
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists with this email"


def test_register_validation_is_400(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})
    assert r.status_code == 400
    messages = r.json()["message"]
    assert isinstance(messages, list)
    assert len(messages) == 2


@pytest.mark.parametrize("email", ["a@b.c@d", "a@.com", "a@b.", "a@b..c", "no-at-sign.com", "two words@example.com"])
def test_register_rejects_malformed_email(client, email):
    r = client.post("/api/auth/register", json={"email": email, "password": "password123"})
    assert r.status_code == 400, r.text
    assert any(m.startswith("email") for m in r.json()["message"])


def test_login(client, make_user):
    make_user(email="login@example.com", password="correct-horse")

    bad = client.post("/api/auth/login", json={"email": "login@example.com", "password": "nope-nope"})
    assert bad.status_code == 401
    assert bad.json()["message"] == "Invalid email or password"

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert unknown.status_code == 401

    ok = client.post("/api/auth/login", json={"email": "LOGIN@example.com", "password": "correct-horse"})
    assert ok.status_code == 200
    token = ok.json()["token"]
    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "login@example.com"


def test_logout_revokes_token(client, make_user):
    user = make_user()
    assert client.get("/api/auth/user", headers=user.headers).status_code == 200

    r = client.post("/api/auth/logout", headers=user.headers)
    assert r.status_code == 204

    r = client.get("/api/auth/user", headers=user.headers)
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_expired_and_forged_tokens_rejected(client, make_user):
    user = make_user()
    expired = create_access_token(user.id, expires_minutes=-1)
    r = client.get("/api/auth/user", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401

    r = client.get("/api/auth/user", headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 401


def test_token_for_deleted_user_rejected(client):
    token = create_access_token("00000000-0000-0000-0000-000000000000")
    r = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_carries_user_id():
    token = create_access_token("abc")
    assert decode_access_token(token) == "abc"


def test_blacklist_clears_past_threshold():
    bl = TokenBlacklist(max_size=3)
    for t in ("a", "b", "c"):
        bl.add(t)
    assert "a" in bl and len(bl) == 3
    bl.add("d")
    assert len(bl) == 0
    assert "a" not in bl
