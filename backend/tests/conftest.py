import itertools
import os
from types import SimpleNamespace

# Settings are read at import time: point them at in-memory sqlite first
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SESSION_SECRET"] = "test-session-secret-that-is-long-enough-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from goalslayer.db import Base, SessionLocal, engine  # noqa: E402
from goalslayer.main import app  # noqa: E402
from goalslayer.services.catalog import seed_catalog  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_catalog(session)
    finally:
        session.close()
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register a user and return its id, token and auth headers."""
    counter = itertools.count(1)

    def _make(first_name=None, email=None, password="password123"):
        n = next(counter)
        email = email or f"user{n}@example.com"
        r = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "firstName": first_name or f"User{n}"},
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return SimpleNamespace(
            id=body["user"]["id"],
            email=email,
            token=body["token"],
            headers={"Authorization": f"Bearer {body['token']}"},
        )

    return _make


@pytest.fixture
def pick_goal_ids(client):
    """First two goals of every category: a valid weekly selection."""

    def _pick(user):
        ids = []
        for category in client.get("/api/categories", headers=user.headers).json():
            goals = client.get(f"/api/categories/{category['id']}/goals", headers=user.headers).json()
            ids.extend(g["id"] for g in goals[:2])
        return ids

    return _pick


@pytest.fixture
def select_week(client, pick_goal_ids):
    def _select(user):
        r = client.post(
            "/api/user/select-goals", json={"goalIds": pick_goal_ids(user)}, headers=user.headers
        )
        assert r.status_code == 200, r.text
        return r.json()

    return _select


@pytest.fixture
def complete_categories(client):
    """Complete both goals in the first `n` categories of a selection."""

    def _complete(user, selection, n):
        names = []
        for ug in selection:
            name = ug["goal"]["category"]["name"]
            if name not in names:
                names.append(name)
        chosen = set(names[:n])
        for ug in selection:
            if ug["goal"]["category"]["name"] in chosen:
                r = client.patch(f"/api/user-goals/{ug['id']}/complete", headers=user.headers)
                assert r.status_code == 200, r.text
        return sorted(chosen)

    return _complete
