from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tripplanner.app import app
from tripplanner.users.store import delete_user

client = TestClient(app)


def _register(c, **overrides):
    body = {
        "name": "Asha",
        "email": f"asha-{uuid.uuid4().hex[:8]}@example.com",
        "password": "secret123",
        "dateOfBirth": "1994-05-17",
    }
    body.update(overrides)
    return c.post("/auth/register", json=body)


# ── Register / Login / Logout ────────────────────────────────────────────


def test_register_starts_session():
    c = TestClient(app)
    resp = _register(c)
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Asha"
    assert body["interests"] == []
    assert body["dateOfBirth"] == "1994-05-17"
    assert "createdAt" in body
    assert "password_hash" not in body

    me = c.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["email"] == body["email"]


def test_register_duplicate_email():
    c = TestClient(app)
    email = f"dup-{uuid.uuid4().hex[:8]}@example.com"
    assert _register(c, email=email).status_code == 201
    resp = _register(c, email=email.upper())
    assert resp.status_code == 400
    assert resp.json() == {"message": "User already exists"}


def test_register_rejects_short_password():
    resp = _register(TestClient(app), password="abc")
    assert resp.status_code == 400
    assert "password" in resp.json()["message"]


def test_login_demo_user():
    resp = client.post("/auth/login", json={"email": "demo@example.com", "password": "demo123"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Demo Traveller"


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"email": "demo@example.com", "password": "wrong"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid credentials"}


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 400


def test_login_with_overlong_password():
    resp = client.post("/auth/login", json={"email": "demo@example.com", "password": "x" * 100})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid credentials"}


def test_register_rejects_password_over_72_bytes():
    # 60 characters but 120 bytes once encoded
    resp = _register(TestClient(app), password="\u00e9" * 60)
    assert resp.status_code == 400
    assert "72 bytes" in resp.json()["message"]


def test_me_not_logged_in():
    c = TestClient(app)
    resp = c.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Not authenticated"}


def test_logout():
    c = TestClient(app)
    _register(c)
    resp = c.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    assert c.get("/auth/me").status_code == 401


def test_session_for_deleted_user_is_404():
    c = TestClient(app)
    user_id = _register(c).json()["id"]
    delete_user(user_id)
    resp = c.get("/auth/me")
    assert resp.status_code == 404
    assert resp.json() == {"message": "User not found"}


# ── Interests ────────────────────────────────────────────────────────────


def test_update_interests():
    c = TestClient(app)
    _register(c)
    resp = c.put("/auth/interests", json={"interests": ["Beach", "Sport", "Beach"]})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Interests updated", "interests": ["Beach", "Sports"]}
    assert c.get("/auth/me").json()["interests"] == ["Beach", "Sports"]


def test_update_interests_legacy_path():
    c = TestClient(app)
    _register(c)
    resp = c.put("/auth/update-interests", json={"interests": ["Nightlife"]})
    assert resp.status_code == 200
    assert resp.json()["interests"] == ["Nightlife"]


def test_invalid_interests_leave_profile_unchanged():
    c = TestClient(app)
    _register(c)
    c.put("/auth/interests", json={"interests": ["History"]})
    resp = c.put("/auth/interests", json={"interests": ["History", "Skiing"]})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid interests: Skiing"}
    assert c.get("/auth/me").json()["interests"] == ["History"]


def test_interests_must_be_a_list():
    c = TestClient(app)
    _register(c)
    resp = c.put("/auth/interests", json={"interests": "Beach"})
    assert resp.status_code == 400
    assert "interests" in resp.json()["message"]


def test_interests_require_login():
    resp = TestClient(app).put("/auth/interests", json={"interests": ["Beach"]})
    assert resp.status_code == 401
