"""
Tests for sign-up, sign-in, session restore and sign-out.
"""
from app.db.models.profile import Profile
from app.db.models.user import User

SIGNUP = {
    "email": "new.student@example.com",
    "password": "testpass123",
    "full_name": "New Student",
    "education_level": "High School",
    "current_gpa": 3.7,
}


def test_signup_creates_user_profile_and_session(client, db_session):
    response = client.post("/auth/signup", json=SIGNUP)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == SIGNUP["email"]
    assert data["access_token"]
    assert data["profile"]["full_name"] == "New Student"
    assert data["profile"]["current_gpa"] == 3.7

    user = db_session.query(User).filter(User.email == SIGNUP["email"]).first()
    assert user is not None
    profile = db_session.query(Profile).filter(Profile.id == user.id).first()
    assert profile.education_level == "High School"


def test_signup_duplicate_email_returns_409(client, test_user):
    payload = dict(SIGNUP, email="student@example.com")
    response = client.post("/auth/signup", json=payload)

    assert response.status_code == 409
    assert "Email already registered" in response.json()["detail"]


def test_signup_validates_password_and_gpa(client):
    assert client.post("/auth/signup", json=dict(SIGNUP, password="12345")).status_code == 422
    assert client.post("/auth/signup", json=dict(SIGNUP, password="a" * 73)).status_code == 422
    assert client.post("/auth/signup", json=dict(SIGNUP, current_gpa=4.5)).status_code == 422


def test_login_success_and_wrong_password(client, test_user):
    ok = client.post(
        "/auth/login",
        data={"username": "student@example.com", "password": "testpass123"},
    )
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"
    assert ok.json()["profile"]["full_name"] == "Test Student"

    bad = client.post(
        "/auth/login",
        data={"username": "student@example.com", "password": "wrongpass"},
    )
    assert bad.status_code == 401


def test_session_restore_returns_identity_and_profile(client, test_user):
    response = client.get("/auth/session", headers=test_user["headers"])

    assert response.status_code == 200
    assert response.json()["email"] == "student@example.com"
    assert response.json()["profile"]["education_level"] == "Bachelor's"


def test_invalid_token_is_rejected(client):
    response = client.get("/auth/session", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_logout_revokes_session(client, test_user):
    assert client.post("/auth/logout", headers=test_user["headers"]).status_code == 200
    assert client.get("/auth/session", headers=test_user["headers"]).status_code == 401


def test_logout_keeps_other_sessions(client, test_user):
    other = client.post(
        "/auth/login",
        data={"username": "student@example.com", "password": "testpass123"},
    ).json()["access_token"]

    client.post("/auth/logout", headers=test_user["headers"])
    response = client.get("/auth/session", headers={"Authorization": f"Bearer {other}"})
    assert response.status_code == 200


def test_update_profile(client, test_user):
    response = client.put(
        "/auth/profile",
        json={"current_gpa": 3.9, "education_level": "Master's"},
        headers=test_user["headers"],
    )

    assert response.status_code == 200
    assert response.json()["current_gpa"] == 3.9
    assert response.json()["full_name"] == "Test Student"


def test_update_profile_rejects_null_full_name(client, test_user, db_session):
    response = client.put("/auth/profile", json={"full_name": None}, headers=test_user["headers"])

    assert response.status_code == 422
    profile = db_session.query(Profile).filter(Profile.id == test_user["user"].id).first()
    assert profile.full_name == "Test Student"

    follow_up = client.put("/auth/profile", json={"current_gpa": 3.1}, headers=test_user["headers"])
    assert follow_up.status_code == 200
    assert follow_up.json()["full_name"] == "Test Student"
