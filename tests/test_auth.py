"""Tests for signup, login, logout and the current-user endpoint."""

from quizapp.core.config import settings
from quizapp.models import User, UserSession

SIGNUP = {
    "name": "alice",
    "fullname": "Alice Liddell",
    "email": "alice@example.com",
    "password": "wonderland",
}


class TestSignup:
    def test_signup_signs_in(self, client, db):
        resp = client.post("/signup", json=SIGNUP)

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] == "Registration successful."
        user = db.get(User, data["userId"])
        assert user.username == "alice"
        assert user.hashed_password != "wonderland"
        assert settings.SESSION_COOKIE_NAME in resp.cookies

    def test_registration_message_shown_once(self, client, db):
        client.post("/signup", json=SIGNUP)

        first = client.get("/currentUser").json()
        assert first["user"]["username"] == "alice"
        assert first["messages"] == [{"category": "success", "message": "Registration successful."}]

        second = client.get("/currentUser").json()
        assert second["messages"] == []

    def test_duplicate_username(self, client, db):
        client.post("/signup", json=SIGNUP)

        resp = client.post("/signup", json={**SIGNUP, "email": "other@example.com"})

        assert resp.status_code == 400
        assert "username" in resp.json()["error"]
        assert db.query(User).count() == 1

    def test_invalid_email(self, client, db):
        resp = client.post("/signup", json={**SIGNUP, "email": "not-an-email"})
        assert resp.status_code == 400


class TestLogin:
    def test_login(self, client, db, make_user):
        user = make_user("bob", password="builder")

        resp = client.post("/login", json={"username": "bob", "password": "builder"})

        assert resp.status_code == 200
        assert resp.json() == {"success": "Login successful.", "userId": user.id}
        assert client.get("/currentUser").json()["user"]["id"] == user.id

    def test_wrong_password(self, client, db, make_user):
        make_user("bob", password="builder")

        resp = client.post("/login", json={"username": "bob", "password": "nope"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid credentials."}

    def test_unknown_user(self, client, db):
        resp = client.post("/login", json={"username": "ghost", "password": "x"})
        assert resp.status_code == 401


class TestLogout:
    def test_logout_ends_session(self, client, db):
        client.post("/signup", json=SIGNUP)

        resp = client.get("/logout", follow_redirects=False)

        assert resp.status_code == 302
        assert resp.headers["location"] == f"{settings.FRONTEND_HOST}/"
        assert db.query(UserSession).count() == 0

    def test_current_user_requires_session(self, client, db):
        resp = client.get("/currentUser")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Not authenticated"}


class TestUserDetails:
    def test_details_populated(self, client, db, make_user, sample_quiz_payload):
        alice, bob = make_user("alice"), make_user("bob")
        client.post(f"/createQuiz/{alice.id}", json=sample_quiz_payload)
        client.post("/acceptFriendRequest", json={"userId": alice.id, "friendId": bob.id})
        client.post("/sendFriendRequestByUsername", json={"senderId": make_user("carol").id, "username": "alice"})

        resp = client.get(f"/getUserDetails/{alice.id}")

        assert resp.status_code == 200
        data = resp.json()
        assert [q["title"] for q in data["quizzes"]] == ["Capitals"]
        assert [f["username"] for f in data["friends"]] == ["bob"]
        assert [r["username"] for r in data["friendRequests"]] == ["carol"]
        assert data["xp"] == 2
        assert data["averageScore"] == 0.0

    def test_unknown_user(self, client, db):
        resp = client.get("/getUserDetails/404")
        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found"}
