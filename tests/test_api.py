"""
HTTP-level tests for the auth, users, friends and chat routers
"""

import pytest
from fastapi.testclient import TestClient

from connect_db import get_db
from core.dependencies import get_chat_service
from core.security import create_access_token
from datetime import timedelta
from main import app
from services.chat_service import ChatService


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, name, email, password="secret-password"):
    """Sign up and log in; returns (user_id, auth headers)."""
    response = client.post("/api/v1/auth/signup", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text

    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    body = response.json()
    return body["user_id"], {"Authorization": f"Bearer {body['access_token']}"}


class TestAuthRoutes:

    def test_signup_and_me(self, client):
        user_id, headers = register(client, "Alice", "alice@example.com")

        response = client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert response.json()["name"] == "Alice"
        assert "hashed_password" not in response.json()

    def test_duplicate_email_conflicts(self, client):
        register(client, "Alice", "alice@example.com")

        response = client.post(
            "/api/v1/auth/signup",
            json={"name": "Other", "email": "alice@example.com", "password": "x"}
        )
        assert response.status_code == 409

    def test_login_rejects_wrong_password(self, client):
        register(client, "Alice", "alice@example.com")

        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "wrong"})
        assert response.status_code == 401

    def test_login_requires_all_fields(self, client):
        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com"})
        assert response.status_code == 400

    def test_missing_token_is_refused(self, client):
        response = client.get("/api/v1/friends/requests")
        assert response.status_code in (401, 403)

    def test_expired_token_is_refused(self, client):
        user_id, _ = register(client, "Alice", "alice@example.com")
        token = create_access_token(user_id, expires_delta=timedelta(seconds=-60))

        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestFriendRoutes:

    def test_request_accept_flow(self, client):
        alice_id, alice_headers = register(client, "Alice", "alice@example.com")
        bob_id, bob_headers = register(client, "Bob", "bob@example.com")

        response = client.post("/api/v1/friends/requests", json={"receiver_id": bob_id}, headers=alice_headers)
        assert response.status_code == 200

        response = client.post("/api/v1/friends/requests", json={"receiver_id": bob_id}, headers=alice_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Friend request already sent"

        response = client.get("/api/v1/friends/requests", headers=bob_headers)
        assert response.json() == [{"id": alice_id, "name": "Alice", "email": "alice@example.com"}]

        response = client.post(f"/api/v1/friends/requests/{alice_id}/accept", headers=bob_headers)
        assert response.status_code == 200

        assert client.get("/api/v1/friends/requests", headers=bob_headers).json() == []
        assert [f["id"] for f in client.get("/api/v1/friends/", headers=bob_headers).json()] == [alice_id]
        assert [f["id"] for f in client.get("/api/v1/friends/", headers=alice_headers).json()] == [bob_id]

        detail = client.get(f"/api/v1/users/{alice_id}", headers=bob_headers).json()
        assert detail["friends"] == [bob_id]
        assert detail["friend_requests"] == []

        response = client.post(f"/api/v1/friends/requests/{alice_id}/accept", headers=bob_headers)
        assert response.status_code == 404

        response = client.post("/api/v1/friends/requests", json={"receiver_id": alice_id}, headers=bob_headers)
        assert response.status_code == 409

    def test_request_to_self_is_bad_request(self, client):
        alice_id, alice_headers = register(client, "Alice", "alice@example.com")

        response = client.post("/api/v1/friends/requests", json={"receiver_id": alice_id}, headers=alice_headers)
        assert response.status_code == 400

    def test_request_to_unknown_user_is_not_found(self, client):
        _, alice_headers = register(client, "Alice", "alice@example.com")

        response = client.post("/api/v1/friends/requests", json={"receiver_id": "nobody"}, headers=alice_headers)
        assert response.status_code == 404

    def test_pending_requests_show_on_user_detail(self, client):
        alice_id, alice_headers = register(client, "Alice", "alice@example.com")
        bob_id, _ = register(client, "Bob", "bob@example.com")

        client.post("/api/v1/friends/requests", json={"receiver_id": bob_id}, headers=alice_headers)

        detail = client.get(f"/api/v1/users/{bob_id}", headers=alice_headers).json()
        assert detail["friend_requests"] == [alice_id]
        assert detail["friends"] == []

    def test_user_listing_and_missing_user(self, client):
        _, alice_headers = register(client, "Alice", "alice@example.com")
        register(client, "Bob", "bob@example.com")

        users = client.get("/api/v1/users/", headers=alice_headers).json()
        assert sorted(user["email"] for user in users) == ["alice@example.com", "bob@example.com"]
        assert all("hashed_password" not in user for user in users)

        assert client.get("/api/v1/users/nobody", headers=alice_headers).status_code == 404


class TestChatRoutes:

    def test_send_and_read_conversation(self, client):
        alice_id, alice_headers = register(client, "Alice", "alice@example.com")
        bob_id, bob_headers = register(client, "Bob", "bob@example.com")

        response = client.post("/api/v1/chat/send", json={"receiver_id": bob_id, "message": "hello"}, headers=alice_headers)
        assert response.status_code == 201
        assert response.json()["sender_id"] == alice_id
        client.post("/api/v1/chat/send", json={"receiver_id": alice_id, "message": "hi"}, headers=bob_headers)

        from_alice = client.get(f"/api/v1/chat/{bob_id}", headers=alice_headers).json()
        from_bob = client.get(f"/api/v1/chat/{alice_id}", headers=bob_headers).json()
        assert [m["text"] for m in from_alice] == ["hello", "hi"]
        assert from_alice == from_bob

    def test_empty_message_is_bad_request(self, client):
        _, alice_headers = register(client, "Alice", "alice@example.com")
        bob_id, _ = register(client, "Bob", "bob@example.com")

        response = client.post("/api/v1/chat/send", json={"receiver_id": bob_id, "message": ""}, headers=alice_headers)
        assert response.status_code == 400
        response = client.post("/api/v1/chat/send", json={"receiver_id": bob_id}, headers=alice_headers)
        assert response.status_code == 400

    def test_friendship_requirement_forbids_strangers(self, client, session_factory):
        def strict_chat_service():
            db = session_factory()
            try:
                yield ChatService(db, require_friendship=True)
            finally:
                db.close()

        app.dependency_overrides[get_chat_service] = strict_chat_service
        _, alice_headers = register(client, "Alice", "alice@example.com")
        bob_id, _ = register(client, "Bob", "bob@example.com")

        response = client.post("/api/v1/chat/send", json={"receiver_id": bob_id, "message": "hey"}, headers=alice_headers)
        assert response.status_code == 403


class TestHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
