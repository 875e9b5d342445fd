from datetime import timedelta

from threadline.core.security import create_access_token


def test_register_and_login(client):
    response = client.post("/api/auth/register", json={
        "username": "carol",
        "email": "carol@threads.io",
        "password": "pw12345",
    })
    assert response.status_code == 201
    assert response.json() == {"message": "User registered successfully"}

    response = client.post("/api/auth/login", json={"email": "carol@threads.io", "password": "pw12345"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["username"] == "carol"
    assert body["user"]["bio"] == ""
    assert "hashed_password" not in body["user"]


def test_register_duplicate_email_or_username(client, alice):
    response = client.post("/api/auth/register", json={
        "username": "alice",
        "email": "someone@threads.io",
        "password": "pw",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"

    response = client.post("/api/auth/register", json={
        "username": "alice2",
        "email": "alice@threads.io",
        "password": "pw",
    })
    assert response.status_code == 400


def test_register_rejects_invalid_email(client):
    response = client.post("/api/auth/register", json={
        "username": "dave",
        "email": "not-an-email",
        "password": "pw",
    })
    assert response.status_code == 422


def test_login_with_wrong_password(client, alice):
    response = client.post("/api/auth/login", json={"email": "alice@threads.io", "password": "nope"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid credentials"


def test_login_with_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "ghost@threads.io", "password": "pw"})
    assert response.status_code == 400


def test_validate_token(client, alice):
    response = client.get("/api/auth/validate-token", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "user_id": alice["id"],
        "username": "alice",
        "email": "alice@threads.io",
    }


def test_protected_route_requires_token(client):
    assert client.get("/api/auth/validate-token").status_code == 401

    response = client.get("/api/auth/validate-token", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token is not valid"


def test_expired_token_is_rejected(client, alice):
    token = create_access_token(alice["id"], expires_delta=timedelta(seconds=-1))
    response = client.get("/api/auth/validate-token", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_deleted_user(client):
    token = create_access_token("missing-user-id")
    response = client.get("/api/auth/validate-token", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404


def test_responses_carry_process_time(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Welcome to Threadline"
    assert float(response.headers["X-Process-Time"]) >= 0
