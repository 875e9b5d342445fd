import os
import tempfile

# Settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["UPLOAD_DIRECTORY"] = tempfile.mkdtemp(prefix="threadline-uploads-")
os.environ["S3_ENDPOINT"] = ""
os.environ["S3_ACCESS_KEY_ID"] = ""
os.environ["S3_SECRET_ACCESS_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from threadline.db.base import Base
from threadline.db.session import engine, SessionLocal
from threadline.main import app


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Register and log in a user, returning its id, token and auth headers"""
    def _make_user(username: str, password: str = "secret123", bio: str = ""):
        response = client.post("/api/auth/register", json={
            "username": username,
            "email": f"{username}@threads.io",
            "password": password,
            "bio": bio,
        })
        assert response.status_code == 201, response.text

        response = client.post("/api/auth/login", json={
            "email": f"{username}@threads.io",
            "password": password,
        })
        assert response.status_code == 200, response.text
        body = response.json()
        return {
            "id": body["user"]["id"],
            "username": username,
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("alice", bio="coffee and code")


@pytest.fixture
def bob(make_user):
    return make_user("bob", bio="hiking")


@pytest.fixture
def make_post(client):
    def _make_post(user, content: str = "hello threads"):
        response = client.post("/api/posts", json={"content": content}, headers=user["headers"])
        assert response.status_code == 201, response.text
        return response.json()
    return _make_post
