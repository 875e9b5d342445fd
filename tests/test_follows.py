def test_follow_and_unfollow(client, alice, bob):
    response = client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])
    assert response.status_code == 200

    following = client.get("/api/auth/following", headers=alice["headers"]).json()
    assert [user["id"] for user in following] == [bob["id"]]

    profile = client.get(f"/api/users/{bob['id']}").json()
    assert profile["followers_count"] == 1
    assert profile["following_count"] == 0

    followers = client.get(f"/api/users/{bob['id']}/followers").json()
    assert [user["username"] for user in followers] == ["alice"]

    response = client.post(f"/api/auth/unfollow/{bob['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert client.get("/api/auth/following", headers=alice["headers"]).json() == []


def test_follow_twice_keeps_one_edge(client, alice, bob):
    client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])
    client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])

    assert client.get(f"/api/users/{bob['id']}").json()["followers_count"] == 1
    notifications = client.get("/api/notifications", headers=bob["headers"]).json()
    assert [n["type"] for n in notifications] == ["follow"]


def test_cannot_follow_self(client, alice):
    response = client.post(f"/api/auth/follow/{alice['id']}", headers=alice["headers"])
    assert response.status_code == 400


def test_follow_unknown_user(client, alice):
    response = client.post("/api/auth/follow/nobody", headers=alice["headers"])
    assert response.status_code == 404
    assert client.post("/api/auth/unfollow/nobody", headers=alice["headers"]).status_code == 404


def test_follow_creates_notification(client, alice, bob):
    client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])

    notifications = client.get("/api/notifications", headers=bob["headers"]).json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "follow"
    assert notifications[0]["sender"]["username"] == "alice"
    assert notifications[0]["post"] is None
