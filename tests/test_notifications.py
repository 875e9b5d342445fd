def _like(client, user, post):
    return client.post(f"/api/posts/{post['id']}/like", headers=user["headers"])


def test_notifications_newest_first(client, alice, bob, make_post):
    post = make_post(alice)
    _like(client, bob, post)
    client.post(f"/api/posts/{post['id']}/comments", json={"content": "wow"}, headers=bob["headers"])

    notifications = client.get("/api/notifications", headers=alice["headers"]).json()
    assert [n["type"] for n in notifications] == ["comment", "like"]
    assert notifications[0]["sender"]["id"] == bob["id"]
    assert notifications[0]["read"] is False


def test_notifications_are_capped(client, alice, bob, make_post):
    post = make_post(alice)
    for _ in range(26):
        _like(client, bob, post)
        _like(client, bob, post)

    notifications = client.get("/api/notifications", headers=alice["headers"]).json()
    assert len(notifications) == 26
    for _ in range(25):
        _like(client, bob, post)
        _like(client, bob, post)
    assert len(client.get("/api/notifications", headers=alice["headers"]).json()) == 50


def test_unread_count_and_mark_read(client, alice, bob, make_post):
    post = make_post(alice)
    _like(client, bob, post)
    client.post(f"/api/auth/follow/{alice['id']}", headers=bob["headers"])

    assert client.get("/api/notifications/unread-count", headers=alice["headers"]).json() == {"count": 2}

    notification = client.get("/api/notifications", headers=alice["headers"]).json()[0]
    response = client.put(f"/api/notifications/{notification['id']}/read", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["read"] is True
    assert client.get("/api/notifications/unread-count", headers=alice["headers"]).json() == {"count": 1}

    response = client.put("/api/notifications/read-all", headers=alice["headers"])
    assert response.json() == {"message": "All notifications marked as read", "count": 1}
    assert client.get("/api/notifications/unread-count", headers=alice["headers"]).json() == {"count": 0}


def test_cannot_read_someone_elses_notification(client, alice, bob, make_post):
    post = make_post(alice)
    _like(client, bob, post)
    notification = client.get("/api/notifications", headers=alice["headers"]).json()[0]

    response = client.put(f"/api/notifications/{notification['id']}/read", headers=bob["headers"])
    assert response.status_code == 404
    assert client.put("/api/notifications/missing/read", headers=alice["headers"]).status_code == 404


def test_notifications_require_auth(client):
    assert client.get("/api/notifications").status_code == 401
