def test_repost_toggle(client, alice, bob, make_post):
    post = make_post(alice)
    url = f"/api/posts/{post['id']}/repost"

    response = client.post(url, headers=bob["headers"])
    assert response.status_code == 200
    assert response.json() == {"message": "Post reposted", "reposted": True}
    assert client.get(f"{url}/check", headers=bob["headers"]).json() == {"reposted": True}
    assert client.get(f"{url}/count").json() == {"count": 1}

    response = client.post(url, headers=bob["headers"])
    assert response.json() == {"message": "Repost removed", "reposted": False}
    assert client.get(f"{url}/check", headers=bob["headers"]).json() == {"reposted": False}
    assert client.get(f"{url}/count").json() == {"count": 0}


def test_repost_appears_on_post(client, alice, bob, make_post):
    post = make_post(alice)
    client.post(f"/api/posts/{post['id']}/repost", headers=bob["headers"])

    posts = client.get("/api/posts").json()
    assert len(posts[0]["reposts"]) == 1
    assert posts[0]["reposts"][0]["reposter"]["username"] == "bob"


def test_repost_notifies_author(client, alice, bob, make_post):
    post = make_post(alice)
    client.post(f"/api/posts/{post['id']}/repost", headers=bob["headers"])

    notifications = client.get("/api/notifications", headers=alice["headers"]).json()
    assert [n["type"] for n in notifications] == ["repost"]


def test_repost_missing_post(client, bob):
    assert client.post("/api/posts/missing/repost", headers=bob["headers"]).status_code == 404


def test_repost_count_per_post(client, alice, bob, make_user, make_post):
    carol = make_user("carol")
    post = make_post(alice)
    other = make_post(alice, "other")
    client.post(f"/api/posts/{post['id']}/repost", headers=bob["headers"])
    client.post(f"/api/posts/{post['id']}/repost", headers=carol["headers"])

    assert client.get(f"/api/posts/{post['id']}/repost/count").json() == {"count": 2}
    assert client.get(f"/api/posts/{other['id']}/repost/count").json() == {"count": 0}


def test_reposting_own_post_does_not_notify(client, alice, make_post):
    post = make_post(alice)
    response = client.post(f"/api/posts/{post['id']}/repost", headers=alice["headers"])
    assert response.json()["reposted"] is True

    assert client.get("/api/notifications", headers=alice["headers"]).json() == []
