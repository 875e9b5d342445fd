def test_comment_lifecycle(client, alice, bob, make_post):
    post = make_post(alice)
    url = f"/api/posts/{post['id']}/comments"

    response = client.post(url, json={"content": "first comment"}, headers=bob["headers"])
    assert response.status_code == 201
    comment = response.json()
    assert comment["author"]["username"] == "bob"

    client.post(url, json={"content": "second comment"}, headers=alice["headers"])
    comments = client.get(url).json()
    assert [c["content"] for c in comments] == ["first comment", "second comment"]

    response = client.delete(f"{url}/{comment['id']}", headers=bob["headers"])
    assert response.status_code == 200
    assert [c["content"] for c in client.get(url).json()] == ["second comment"]


def test_comment_notifies_author_with_content(client, alice, bob, make_post):
    post = make_post(alice)
    client.post(f"/api/posts/{post['id']}/comments", json={"content": "great post"}, headers=bob["headers"])

    notifications = client.get("/api/notifications", headers=alice["headers"]).json()
    assert notifications[0]["type"] == "comment"
    assert notifications[0]["content"] == "great post"


def test_post_owner_can_delete_any_comment(client, alice, bob, make_post):
    post = make_post(alice)
    url = f"/api/posts/{post['id']}/comments"
    comment = client.post(url, json={"content": "spam"}, headers=bob["headers"]).json()

    assert client.delete(f"{url}/{comment['id']}", headers=alice["headers"]).status_code == 200


def test_stranger_cannot_delete_comment(client, alice, bob, make_user, make_post):
    carol = make_user("carol")
    post = make_post(alice)
    url = f"/api/posts/{post['id']}/comments"
    comment = client.post(url, json={"content": "hello"}, headers=bob["headers"]).json()

    assert client.delete(f"{url}/{comment['id']}", headers=carol["headers"]).status_code == 403


def test_comments_on_missing_post(client, bob):
    assert client.get("/api/posts/missing/comments").status_code == 404
    response = client.post("/api/posts/missing/comments", json={"content": "x"}, headers=bob["headers"])
    assert response.status_code == 404


def test_delete_missing_comment(client, alice, make_post):
    post = make_post(alice)
    response = client.delete(f"/api/posts/{post['id']}/comments/missing", headers=alice["headers"])
    assert response.status_code == 404


def test_commenting_on_own_post_does_not_notify(client, alice, make_post):
    post = make_post(alice)
    response = client.post(f"/api/posts/{post['id']}/comments", json={"content": "self reply"}, headers=alice["headers"])
    assert response.status_code == 201

    assert client.get("/api/notifications", headers=alice["headers"]).json() == []


def test_blank_comment_is_rejected(client, alice, bob, make_post):
    post = make_post(alice)
    url = f"/api/posts/{post['id']}/comments"
    assert client.post(url, json={"content": "   "}, headers=bob["headers"]).status_code == 422
    assert client.get(url).json() == []
