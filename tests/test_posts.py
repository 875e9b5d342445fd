from threadline.modules.posts.comments.models.comment import Comment
from threadline.modules.posts.reposts.models.repost import Repost
from threadline.modules.notifications.models.notification import Notification


def test_create_post(client, alice):
    response = client.post("/api/posts", json={"content": "first!"}, headers=alice["headers"])
    assert response.status_code == 201
    post = response.json()
    assert post["content"] == "first!"
    assert post["author_id"] == alice["id"]
    assert post["likes"] == []


def test_create_post_requires_auth_and_content(client, alice):
    assert client.post("/api/posts", json={"content": "hi"}).status_code == 401
    assert client.post("/api/posts", json={"content": "   "}, headers=alice["headers"]).status_code == 422
    assert client.post("/api/posts", json={}, headers=alice["headers"]).status_code == 422


def test_list_posts_newest_first_with_author(client, alice, bob, make_post):
    make_post(alice, "older")
    make_post(bob, "newer")

    posts = client.get("/api/posts").json()
    assert [post["content"] for post in posts] == ["newer", "older"]
    assert posts[0]["author"]["username"] == "bob"
    assert posts[0]["reposts"] == []


def test_following_posts(client, alice, bob, make_user, make_post):
    carol = make_user("carol")
    make_post(bob, "from bob")
    make_post(carol, "from carol")
    client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])

    posts = client.get("/api/posts/following", headers=alice["headers"]).json()
    assert [post["content"] for post in posts] == ["from bob"]


def test_get_post_by_id(client, alice, make_post):
    post = make_post(alice)
    response = client.get(f"/api/posts/{post['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == post["id"]

    assert client.get("/api/posts/missing").status_code == 404


def test_like_toggle(client, alice, bob, make_post):
    post = make_post(alice)

    response = client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])
    assert response.status_code == 200
    body = response.json()
    assert body["liked"] is True
    assert body["likes_count"] == 1
    assert body["post"]["likes"] == [bob["id"]]

    body = client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"]).json()
    assert body["liked"] is False
    assert body["likes_count"] == 0
    assert body["post"]["likes"] == []


def test_like_notifies_author_once_per_like(client, alice, bob, make_post):
    post = make_post(alice)
    client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])
    client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])

    notifications = client.get("/api/notifications", headers=alice["headers"]).json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "like"
    assert notifications[0]["post"] == {"id": post["id"], "content": post["content"]}


def test_liking_own_post_does_not_notify(client, alice, make_post):
    post = make_post(alice)
    body = client.post(f"/api/posts/{post['id']}/like", headers=alice["headers"]).json()
    assert body["liked"] is True

    assert client.get("/api/notifications", headers=alice["headers"]).json() == []


def test_like_missing_post(client, alice):
    assert client.post("/api/posts/missing/like", headers=alice["headers"]).status_code == 404


def test_only_author_can_delete(client, alice, bob, make_post):
    post = make_post(alice)

    response = client.delete(f"/api/posts/{post['id']}", headers=bob["headers"])
    assert response.status_code == 403

    response = client.delete(f"/api/posts/{post['id']}", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully"}
    assert client.get(f"/api/posts/{post['id']}").status_code == 404


def test_delete_post_removes_dependents(client, db, alice, bob, make_post):
    post = make_post(alice)
    client.post(f"/api/posts/{post['id']}/comments", json={"content": "nice"}, headers=bob["headers"])
    client.post(f"/api/posts/{post['id']}/repost", headers=bob["headers"])
    client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])

    client.delete(f"/api/posts/{post['id']}", headers=alice["headers"])

    assert db.query(Comment).filter(Comment.post_id == post["id"]).count() == 0
    assert db.query(Repost).filter(Repost.original_post_id == post["id"]).count() == 0
    assert db.query(Notification).filter(Notification.post_id == post["id"]).count() == 0
