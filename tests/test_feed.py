import uuid
from datetime import datetime

from threadline.modules.posts.reposts.models.repost import Repost


def test_feed_merges_posts_and_reposts_newest_first(client, alice, bob, make_post):
    first = make_post(alice, "first")
    make_post(bob, "second")
    client.post(f"/api/posts/{first['id']}/repost", headers=bob["headers"])

    feed = client.get("/api/feed").json()
    assert [item["type"] for item in feed] == ["repost", "post", "post"]

    repost = feed[0]["data"]
    assert repost["reposter"]["username"] == "bob"
    assert repost["original_post"]["content"] == "first"
    assert repost["original_post"]["author"]["username"] == "alice"
    assert [item["data"].get("content") for item in feed[1:]] == ["second", "first"]


def test_feed_drops_orphaned_reposts(client, db, alice, bob, make_post):
    make_post(alice, "still here")
    db.add(Repost(
        id=str(uuid.uuid4()),
        reposter_id=bob["id"],
        original_post_id="gone",
        created_at=datetime.utcnow(),
    ))
    db.commit()

    feed = client.get("/api/feed").json()
    assert [item["type"] for item in feed] == ["post"]


def test_following_feed(client, alice, bob, make_user, make_post):
    carol = make_user("carol")
    carol_post = make_post(carol, "carol's post")
    make_post(bob, "bob's post")
    client.post(f"/api/posts/{carol_post['id']}/repost", headers=bob["headers"])
    client.post(f"/api/auth/follow/{bob['id']}", headers=alice["headers"])

    feed = client.get("/api/feed/following", headers=alice["headers"]).json()
    assert [item["type"] for item in feed] == ["repost", "post"]
    assert feed[0]["data"]["original_post"]["content"] == "carol's post"
    assert feed[1]["data"]["content"] == "bob's post"


def test_following_feed_requires_auth(client):
    assert client.get("/api/feed/following").status_code == 401


def test_user_feed(client, alice, bob, make_post):
    bob_post = make_post(bob, "bob's post")
    make_post(alice, "alice's post")
    client.post(f"/api/posts/{bob_post['id']}/repost", headers=alice["headers"])

    feed = client.get(f"/api/feed/users/{alice['id']}").json()
    assert [item["type"] for item in feed] == ["repost", "post"]
    assert client.get("/api/feed/users/nobody").status_code == 404


def test_empty_feed(client):
    assert client.get("/api/feed").json() == []


def test_deleted_post_leaves_the_feed(client, alice, bob, make_post):
    post = make_post(alice, "short-lived")
    client.post(f"/api/posts/{post['id']}/repost", headers=bob["headers"])
    assert len(client.get("/api/feed").json()) == 2

    client.delete(f"/api/posts/{post['id']}", headers=alice["headers"])

    assert client.get("/api/feed").json() == []
    assert client.get("/api/posts").json() == []
