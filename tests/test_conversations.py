def _send(ws, conversation_id, sender_id, content, ack=1):
    ws.send_json({"event": "send_message", "ack": ack, "data": {
        "conversation_id": conversation_id,
        "sender_id": sender_id,
        "content": content,
    }})
    while True:
        frame = ws.receive_json()
        if frame["event"] == "ack":
            return frame["data"]


def _start(client, user, other):
    response = client.post("/api/users/conversations", json={"user_id": other["id"]}, headers=user["headers"])
    assert response.status_code == 200, response.text
    return response.json()


def test_start_conversation_is_idempotent_in_either_order(client, alice, bob):
    conversation = _start(client, alice, bob)
    assert {conversation["user1_id"], conversation["user2_id"]} == {alice["id"], bob["id"]}
    assert conversation["user2"]["username"] == "bob"

    assert _start(client, alice, bob)["id"] == conversation["id"]
    assert _start(client, bob, alice)["id"] == conversation["id"]


def test_start_conversation_with_unknown_user_or_self(client, alice):
    response = client.post("/api/users/conversations", json={"user_id": "nobody"}, headers=alice["headers"])
    assert response.status_code == 404
    response = client.post("/api/users/conversations", json={"user_id": alice["id"]}, headers=alice["headers"])
    assert response.status_code == 400


def test_messages_and_read_state(client, alice, bob):
    conversation = _start(client, alice, bob)
    with client.websocket_connect("/ws") as ws:
        for text in ("hi bob", "are you there?"):
            _send(ws, conversation["id"], alice["id"], text)

    messages = client.get(
        f"/api/users/conversations/{conversation['id']}/messages", headers=bob["headers"]
    ).json()
    assert [m["content"] for m in messages] == ["hi bob", "are you there?"]

    summaries = client.get("/api/users/conversations", headers=bob["headers"]).json()
    assert summaries[0]["unread_count"] == 2
    assert summaries[0]["last_message"]["content"] == "are you there?"
    assert client.get("/api/notifications/unread-count", headers=bob["headers"]).json() == {"count": 2}

    response = client.put(f"/api/users/conversations/{conversation['id']}/read", headers=bob["headers"])
    assert response.json() == {"message": "Conversation marked as read", "count": 2}

    summaries = client.get("/api/users/conversations", headers=bob["headers"]).json()
    assert summaries[0]["unread_count"] == 0
    assert client.get("/api/notifications/unread-count", headers=bob["headers"]).json() == {"count": 0}

    # The sender's own messages never count as unread for them
    assert client.get("/api/users/conversations", headers=alice["headers"]).json()[0]["unread_count"] == 0


def test_conversations_sorted_by_activity(client, alice, bob, make_user):
    carol = make_user("carol")
    with_bob = _start(client, alice, bob)
    with_carol = _start(client, alice, carol)
    assert [c["id"] for c in client.get("/api/users/conversations", headers=alice["headers"]).json()] == [
        with_carol["id"], with_bob["id"],
    ]

    with client.websocket_connect("/ws") as ws:
        _send(ws, with_bob["id"], bob["id"], "bump")

    assert [c["id"] for c in client.get("/api/users/conversations", headers=alice["headers"]).json()] == [
        with_bob["id"], with_carol["id"],
    ]


def test_outsider_cannot_read_messages(client, alice, bob, make_user):
    carol = make_user("carol")
    conversation = _start(client, alice, bob)

    url = f"/api/users/conversations/{conversation['id']}"
    assert client.get(f"{url}/messages", headers=carol["headers"]).status_code == 403
    assert client.put(f"{url}/read", headers=carol["headers"]).status_code == 403
    assert client.get("/api/users/conversations/missing/messages", headers=carol["headers"]).status_code == 404
