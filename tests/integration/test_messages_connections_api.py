from placement_hub.db.mongodb import get_collection


def test_send_and_read_thread(client, student, recruiter) -> None:
    resp = client.post(
        "/api/messages/send",
        json={"recipient_id": recruiter["id"], "content": "Is the role remote?"},
        headers=student["headers"],
    )
    assert resp.status_code == 201
    assert resp.json()["message_data"]["is_mine"] is True

    client.post(
        "/api/messages/send",
        json={"recipient_id": student["id"], "content": "Hybrid, two days on site."},
        headers=recruiter["headers"],
    )
    client.post(
        "/api/messages/send",
        json={"recipient_id": recruiter["id"], "content": "Thanks!"},
        headers=student["headers"],
    )

    assert client.get("/api/messages/unread/count", headers=recruiter["headers"]).json()["count"] == 2

    conversations = client.get("/api/messages/conversations", headers=recruiter["headers"]).json()["conversations"]
    assert len(conversations) == 1
    assert conversations[0]["with_user_id"] == student["id"]
    assert conversations[0]["with_user"]["user_id"] == "alice"
    assert conversations[0]["last_message"]["content"] == "Thanks!"
    assert conversations[0]["unread_count"] == 2

    history = client.get(f"/api/messages/history/{student['id']}", headers=recruiter["headers"]).json()["messages"]
    assert [m["content"] for m in history] == ["Is the role remote?", "Hybrid, two days on site.", "Thanks!"]
    assert [m["is_mine"] for m in history] == [False, True, False]
    assert client.get("/api/messages/unread/count", headers=recruiter["headers"]).json()["count"] == 0

    kinds = [n["kind"] for n in client.get("/api/notifications", headers=recruiter["headers"]).json()["notifications"]]
    assert kinds == ["message", "message"]


def test_cannot_message_self_or_nobody(client, student) -> None:
    resp = client.post(
        "/api/messages/send",
        json={"recipient_id": student["id"], "content": "note to self"},
        headers=student["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "You cannot message yourself"

    resp = client.post(
        "/api/messages/send",
        json={"recipient_id": "64b000000000000000000000", "content": "hello?"},
        headers=student["headers"],
    )
    assert resp.status_code == 404


def test_connection_is_symmetric(client, student, other_student) -> None:
    resp = client.post("/api/connections", json={"user_id": other_student["id"]}, headers=student["headers"])
    assert resp.status_code == 201
    assert resp.json()["with_user"]["user_id"] == "bilal"

    resp = client.post("/api/connections", json={"user_id": student["id"]}, headers=other_student["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Already connected"

    for who, other in ((student, other_student), (other_student, student)):
        status = client.get(f"/api/connections/status/{other['id']}", headers=who["headers"]).json()
        assert status["connected"] is True
        users = client.get("/api/connections", headers=who["headers"]).json()["users"]
        assert [u["id"] for u in users] == [other["id"]]

    kinds = [n["kind"] for n in client.get("/api/notifications", headers=other_student["headers"]).json()["notifications"]]
    assert kinds == ["connection"]


def test_disconnect(client, student, other_student) -> None:
    client.post("/api/connections", json={"user_id": other_student["id"]}, headers=student["headers"])

    resp = client.delete(f"/api/connections/{student['id']}", headers=other_student["headers"])
    assert resp.status_code == 200
    assert client.get("/api/connections", headers=student["headers"]).json()["users"] == []

    resp = client.delete(f"/api/connections/{other_student['id']}", headers=student["headers"])
    assert resp.status_code == 404
    assert resp.json()["error"] == "Connection not found"


def test_cannot_connect_with_self(client, student) -> None:
    resp = client.post("/api/connections", json={"user_id": student["id"]}, headers=student["headers"])
    assert resp.status_code == 400


def test_failed_message_notification_leaves_no_message(client, student, recruiter, break_notifications) -> None:
    break_notifications()
    resp = client.post(
        "/api/messages/send",
        json={"recipient_id": recruiter["id"], "content": "Is the role remote?"},
        headers=student["headers"],
    )
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}
    assert get_collection("messages").count_documents({}) == 0


def test_failed_connection_notification_can_be_retried(client, student, other_student, break_notifications) -> None:
    break_notifications()
    resp = client.post("/api/connections", json={"user_id": other_student["id"]}, headers=student["headers"])
    assert resp.status_code == 500
    assert get_collection("connections").count_documents({}) == 0

    break_notifications(broken=False)
    resp = client.post("/api/connections", json={"user_id": other_student["id"]}, headers=student["headers"])
    assert resp.status_code == 201
