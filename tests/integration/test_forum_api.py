from placement_hub.db.mongodb import get_collection
from placement_hub.services.forum_service import ForumService


def _post(client, who: dict, title: str = "Cracking the system design round", **extra) -> dict:
    body = {"title": title, "content": "Start from requirements.", "category": "Interview Tips", **extra}
    resp = client.post("/api/forum/posts", json=body, headers=who["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()["post"]


def test_create_post_defaults(client, student) -> None:
    post = _post(client, student, tags=["design", " design ", "systems"])
    assert post["author_name"] == "Alice Rahman"
    assert post["like_count"] == 0
    assert post["is_liked"] is False
    assert post["view_count"] == 0
    assert post["comment_count"] == 0
    assert post["tags"] == ["design", "systems"]
    assert "liked_by" not in post


def test_unknown_category_is_rejected(client, student) -> None:
    resp = client.post(
        "/api/forum/posts",
        json={"title": "Hi", "content": "x", "category": "Memes"},
        headers=student["headers"],
    )
    assert resp.status_code == 400

    resp = client.get("/api/forum/posts", params={"category": "Memes"}, headers=student["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Unknown category 'Memes'"


def test_delete_post_removes_its_comments(client, student, other_student, recruiter) -> None:
    post = _post(client, student)
    for who in (student, other_student, recruiter):
        resp = client.post(
            f"/api/forum/posts/{post['id']}/comments",
            json={"content": f"Reply from {who['name']}"},
            headers=who["headers"],
        )
        assert resp.status_code == 201
    assert get_collection("comments").count_documents({"post_id": post["id"]}) == 3

    resp = client.delete(f"/api/forum/posts/{post['id']}", headers=student["headers"])
    assert resp.status_code == 200

    assert get_collection("comments").count_documents({"post_id": post["id"]}) == 0
    resp = client.get(f"/api/forum/posts/{post['id']}/comments", headers=student["headers"])
    assert resp.status_code == 404
    assert resp.json()["error"] == "Post not found"


def test_delete_post_without_comments(client, student) -> None:
    post = _post(client, student)
    assert client.delete(f"/api/forum/posts/{post['id']}", headers=student["headers"]).status_code == 200
    assert client.get(f"/api/forum/posts/{post['id']}", headers=student["headers"]).status_code == 404


def test_like_toggle_round_trip(client, student, other_student) -> None:
    post = _post(client, student)
    url = f"/api/forum/posts/{post['id']}/like"

    first = client.post(url, headers=other_student["headers"]).json()
    assert (first["like_count"], first["is_liked"]) == (1, True)

    second = client.post(url, headers=other_student["headers"]).json()
    assert (second["like_count"], second["is_liked"]) == (0, False)

    detail = client.get(f"/api/forum/posts/{post['id']}", headers=other_student["headers"]).json()["post"]
    assert detail["like_count"] == 0
    assert detail["is_liked"] is False


def test_likes_from_different_users_accumulate(client, student, other_student) -> None:
    post = _post(client, student)
    url = f"/api/forum/posts/{post['id']}/like"
    client.post(url, headers=student["headers"])
    resp = client.post(url, headers=other_student["headers"]).json()
    assert resp["like_count"] == 2


def test_like_notifies_author_but_not_self(client, student, other_student) -> None:
    post = _post(client, student)
    client.post(f"/api/forum/posts/{post['id']}/like", headers=student["headers"])
    assert client.get("/api/notifications/unread-count", headers=student["headers"]).json()["count"] == 0

    client.post(f"/api/forum/posts/{post['id']}/like", headers=other_student["headers"])
    notifications = client.get("/api/notifications", headers=student["headers"]).json()["notifications"]
    assert [n["kind"] for n in notifications] == ["like"]


def test_comment_like_and_notification(client, student, other_student) -> None:
    post = _post(client, student)
    comment = client.post(
        f"/api/forum/posts/{post['id']}/comments",
        json={"content": "Great tips"},
        headers=other_student["headers"],
    ).json()["comment"]

    resp = client.post(f"/api/forum/comments/{comment['id']}/like", headers=student["headers"]).json()
    assert resp == {"success": True, "message": None, "like_count": 1, "is_liked": True}

    kinds = [n["kind"] for n in client.get("/api/notifications", headers=other_student["headers"]).json()["notifications"]]
    assert kinds == ["like"]
    kinds = [n["kind"] for n in client.get("/api/notifications", headers=student["headers"]).json()["notifications"]]
    assert kinds == ["comment"]


def test_view_count_counts_every_read(client, student) -> None:
    post = _post(client, student)
    url = f"/api/forum/posts/{post['id']}"
    assert client.get(url, headers=student["headers"]).json()["post"]["view_count"] == 1
    assert client.get(url, headers=student["headers"]).json()["post"]["view_count"] == 2


def test_only_author_edits(client, student, other_student) -> None:
    post = _post(client, student)
    url = f"/api/forum/posts/{post['id']}"

    resp = client.put(url, json={"title": "Hijacked"}, headers=other_student["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"] == "not author"

    resp = client.put(url, json={"title": "System design, revisited"}, headers=student["headers"])
    assert resp.status_code == 200
    assert resp.json()["post"]["title"] == "System design, revisited"


def test_admin_may_delete_but_not_edit(client, student, admin) -> None:
    post = _post(client, student)
    comment = client.post(
        f"/api/forum/posts/{post['id']}/comments",
        json={"content": "spam"},
        headers=student["headers"],
    ).json()["comment"]

    resp = client.put(f"/api/forum/comments/{comment['id']}", json={"content": "edited"}, headers=admin["headers"])
    assert resp.status_code == 403

    assert client.delete(f"/api/forum/comments/{comment['id']}", headers=admin["headers"]).status_code == 200
    assert client.delete(f"/api/forum/posts/{post['id']}", headers=admin["headers"]).status_code == 200


def test_other_user_cannot_delete_comment(client, student, other_student) -> None:
    post = _post(client, student)
    comment = client.post(
        f"/api/forum/posts/{post['id']}/comments",
        json={"content": "mine"},
        headers=other_student["headers"],
    ).json()["comment"]

    assert client.delete(f"/api/forum/comments/{comment['id']}", headers=student["headers"]).status_code == 403
    resp = client.put(f"/api/forum/comments/{comment['id']}", json={"content": "still mine"}, headers=other_student["headers"])
    assert resp.json()["comment"]["content"] == "still mine"


def test_listing_filters_and_sorts(client, student, other_student) -> None:
    first = _post(client, student, title="Networking at career fairs", category="Networking", tags=["fair"])
    second = _post(client, other_student, title="Resume checklist", category="Career Advice")
    client.post(f"/api/forum/posts/{first['id']}/like", headers=other_student["headers"])

    recent = client.get("/api/forum/posts", headers=student["headers"]).json()
    assert [p["id"] for p in recent["posts"]] == [second["id"], first["id"]]

    popular = client.get("/api/forum/posts", params={"sort": "popular"}, headers=student["headers"]).json()
    assert popular["posts"][0]["id"] == first["id"]

    networking = client.get("/api/forum/posts", params={"category": "Networking"}, headers=student["headers"]).json()
    assert networking["count"] == 1

    everything = client.get("/api/forum/posts", params={"category": "All"}, headers=student["headers"]).json()
    assert everything["count"] == 2

    tagged = client.get("/api/forum/posts", params={"search": "FAIR"}, headers=student["headers"]).json()
    assert [p["id"] for p in tagged["posts"]] == [first["id"]]

    mine = client.get("/api/forum/my-posts", headers=other_student["headers"]).json()
    assert [p["id"] for p in mine["posts"]] == [second["id"]]


def test_comment_racing_a_post_delete_is_removed(client, monkeypatch, student, other_student) -> None:
    post = _post(client, student)
    lookup = ForumService._get_post

    def _deleted_after_lookup(self, post_id):
        found = lookup(self, post_id)
        # Another request deletes the post and its comments right after the lookup
        self.posts.delete_one({"_id": found["_id"]})
        self.comments.delete_many({"post_id": str(found["_id"])})
        return found

    monkeypatch.setattr(ForumService, "_get_post", _deleted_after_lookup)
    resp = client.post(
        f"/api/forum/posts/{post['id']}/comments",
        json={"content": "Late reply"},
        headers=other_student["headers"],
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "Post not found"
    assert get_collection("comments").count_documents({"post_id": post["id"]}) == 0


def test_failed_comment_notification_leaves_no_comment(client, student, other_student, break_notifications) -> None:
    post = _post(client, student)
    break_notifications()
    resp = client.post(
        f"/api/forum/posts/{post['id']}/comments",
        json={"content": "Great write-up"},
        headers=other_student["headers"],
    )
    assert resp.status_code == 500
    assert get_collection("comments").count_documents({"post_id": post["id"]}) == 0
