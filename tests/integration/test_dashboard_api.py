def test_dashboard_of_another_user_is_forbidden(client, student, other_student) -> None:
    for path in ("/api/dashboard/bilal", "/api/dashboard/applications/bilal", "/api/dashboard/saved-jobs/bilal"):
        resp = client.get(path, headers=student["headers"])
        assert resp.status_code == 403
        assert resp.json() == {"success": False, "error": "Access denied."}


def test_unknown_user_is_forbidden_too(client, student) -> None:
    resp = client.get("/api/dashboard/ghost", headers=student["headers"])
    assert resp.status_code == 403


def test_overview(client, student, open_job) -> None:
    client.put("/api/profile/alice", json={"department": "CSE", "cgpa": 3.8}, headers=student["headers"])
    client.post("/api/jobs/apply", json={"job_id": open_job["id"]}, headers=student["headers"])
    client.post("/api/dashboard/saved-jobs/alice", json={"job_id": open_job["id"]}, headers=student["headers"])

    resp = client.get("/api/dashboard/alice", headers=student["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["user_id"] == "alice"
    assert data["student_info"]["department"] == "CSE"
    assert len(data["applications"]) == 1
    assert data["applications"][0]["job"]["id"] == open_job["id"]
    assert data["saved_jobs_count"] == 1
    assert data["unread_notifications"] == 1
    assert data["notifications"][0]["kind"] == "application_submitted"


def test_save_job_twice_and_unsave(client, student, open_job) -> None:
    url = "/api/dashboard/saved-jobs/alice"
    assert client.post(url, json={"job_id": open_job["id"]}, headers=student["headers"]).status_code == 200

    resp = client.post(url, json={"job_id": open_job["id"]}, headers=student["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Job already saved"

    saved = client.get(url, headers=student["headers"]).json()["saved_jobs"]
    assert [job["id"] for job in saved] == [open_job["id"]]

    for _ in range(2):
        resp = client.delete(f"{url}/{open_job['id']}", headers=student["headers"])
        assert resp.status_code == 200
    assert client.get(url, headers=student["headers"]).json()["saved_jobs"] == []


def test_save_missing_job(client, student) -> None:
    resp = client.post(
        "/api/dashboard/saved-jobs/alice",
        json={"job_id": "64b000000000000000000000"},
        headers=student["headers"],
    )
    assert resp.status_code == 404


def test_deleted_job_leaves_saved_lists(client, student, recruiter, open_job) -> None:
    client.post("/api/dashboard/saved-jobs/alice", json={"job_id": open_job["id"]}, headers=student["headers"])
    client.delete(f"/api/recruiter/jobs/{open_job['id']}", headers=recruiter["headers"])

    resp = client.get("/api/dashboard/alice", headers=student["headers"])
    assert resp.json()["data"]["saved_jobs_count"] == 0


def test_notification_read_flow(client, student, other_student, open_job) -> None:
    client.post("/api/jobs/apply", json={"job_id": open_job["id"]}, headers=student["headers"])
    notification = client.get("/api/notifications", headers=student["headers"]).json()["notifications"][0]

    resp = client.patch(f"/api/notifications/{notification['id']}/read", headers=other_student["headers"])
    assert resp.status_code == 403

    resp = client.patch(f"/api/notifications/{notification['id']}/read", headers=student["headers"])
    assert resp.json()["notification"]["read"] is True
    assert client.get("/api/notifications/unread-count", headers=student["headers"]).json()["count"] == 0

    resp = client.patch("/api/notifications/read-all", headers=student["headers"])
    assert resp.json()["count"] == 0
