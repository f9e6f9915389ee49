import pytest


@pytest.fixture
def company(client, recruiter) -> dict:
    resp = client.post(
        "/api/company/profile",
        json={"name": "Acme", "industry": "Software", "location": "Dhaka"},
        headers=recruiter["headers"],
    )
    assert resp.status_code == 201
    return resp.json()["company"]


def _review(client, company_id: str, who: dict, rating: int = 4):
    return client.post(
        "/api/reviews/submit",
        json={
            "company_id": company_id,
            "rating": rating,
            "work_culture": 5,
            "salary": 3,
            "career_growth": 4,
            "comment": "Good mentorship",
        },
        headers=who["headers"],
    )


def test_company_profile_lifecycle(client, recruiter, other_recruiter, student, company) -> None:
    resp = client.post("/api/company/profile", json={"name": "Acme Two"}, headers=recruiter["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Company profile already exists"

    resp = client.put("/api/company/profile", json={"website": "https://acme.io"}, headers=recruiter["headers"])
    assert resp.json()["company"]["website"] == "https://acme.io"

    resp = client.get("/api/company/profile", headers=other_recruiter["headers"])
    assert resp.status_code == 404

    resp = client.get(f"/api/company/{company['id']}", headers=student["headers"])
    assert resp.json()["company"]["name"] == "Acme"


def test_review_once_per_company(client, student, company) -> None:
    assert _review(client, company["id"], student).status_code == 201

    resp = _review(client, company["id"], student)
    assert resp.status_code == 400
    assert resp.json()["error"] == "You have already reviewed this company"


def test_only_students_review(client, other_recruiter, company) -> None:
    resp = _review(client, company["id"], other_recruiter)
    assert resp.status_code == 403


def test_rating_bounds(client, student, company) -> None:
    assert _review(client, company["id"], student, rating=6).status_code == 400


def test_stats(client, student, other_student, company) -> None:
    _review(client, company["id"], student, rating=5)
    _review(client, company["id"], other_student, rating=2)

    body = client.get(f"/api/reviews/company/{company['id']}", headers=student["headers"]).json()
    assert body["stats"]["total_reviews"] == 2
    assert body["stats"]["average_rating"] == 3.5
    assert body["stats"]["average_work_culture"] == 5
    assert len(body["reviews"]) == 2


def test_empty_stats(client, student, company) -> None:
    body = client.get(f"/api/reviews/company/{company['id']}", headers=student["headers"]).json()
    assert body["stats"] == {
        "total_reviews": 0,
        "average_rating": None,
        "average_work_culture": None,
        "average_salary": None,
        "average_career_growth": None,
    }


def test_author_edits_and_deletes(client, student, other_student, company) -> None:
    review = _review(client, company["id"], student).json()["review"]

    resp = client.put(f"/api/reviews/{review['id']}", json={"rating": 1}, headers=other_student["headers"])
    assert resp.status_code == 403

    resp = client.put(f"/api/reviews/{review['id']}", json={"rating": 3}, headers=student["headers"])
    assert resp.json()["review"]["rating"] == 3

    assert client.delete(f"/api/reviews/{review['id']}", headers=other_student["headers"]).status_code == 403
    assert client.delete(f"/api/reviews/{review['id']}", headers=student["headers"]).status_code == 200
    assert client.get(f"/api/reviews/company/{company['id']}", headers=student["headers"]).json()["stats"]["total_reviews"] == 0
