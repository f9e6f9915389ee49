from placement_hub.services.account_service import SNAPSHOT_FIELDS, AccountService


def test_snapshot_is_a_deep_copy() -> None:
    account = {
        "_id": "a1",
        "name": "Alice",
        "email": "alice@g.bracu.ac.bd",
        "user_id": "alice",
        "password_hash": "x",
        "skills": ["Go"],
        "work_experience": [{"company": "Acme", "position": "Intern"}],
    }
    snapshot = AccountService.snapshot(account)

    account["skills"].append("Rust")
    account["work_experience"][0]["position"] = "Engineer"

    assert snapshot["skills"] == ["Go"]
    assert snapshot["work_experience"][0]["position"] == "Intern"


def test_snapshot_fields_and_defaults() -> None:
    snapshot = AccountService.snapshot({"name": "Alice", "skills": None, "password_hash": "x"})

    assert set(snapshot) == set(SNAPSHOT_FIELDS) | {"captured_at"}
    assert snapshot["skills"] == []
    assert snapshot["education"] == []
    assert "password_hash" not in snapshot
