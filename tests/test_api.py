import pytest
from fastapi.testclient import TestClient

from faculty_promotion.main import create_app


WIZARD_PAYLOAD = {
    "profile": {
        "name": "Dr. Karim Nabil",
        "degree": "PhD",
        "currentPosition": "teaching_assistant",
        "yearsOfService": 4,
    },
    "achievements": {
        "research": [
            {"title": "Paper A", "journal": "TOSEM", "quartile": "Q1"},
            {"title": "Paper B", "quartile": "Q2"},
        ],
        "patents": [{"title": "Valve", "status": "pending"}],
        "supervision": [],
        "conferences": [{"title": "ICSE", "type": "international", "role": "presenter"}],
        "training": [],
        "teaching": [],
    },
}


@pytest.fixture
def client():
    # Fresh app per test, so each test gets its own faculty record
    return TestClient(create_app())


def _complete_wizard(client):
    resp = client.post("/api/faculty/wizard", json=WIZARD_PAYLOAD)
    assert resp.status_code == 200
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_config_tables(client):
    points = client.get("/api/config/points").json()
    requirements = client.get("/api/config/requirements").json()

    assert points["research"]["Q1"] == 15
    assert points["conferences"]["local"]["presenter"] == 5
    assert requirements["lecturer"] == {
        "min_points": 50,
        "max_points": 80,
        "next_position": "assistant_professor",
    }


def test_fresh_record(client):
    data = client.get("/api/faculty").json()

    assert data["wizard_completed"] is False
    assert data["points"]["total"] == 0
    assert data["promotion_status"]["status"] == "not_applied"


def test_wizard_scores_and_flags_completion(client):
    body = _complete_wizard(client)

    # 15 + 12 + 10 + 8
    assert body["success"] is True
    assert body["data"]["wizard_completed"] is True
    assert body["data"]["points"]["total"] == 45
    assert body["eligibility"]["eligible"] is False
    assert body["eligibility"]["points_needed"] == 1

    stored = client.get("/api/faculty").json()
    assert stored["profile"]["years_of_service"] == 4
    assert stored["achievements"]["research"][0]["points"] == 15


def test_wizard_rejects_unknown_position(client):
    payload = {**WIZARD_PAYLOAD, "profile": {"name": "X", "currentPosition": "dean"}}

    resp = client.post("/api/faculty/wizard", json=payload)

    assert resp.status_code == 422
    assert client.get("/api/faculty").json()["wizard_completed"] is False


def test_add_achievement_crosses_threshold_then_apply(client):
    _complete_wizard(client)

    resp = client.post(
        "/api/faculty/achievements/training",
        json={"title": "Teaching certificate", "provider": "HEA", "certified": True},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["item"]["points"] == 5
    assert body["points"]["total"] == 50
    assert body["eligible"] is True

    eligibility = client.get("/api/faculty/eligibility").json()
    assert eligibility["eligible"] is True
    assert eligibility["next_position"] == "lecturer"
    assert eligibility["breakdown"]["training"] == 5

    applied = client.post("/api/faculty/apply")
    assert applied.status_code == 200
    assert applied.json()["status"]["status"] == "pending"
    assert applied.json()["status"]["application_date"]

    again = client.post("/api/faculty/apply")
    assert again.status_code == 409
    assert again.json()["success"] is False
    assert again.json()["error"] == "A promotion application is already pending"


def test_apply_while_ineligible(client):
    _complete_wizard(client)

    resp = client.post("/api/faculty/apply")

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Not eligible for promotion"}
    assert client.get("/api/faculty").json()["promotion_status"]["status"] == "not_applied"


def test_invalid_category(client):
    resp = client.post("/api/faculty/achievements/awards", json={"title": "Best paper"})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid achievement type"}


def test_add_achievement_missing_discriminant(client):
    resp = client.post("/api/faculty/achievements/research", json={"title": "No quartile"})
    assert resp.status_code == 422


def test_delete_achievement(client):
    data = _complete_wizard(client)["data"]
    patent_id = data["achievements"]["patents"][0]["id"]

    resp = client.delete(f"/api/faculty/achievements/patents/{patent_id}")

    assert resp.status_code == 200
    assert resp.json()["points"]["total"] == 35
    assert resp.json()["points"]["breakdown"]["patents"] == 0


def test_profile_update_changes_tier(client):
    _complete_wizard(client)

    resp = client.post("/api/faculty/profile", json={"currentPosition": "lecturer"})

    assert resp.status_code == 200
    assert resp.json()["profile"]["current_position"] == "lecturer"
    assert resp.json()["profile"]["name"] == "Dr. Karim Nabil"
    assert client.get("/api/faculty/eligibility").json()["points_needed"] == 5


def test_simulate(client):
    _complete_wizard(client)

    resp = client.post("/api/faculty/simulate", json={
        "additions": {"supervision": [{"studentName": "Nour", "type": "masters"}]},
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["current_points"] == 45
    assert body["simulated_points"] == 55
    assert body["points_gained"] == 10
    assert body["would_be_eligible"] is True
    assert client.get("/api/faculty").json()["points"]["total"] == 45


def test_reset(client):
    _complete_wizard(client)

    assert client.post("/api/faculty/reset").json() == {"success": True}

    data = client.get("/api/faculty").json()
    assert data["wizard_completed"] is False
    assert data["points"]["total"] == 0
    assert all(items == [] for items in data["achievements"].values())
    assert all(value == 0 for value in data["points"]["breakdown"].values())


def test_apps_do_not_share_records(client):
    _complete_wizard(client)

    other = TestClient(create_app())
    assert other.get("/api/faculty").json()["wizard_completed"] is False


def test_wizard_rejects_unknown_category(client):
    payload = {
        **WIZARD_PAYLOAD,
        "achievements": {**WIZARD_PAYLOAD["achievements"], "awards": [{"title": "Best paper"}]},
    }

    resp = client.post("/api/faculty/wizard", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Invalid achievement type"}
    assert client.get("/api/faculty").json()["wizard_completed"] is False


def test_wizard_rejects_record_missing_quartile(client):
    payload = {**WIZARD_PAYLOAD, "achievements": {"research": [{"title": "No quartile"}]}}

    resp = client.post("/api/faculty/wizard", json=payload)

    assert resp.status_code == 422


def test_wizard_renumbers_client_ids(client):
    payload = {
        **WIZARD_PAYLOAD,
        "achievements": {
            "research": [
                {"id": 1, "title": "Paper A", "quartile": "Q1"},
                {"id": 1, "title": "Paper B", "quartile": "Q2"},
            ],
        },
    }
    research = client.post("/api/faculty/wizard", json=payload).json()["data"]["achievements"]["research"]
    assert [r["id"] for r in research] == [1, 2]

    resp = client.delete("/api/faculty/achievements/research/1")

    assert resp.json()["points"]["total"] == 12


def test_delete_from_unknown_category(client):
    resp = client.delete("/api/faculty/achievements/awards/1")

    assert resp.status_code == 400
    assert resp.json()["success"] is False
