import json
from datetime import datetime, timedelta

from ecoguardian.errors import RemoteFailure


def _log(client, category, amount, when=None, **extra):
    body = {"category": category, "amount": amount, **extra}
    if when is not None:
        body["date"] = when.isoformat()
    return client.post("/api/carbon-entries", json=body)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "ecoguardian"}


def test_requires_user_header(client):
    response = client.get("/api/carbon-entries", headers={"X-User-Id": ""})
    assert response.status_code == 401


def test_create_and_list_entries(client):
    now = datetime.now()
    created = _log(client, "transportation", 10.0, now - timedelta(days=2), description="Drive to work")
    assert created.status_code == 200
    body = created.json()
    assert body["userId"] == "user-1"
    assert body["description"] == "Drive to work"

    _log(client, "energy", 5)
    entries = client.get("/api/carbon-entries").json()

    assert [e["category"] for e in entries] == ["energy", "transportation"]


def test_entries_are_scoped_per_user(client):
    _log(client, "food", 2.5)
    other = client.get("/api/carbon-entries", headers={"X-User-Id": "user-2"})
    assert other.json() == []


def test_entry_validation(client):
    assert _log(client, "transportation", "5").status_code == 422
    assert _log(client, "transportation", -1).status_code == 422
    assert _log(client, "flights", 3).status_code == 422
    assert client.post("/api/carbon-entries", json={"category": "food"}).status_code == 422


def test_entries_in_range(client):
    now = datetime.now()
    _log(client, "food", 1.0, now - timedelta(days=10))
    _log(client, "food", 2.0, now - timedelta(days=3))

    response = client.get(
        "/api/carbon-entries/range",
        params={"start": (now - timedelta(days=5)).isoformat(), "end": now.isoformat()},
    )
    assert [e["amount"] for e in response.json()] == [2.0]

    bad = client.get(
        "/api/carbon-entries/range",
        params={"start": now.isoformat(), "end": (now - timedelta(days=5)).isoformat()},
    )
    assert bad.status_code == 400


def test_stats_and_analytics(client):
    now = datetime.now()
    _log(client, "transportation", 10.0, now - timedelta(minutes=5))
    _log(client, "energy", 5.0, now - timedelta(days=8))
    _log(client, "food", 3.0, now - timedelta(days=40))

    stats = client.get("/api/carbon-entries/stats").json()
    assert stats["total"] == 18.0
    assert stats["entryCount"] == 3
    assert stats["categoryBreakdown"] == {"transportation": 10.0, "energy": 5.0, "food": 3.0}

    analytics = client.get("/api/carbon-entries/analytics").json()
    assert len(analytics["dailyTotals"]) == 30
    assert sum(d["amount"] for d in analytics["dailyTotals"]) == 15.0
    assert analytics["thisWeekTotal"] == 10.0
    assert analytics["topCategory"] == {"category": "transportation", "amount": 10.0}


def test_dashboard_metrics(client):
    empty = client.get("/api/dashboard-metrics").json()
    assert empty == {"carbonSavedToday": 0.0, "sustainabilityScore": 0, "todayTotal": 0.0, "averageDaily": 0.0}

    _log(client, "energy", 7.0, datetime.now() - timedelta(days=1))
    metrics = client.get("/api/dashboard-metrics").json()
    assert metrics["averageDaily"] == 1.0
    assert metrics["carbonSavedToday"] == 1.5
    assert 0 <= metrics["sustainabilityScore"] <= 100


def test_goals_latest_is_active(client):
    assert client.get("/api/goals/active").json() is None

    client.post("/api/goals", json={"targetAmount": 100, "period": "monthly"})
    second = client.post("/api/goals", json={"category": "energy", "targetAmount": 20, "period": "weekly"}).json()

    assert client.get("/api/goals/active").json()["id"] == second["id"]
    assert len(client.get("/api/goals").json()) == 2
    assert client.post("/api/goals", json={"targetAmount": 5, "period": "yearly"}).status_code == 422


def test_chat_streams_single_event(client):
    _log(client, "transportation", 12.34)

    response = client.post("/api/chat", json={"message": "How can I reduce my commute emissions?"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.text.startswith("data: ")
    assert response.text.endswith("\n\n")
    assert response.text.count("data: ") == 1
    payload = json.loads(response.text[len("data: "):].strip())
    assert payload["response"].startswith("To reduce transportation emissions:")
    assert payload["response"].endswith("Your current transportation footprint is 12.3 kg CO₂.")


def test_chat_remote_failure_is_502(client, fake_completion):
    fake_completion.error = RemoteFailure.OTHER

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to get AI response"}


def test_chat_requires_message(client):
    assert client.post("/api/chat", json={"message": ""}).status_code == 422


def test_recommendations_fallback(client):
    _log(client, "food", 30.0)
    _log(client, "energy", 3.0)

    recommendations = client.get("/api/recommendations").json()["recommendations"]

    assert len(recommendations) == 5
    assert recommendations[1].startswith("Compost Bin")


def test_predictions_empty_and_populated(client):
    empty = client.get("/api/predictions").json()
    assert empty["insights"] == ["Start tracking your carbon footprint to receive AI-powered predictions"]

    _log(client, "energy", 4.0)
    populated = client.get("/api/predictions").json()
    assert populated["carbonPrediction"]["confidence"] > 0
    assert len(populated["insights"]) == 3


def test_eco_route(client):
    response = client.post("/api/eco-route", json={"start": "A", "end": "B"})

    assert response.status_code == 200
    body = response.json()
    assert body["ecoRoute"]["distance"] > body["standardRoute"]["distance"]
    assert len(body["ecoRoute"]["waypoints"]) == 4
    assert client.post("/api/eco-route", json={"start": "", "end": "B"}).status_code == 422
