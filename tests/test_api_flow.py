from conftest import auth


def _setup_profile(client, income=1000, status="employed", user_id=1):
    r = client.put("/v1/profile", json={"monthly_income": income, "employment_status": status}, headers=auth(user_id))
    assert r.status_code == 200
    return r.json()


def test_profile_roundtrip(client, fake_db):
    r = client.get("/v1/profile", headers=auth())
    assert r.status_code == 404
    body = _setup_profile(client, income=3200, status="student")
    assert body == {"monthly_income": 3200, "employment_status": "student"}
    assert client.get("/v1/profile", headers=auth()).json() == body


def test_profile_rejects_unknown_status_and_negative_income(client, fake_db):
    r = client.put("/v1/profile", json={"monthly_income": 100, "employment_status": "astronaut"}, headers=auth())
    assert r.status_code == 422
    r = client.put("/v1/profile", json={"monthly_income": -5, "employment_status": "employed"}, headers=auth())
    assert r.status_code == 422


def test_financial_items_crud_and_summary(client, fake_db):
    r = client.post("/v1/financial-items", json={"name": "Savings", "type": "asset", "category": "cash_savings", "value": 4000}, headers=auth())
    assert r.status_code == 201
    savings = r.json()
    r = client.post("/v1/financial-items", json={"name": "Visa", "type": "liability", "category": "credit_card", "value": 2000, "interest_rate": 19.9}, headers=auth())
    assert r.status_code == 201
    card = r.json()

    body = client.get("/v1/financial-items", headers=auth()).json()
    assert [it["id"] for it in body["items"]] == [card["id"], savings["id"]]
    assert body["summary"] == {
        "total_assets": 4000,
        "total_liabilities": 2000,
        "net_worth": 2000,
        "asset_to_liability_ratio": 2.0,
        "has_high_interest_debt": True,
        "item_count": 2,
    }

    r = client.put(f"/v1/financial-items/{card['id']}", json={"interest_rate": 8}, headers=auth())
    assert r.status_code == 200
    assert r.json()["interest_rate"] == 8
    assert r.json()["name"] == "Visa"
    assert client.get("/v1/financial-items", headers=auth()).json()["summary"]["has_high_interest_debt"] is False

    assert client.get(f"/v1/financial-items/{card['id']}", headers=auth(2)).status_code == 403
    assert client.delete(f"/v1/financial-items/{card['id']}", headers=auth(2)).status_code == 403

    r = client.delete(f"/v1/financial-items/{card['id']}", headers=auth())
    assert r.status_code == 200
    assert client.get(f"/v1/financial-items/{card['id']}", headers=auth()).status_code == 404


def test_financial_item_validation(client, fake_db):
    r = client.post("/v1/financial-items", json={"name": "Savings", "type": "asset", "category": "cash_savings", "value": -1}, headers=auth())
    assert r.status_code == 400
    assert r.json()["target"] == "value"
    r = client.post("/v1/financial-items", json={"name": "Savings", "type": "equity", "category": "cash_savings", "value": 1}, headers=auth())
    assert r.status_code == 422


def test_goal_limits(client, fake_db):
    for goal_type, priority in (("emergency_fund", 1), ("retire_early", 2), ("start_business", 3)):
        r = client.post("/v1/goals", json={"goal_type": goal_type, "priority": priority}, headers=auth())
        assert r.status_code == 201
        assert r.json()["timeline"] == "medium"

    r = client.post("/v1/goals", json={"goal_type": "passive_income", "priority": 1}, headers=auth())
    assert r.status_code == 400
    assert "Maximum 3 goals" in r.json()["message"]

    body = client.get("/v1/goals", headers=auth()).json()
    assert body["count"] == 3
    assert [g["goal_type"] for g in body["goals"]] == ["emergency_fund", "retire_early", "start_business"]


def test_goal_validation(client, fake_db):
    r = client.post("/v1/goals", json={"goal_type": "retire_early", "priority": 4}, headers=auth())
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_parameters"
    r = client.post("/v1/goals", json={"goal_type": "buy_boat", "priority": 1}, headers=auth())
    assert r.status_code == 422
    assert client.post("/v1/goals", json={"goal_type": "retire_early", "priority": 1}, headers=auth()).status_code == 201
    r = client.post("/v1/goals", json={"goal_type": "retire_early", "priority": 2}, headers=auth())
    assert r.status_code == 400
    assert "already have this goal type" in r.json()["message"]


def test_goal_update_and_delete(client, fake_db):
    goal = client.post("/v1/goals", json={"goal_type": "debt_freedom", "priority": 2}, headers=auth()).json()
    r = client.put(f"/v1/goals/{goal['id']}", json={"status": "in_progress", "timeline": "short"}, headers=auth())
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"
    assert r.json()["timeline"] == "short"
    assert client.put(f"/v1/goals/{goal['id']}", json={"priority": 1}, headers=auth(2)).status_code == 403
    assert client.delete(f"/v1/goals/{goal['id']}", headers=auth()).status_code == 200
    assert client.delete(f"/v1/goals/{goal['id']}", headers=auth()).status_code == 404


def test_roadmap_lifecycle(client, fake_db):
    _setup_profile(client)
    assert client.get("/v1/roadmap", headers=auth()).status_code == 404

    r = client.post("/v1/roadmap/generate", headers=auth())
    assert r.status_code == 400
    assert r.json()["code"] == "precondition_failed"

    client.post("/v1/goals", json={"goal_type": "emergency_fund", "priority": 1}, headers=auth())
    r = client.post("/v1/roadmap/generate", headers=auth())
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Roadmap generated successfully"
    assert body["financial_state"]["cash_assets"] == 0
    steps = body["roadmap"]["steps"]
    assert steps[0]["step_number"] == 1
    assert steps[0]["title"] == "Build 2-Month Emergency Fund"
    assert steps[0]["target_amount"] == 1400
    assert steps[0]["category"] == "foundation"

    r = client.put("/v1/roadmap/progress/1", json={"progress": 100}, headers=auth())
    assert r.status_code == 200
    step = r.json()["roadmap"]["steps"][0]
    assert step["current_progress"] == 100
    assert step["is_completed"] is True

    r = client.put("/v1/roadmap/progress/1", json={"progress": 101}, headers=auth())
    assert r.status_code == 400
    assert r.json()["target"] == "progress"
    assert client.put("/v1/roadmap/progress/9", json={"progress": 10}, headers=auth()).status_code == 404

    stored = client.get("/v1/roadmap", headers=auth()).json()["roadmap"]
    assert stored["steps"][0]["is_completed"] is True
    assert stored["user_id"] == 1

    assert client.delete("/v1/roadmap", headers=auth()).status_code == 200
    assert client.get("/v1/roadmap", headers=auth()).status_code == 404
    assert client.delete("/v1/roadmap", headers=auth()).status_code == 404


def test_generate_without_profile(client, fake_db):
    client.post("/v1/goals", json={"goal_type": "retire_early", "priority": 1}, headers=auth())
    r = client.post("/v1/roadmap/generate", headers=auth())
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


def test_roadmaps_are_per_user(client, fake_db):
    for user_id, status in ((1, "student"), (2, "entrepreneur")):
        _setup_profile(client, status=status, user_id=user_id)
        client.post("/v1/goals", json={"goal_type": "start_business", "priority": 1}, headers=auth(user_id))
        assert client.post("/v1/roadmap/generate", headers=auth(user_id)).status_code == 200
    first = [s["title"] for s in client.get("/v1/roadmap", headers=auth(1)).json()["roadmap"]["steps"]]
    second = [s["title"] for s in client.get("/v1/roadmap", headers=auth(2)).json()["roadmap"]["steps"]]
    assert "Launch Side Hustle" in first
    assert "Invest in Skills & Education" in first
    assert "Invest in Business Growth" in second


def test_progress_rejects_nan(client, fake_db):
    _setup_profile(client)
    client.post("/v1/goals", json={"goal_type": "emergency_fund", "priority": 1}, headers=auth())
    client.post("/v1/roadmap/generate", headers=auth())
    headers = {**auth(), "Content-Type": "application/json"}
    r = client.put("/v1/roadmap/progress/1", content='{"progress": NaN}', headers=headers)
    assert r.status_code == 400
    assert r.json()["target"] == "progress"
    assert client.get("/v1/roadmap", headers=auth()).json()["roadmap"]["steps"][0]["current_progress"] == 0


def test_goal_create_rejects_negative_target(client, fake_db):
    r = client.post("/v1/goals", json={"goal_type": "retire_early", "priority": 1, "target_amount": -500}, headers=auth())
    assert r.status_code == 400
    assert r.json()["target"] == "target_amount"
    assert client.get("/v1/goals", headers=auth()).json()["count"] == 0
