from fastapi.testclient import TestClient

from src.api.main import app

ACME = {"X-Company-Id": "cmp_acme", "X-User-Id": "usr_1"}


def _payload(**overrides) -> dict:
    payload = {
        "customer_id": "cus_initech",
        "items": [{"product_id": "prd_widget", "quantity": 3, "discount_percentage": "10"}],
        "risk_score": "40",
        "ai_confidence": "0.8",
    }
    payload.update(overrides)
    return payload


def test_evaluate_auto_approves_within_default_guardrails():
    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=_payload(), headers=ACME)

    assert response.status_code == 200
    body = response.json()
    assert body["decision"]["outcome"] == "AUTO_APPROVE"
    assert body["decision"]["reason_code"] == "ALL_CRITERIA_MET"
    assert body["decision"]["total_base_price"] == {"amount": "30.00", "currency": "USD"}
    assert body["decision"]["total_final_price"] == {"amount": "27.00", "currency": "USD"}
    assert body["decision"]["items"][0]["unit_final_price"]["amount"] == "9.00"
    assert body["estimated_margin_percentage"] == "30.00"


def test_evaluate_routes_high_risk_to_review():
    with TestClient(app) as client:
        response = client.post(
            "/api/discount-requests/evaluate", json=_payload(risk_score="75"), headers=ACME
        )

    assert response.json()["decision"]["outcome"] == "HUMAN_REVIEW"
    assert response.json()["decision"]["reason_code"] == "RISK_SCORE_ABOVE_THRESHOLD"


def test_evaluate_after_disabling_ai():
    with TestClient(app) as client:
        client.post("/api/governance/presets/disabled", headers=ACME)
        response = client.post("/api/discount-requests/evaluate", json=_payload(), headers=ACME)

    assert response.json()["decision"]["reason_code"] == "AI_DISABLED"
    assert response.json()["decision"]["explanation"] == []


def test_evaluate_rejects_foreign_product_as_missing():
    payload = _payload(
        items=[{"product_id": "prd_pump", "quantity": 1, "discount_percentage": "5"}]
    )

    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=payload, headers=ACME)

    assert response.status_code == 404
    assert response.json()["detail"] == "PRODUCT_NOT_FOUND_OR_NOT_ACCESSIBLE: prd_pump"


def test_evaluate_rejects_invalid_item_values():
    payload = _payload(
        items=[{"product_id": "prd_widget", "quantity": 1, "discount_percentage": "101"}]
    )

    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=payload, headers=ACME)

    assert response.status_code == 422
    assert response.json()["detail"].startswith("DISCOUNT_REQUEST_INVALID_ITEM: prd_widget")


def test_evaluate_rejects_empty_items_and_out_of_range_scores():
    with TestClient(app) as client:
        empty = client.post(
            "/api/discount-requests/evaluate", json=_payload(items=[]), headers=ACME
        )
        risky = client.post(
            "/api/discount-requests/evaluate", json=_payload(risk_score="101"), headers=ACME
        )

    assert empty.status_code == 422
    assert risky.status_code == 422


def test_evaluate_requires_tenant():
    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=_payload())

    assert response.status_code == 400
    assert response.json()["detail"] == "TENANT_CONTEXT_MISSING"


def test_evaluation_can_be_disabled(monkeypatch):
    monkeypatch.setenv("AUTO_APPROVAL_EVALUATION_ENABLED", "false")

    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=_payload(), headers=ACME)

    assert response.status_code == 404
    assert response.json()["detail"] == "AUTO_APPROVAL_EVALUATION_DISABLED"


def test_evaluate_rejects_quantity_above_line_limit():
    payload = _payload(
        items=[{"product_id": "prd_widget", "quantity": 10**27, "discount_percentage": "5"}]
    )

    with TestClient(app) as client:
        response = client.post("/api/discount-requests/evaluate", json=payload, headers=ACME)

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "items", 0, "quantity"]
