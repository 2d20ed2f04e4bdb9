import json
import logging
import re
import sys

from fastapi.testclient import TestClient

from src.api.main import app
from src.api.observability import JsonFormatter, company_id_var, user_id_var
from src.api.routers.service_registry import get_governance_service


def test_observability_headers_preserve_inbound_correlation_and_trace_id():
    with TestClient(app) as client:
        response = client.get(
            "/health",
            headers={
                "X-Correlation-Id": "corr-inbound-123",
                "X-Request-Id": "req-inbound-123",
                "traceparent": "00-1234567890abcdef1234567890abcdef-0000000000000001-01",
            },
        )

    assert response.status_code == 200
    assert response.headers["X-Correlation-Id"] == "corr-inbound-123"
    assert response.headers["X-Request-Id"] == "req-inbound-123"
    assert response.headers["X-Trace-Id"] == "1234567890abcdef1234567890abcdef"
    assert (
        response.headers["traceparent"] == "00-1234567890abcdef1234567890abcdef-0000000000000001-01"
    )


def test_observability_headers_generate_ids_when_missing():
    with TestClient(app) as client:
        response = client.get("/api/products", headers={"X-Company-Id": "cmp_acme"})

    assert response.status_code == 200
    assert re.fullmatch(r"corr_[0-9a-f]{12}", response.headers["X-Correlation-Id"])
    assert re.fullmatch(r"req_[0-9a-f]{12}", response.headers["X-Request-Id"])
    assert re.fullmatch(r"[0-9a-f]{32}", response.headers["X-Trace-Id"])


def test_metrics_endpoint_available():
    with TestClient(app) as client:
        client.get("/health")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text or "http_request_duration" in response.text


def test_metrics_count_requests_per_tenant():
    with TestClient(app) as client:
        client.get("/api/products", headers={"X-Company-Id": "cmp_globex"})
        client.get("/health")
        response = client.get("/metrics")

    tenant_lines = [
        line
        for line in response.text.splitlines()
        if line.startswith("marginiq_tenant_requests_total{")
    ]
    assert any(
        'company_id="cmp_globex",handler="/api/products",status="2xx"' in line
        for line in tenant_lines
    )
    assert not any('handler="/health"' in line for line in tenant_lines)


def test_json_formatter_includes_tenant_and_exception():
    token = company_id_var.set("cmp_acme")
    user_token = user_id_var.set("usr_admin")
    try:
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "marginiq", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        payload = json.loads(JsonFormatter().format(record))
    finally:
        company_id_var.reset(token)
        user_id_var.reset(user_token)

    assert payload["company_id"] == "cmp_acme"
    assert payload["user_id"] == "usr_admin"
    assert payload["message"] == "failed"
    assert "ValueError: boom" in payload["exception"]


def test_unexpected_errors_return_problem_details():
    class _BrokenGovernance:
        def get_settings(self, **_kwargs):
            raise RuntimeError("database exploded")

    app.dependency_overrides[get_governance_service] = _BrokenGovernance
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/governance", headers={"X-Company-Id": "cmp_acme"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["detail"] == "An unexpected error occurred."
    assert "database exploded" not in response.text
