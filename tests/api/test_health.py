"""API tests for probes and the metrics endpoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "mud-registration"
    assert body["uptime_seconds"] >= 0


def test_ready_is_degraded_without_database(client):
    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
    assert response.json()["checks"] == {"postgres": False}


def test_ready_runs_probe_query_on_engine(client):
    conn = AsyncMock()
    engine = MagicMock()
    engine.connect.return_value.__aenter__.return_value = conn

    with patch("mud.api.routes.health.get_async_engine", return_value=engine):
        response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"
    assert response.json()["checks"] == {"postgres": True}
    conn.execute.assert_awaited_once()


def test_metrics_exposes_registration_calls(client, registration_factory):
    client.post("/v1/registrations", json=registration_factory.new_payload())
    client.get("/v1/registrations")

    response = client.get("/metrics", follow_redirects=False)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    text = response.text
    assert 'api_registration_service_request_count_total{method="new_registration"} 1.0' in text
    assert 'api_registration_service_request_count_total{method="all_registrations"} 1.0' in text
    assert "api_registration_service_request_latency_seconds_bucket" in text
