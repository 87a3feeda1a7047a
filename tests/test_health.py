from http import HTTPStatus


def test_health_endpoint_ok(client):
    """
    /health responds with 200 OK and reports the configured app and environment.
    """
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    data = response.json()

    assert data["status"] == "ok"
    assert data["app_name"] == "MeetingFlow"
    assert data["environment"] == "test"
    assert "timestamp_utc" in data


def test_health_does_not_require_credentials(client):
    """
    Unlike /agent/health, the public health check needs no API key or owner.
    """
    response = client.get("/health", headers={"Authorization": "Api-Key wrong"})
    assert response.status_code == HTTPStatus.OK


def test_health_is_documented_in_openapi(client):
    operation = client.get("/openapi.json").json()["paths"]["/health"]["get"]

    assert operation["summary"] == "Health check for MeetingFlow service"
    assert "/agent/health" in operation["description"]
