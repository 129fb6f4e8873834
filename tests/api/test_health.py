"""
Tests for the health check endpoint.
"""


def test_health_check_returns_200(client):
    """
    Verify the health endpoint responds with HTTP 200.

    This is the most basic test: can the application receive
    a request and respond? If this fails, nothing else will.
    """
    response = client.get("/health")
    assert response.status_code == 200


def test_health_check_returns_service_name(client):
    response = client.get("/health")
    data = response.json()
    assert data["service"] == "double-entry-bank"


def test_health_check_reports_database_status(client):
    """
    The test database is reachable, so both the database
    and the service as a whole report healthy.
    """
    data = client.get("/health").json()
    assert data["database"] == "healthy"
    assert data["status"] == "healthy"


def test_health_check_reports_version(client, settings):
    data = client.get("/health").json()
    assert data["version"] == settings.APP_VERSION
