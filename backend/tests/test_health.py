def test_health_reports_service_limits(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "Timetable Engine API", "maxAlternatives": 5}


def test_liveness_route_is_not_exposed(client):
    assert client.get("/api/health/live").status_code == 404
