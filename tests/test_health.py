def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["status"] == "healthy"
    assert body["storage"] == "json"


def test_health_check_degraded_when_data_unreadable(client, data_file):
    data_file.write_text("[oops")

    response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"
