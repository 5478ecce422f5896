def test_list_sections_for_department(client):
    response = client.get("/api/departments/cs/sections")

    assert response.status_code == 200, response.text
    assert response.json() == [{"id": "a", "name": "Section A", "departmentId": "cs"}]


def test_list_sections_unknown_department_is_not_found(client):
    for dept_id in ("nope", "CS", "cs "):
        response = client.get(f"/api/departments/{dept_id}/sections")
        assert response.status_code == 404, dept_id
        assert response.json()["error"] == "NotFound"


def test_create_section_then_list(client):
    response = client.post("/api/departments/cs/sections", json={"id": "b", "name": "Section B"})

    assert response.status_code == 201, response.text
    assert response.json() == {"id": "b", "name": "Section B", "departmentId": "cs"}
    ids = [s["id"] for s in client.get("/api/departments/cs/sections").json()]
    assert ids == ["a", "b"]


def test_create_section_generates_id(client):
    response = client.post("/api/departments/cs/sections", json={"name": "Section C"})

    assert response.status_code == 201
    assert response.json()["id"] == "sec_1"


def test_create_section_requires_name(client):
    response = client.post("/api/departments/cs/sections", json={"id": "b"})

    assert response.status_code == 400
    assert response.json() == {"error": "ValidationError", "message": "name is required"}


def test_create_section_unknown_department(client):
    response = client.post("/api/departments/nope/sections", json={"id": "b", "name": "Section B"})

    assert response.status_code == 404
    assert response.json() == {"error": "NotFound", "message": "Department not found"}


def test_create_section_rejects_duplicate_id(client):
    response = client.post("/api/departments/cs/sections", json={"id": "a", "name": "Another A"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
