import json

STUDENTS_URL = "/api/departments/cs/sections/a/students"


def _assert_no_restricted_fields(obj):
    """Walk a JSON value and fail on any year/semester key."""
    if isinstance(obj, dict):
        assert "year" not in obj and "semester" not in obj, obj
        for value in obj.values():
            _assert_no_restricted_fields(value)
    elif isinstance(obj, list):
        for item in obj:
            _assert_no_restricted_fields(item)


def test_list_students_is_scrubbed(client):
    response = client.get(STUDENTS_URL)

    assert response.status_code == 200, response.text
    assert response.json() == [
        {"id": "101", "name": "Alice", "fatherName": "Bob", "email": "a@x.com", "phone": "5551234567"}
    ]


def test_list_students_unknown_department_or_section(client):
    missing_dept = client.get("/api/departments/nope/sections/a/students")
    assert missing_dept.status_code == 404
    assert missing_dept.json() == {"error": "NotFound", "message": "Department not found"}

    missing_section = client.get("/api/departments/cs/sections/zz/students")
    assert missing_section.status_code == 404
    assert missing_section.json() == {"error": "NotFound", "message": "Section not found"}


def test_create_student_returns_scrubbed_record(client, data_file):
    payload = {
        "id": "102",
        "name": "Carol",
        "fatherName": "Dave",
        "email": "carol@x.com",
        "phone": "555-000-1111",
        "year": "1",
        "semester": "2",
    }

    response = client.post(STUDENTS_URL, json=payload)

    assert response.status_code == 201, response.text
    created = response.json()
    _assert_no_restricted_fields(created)
    assert created["id"] == "102"
    assert created["departmentId"] == "cs"
    assert created["sectionId"] == "a"
    assert created["registeredAt"]

    # Restricted fields are still kept in storage
    stored = json.loads(data_file.read_text())[0]["sections"][0]["students"][-1]
    assert stored["year"] == "1"
    assert stored["semester"] == "2"

    listed = client.get(STUDENTS_URL).json()
    assert [s["id"] for s in listed] == ["101", "102"]
    _assert_no_restricted_fields(listed)


def test_create_student_accepts_numeric_roll_number(client):
    response = client.post(STUDENTS_URL, json={"id": 103, "name": "Erin", "year": 3})

    assert response.status_code == 201, response.text
    assert response.json()["id"] == "103"


def test_create_student_requires_id_and_name(client):
    missing_id = client.post(STUDENTS_URL, json={"name": "Nobody"})
    assert missing_id.status_code == 400
    assert missing_id.json()["message"] == "id is required"

    missing_name = client.post(STUDENTS_URL, json={"id": "104"})
    assert missing_name.status_code == 400
    assert missing_name.json()["message"] == "name is required"


def test_create_student_unknown_parent(client):
    response = client.post("/api/departments/cs/sections/zz/students", json={"id": "104", "name": "Frank"})

    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_create_student_rejects_duplicate_roll_number(client):
    response = client.post(STUDENTS_URL, json={"id": "101", "name": "Alice Again"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_delete_student(client):
    response = client.delete("/api/students/101")

    assert response.status_code == 200
    assert response.json() == {"deleted": "101"}
    assert client.get(STUDENTS_URL).json() == []


def test_delete_missing_student_is_noop(client, data_file):
    before = data_file.read_text()

    response = client.delete("/api/students/does-not-exist")

    assert response.status_code == 200
    assert data_file.read_text() == before


def test_full_directory_is_scrubbed(client):
    client.post(STUDENTS_URL, json={"id": "102", "name": "Carol", "year": "1", "semester": "2"})

    response = client.get("/api/data")

    assert response.status_code == 200
    tree = response.json()
    _assert_no_restricted_fields(tree)
    assert tree[0]["id"] == "cs"
    assert [s["id"] for s in tree[0]["sections"][0]["students"]] == ["101", "102"]


def test_dropdown_data(client):
    client.post("/api/departments", json={"id": "ee", "name": "Electrical", "code": "EE"})

    response = client.get("/api/dropdown-data")

    assert response.status_code == 200
    assert response.json() == [
        {"id": "cs", "name": "Computer Science", "sections": [{"id": "a", "name": "Section A"}]},
        {"id": "ee", "name": "Electrical", "sections": []},
    ]


def test_create_student_rejects_roll_number_used_in_another_section(client):
    client.post("/api/departments/cs/sections", json={"id": "b", "name": "Section B"})

    response = client.post("/api/departments/cs/sections/b/students", json={"id": "101", "name": "Other"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert client.get("/api/departments/cs/sections/b/students").json() == []
