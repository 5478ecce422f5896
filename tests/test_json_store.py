import json
import threading

import pytest

from campus_directory.errors import InternalError, NotFound, ValidationError
from campus_directory.storage import JsonFileDirectoryStore


def test_missing_or_empty_file_lists_nothing(tmp_path):
    path = tmp_path / "db.json"
    store = JsonFileDirectoryStore(str(path))
    assert store.list_departments() == []

    path.write_text("")
    assert store.list_departments() == []
    assert store.dump_tree() == []


def test_non_array_document_is_internal_error(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"departments": []}))

    with pytest.raises(InternalError):
        JsonFileDirectoryStore(str(path)).list_departments()


def test_first_write_creates_the_file(tmp_path):
    path = tmp_path / "nested" / "db.json"
    store = JsonFileDirectoryStore(str(path))

    store.create_department({"id": "cs", "name": "Computer Science", "code": "CS"})

    assert json.loads(path.read_text()) == [
        {"id": "cs", "name": "Computer Science", "code": "CS", "sections": []}
    ]
    assert [p.name for p in path.parent.iterdir()] == ["db.json"]


def test_nested_lookups_raise_not_found(store):
    with pytest.raises(NotFound):
        store.list_sections("nope")
    with pytest.raises(NotFound):
        store.list_students("cs", "nope")
    with pytest.raises(NotFound):
        store.create_student("cs", "nope", {"id": "1", "name": "X"})

    assert store.get_department("nope") is None
    assert store.get_section("cs", "nope") is None
    assert store.get_section("nope", "a") is None


def test_list_students_returns_copies(store):
    students = store.list_students("cs", "a")
    students[0]["name"] = "Mallory"

    assert store.list_students("cs", "a")[0]["name"] == "Alice"


def test_concurrent_creates_are_all_kept(store):
    errors = []

    def add(n):
        try:
            store.create_student("cs", "a", {"id": f"2{n:02d}", "name": f"Student {n}"})
        except Exception as e:  # surfaced through the assertion below
            errors.append(e)

    threads = [threading.Thread(target=add, args=(n,)) for n in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(store.list_students("cs", "a")) == 21


def test_delete_student_searches_every_section(store):
    store.create_section("cs", {"id": "b", "name": "Section B"})
    store.create_student("cs", "b", {"id": "301", "name": "Bea"})

    store.delete_student("301")

    assert store.list_students("cs", "b") == []
    assert [s["id"] for s in store.list_students("cs", "a")] == ["101"]


def test_null_child_arrays_are_treated_as_empty(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps([
        {"id": "cs", "name": "Computer Science", "code": "CS", "sections": None},
        {"id": "ee", "name": "Electrical", "code": "EE", "sections": [
            {"id": "a", "name": "Section A", "students": None},
        ]},
    ]))
    store = JsonFileDirectoryStore(str(path))

    assert store.list_sections("cs") == []
    store.create_section("cs", {"id": "a", "name": "Section A"})
    store.create_student("ee", "a", {"id": "7", "name": "Gus"})

    assert [s["id"] for s in store.list_sections("cs")] == ["a"]
    assert [s["id"] for s in store.list_students("ee", "a")] == ["7"]


def test_roll_numbers_are_unique_across_sections(store):
    store.create_section("cs", {"id": "b", "name": "Section B"})

    with pytest.raises(ValidationError):
        store.create_student("cs", "b", {"id": "101", "name": "Another Alice"})

    store.delete_student("101")
    assert store.list_students("cs", "a") == []
    assert store.list_students("cs", "b") == []
