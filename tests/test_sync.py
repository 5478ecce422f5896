import json

from campus_directory.storage import JsonFileDirectoryStore
from campus_directory.storage.sync import sync_tree


def test_sync_copies_missing_records(store, hosted_store, fake_hosted_db):
    counts = sync_tree(store, hosted_store)

    assert counts == {"departments": 1, "sections": 1, "students": 1, "conflicts": 0}
    assert fake_hosted_db.collections["departments"]["cs"] == {"id": "cs", "name": "Computer Science", "code": "CS"}
    assert fake_hosted_db.collections["sections"]["a"]["departmentId"] == "cs"
    student = fake_hosted_db.collections["students"]["101"]
    assert student["departmentId"] == "cs"
    assert student["sectionId"] == "a"
    # Restricted fields travel with the stored record; only reads scrub them
    assert student["year"] == "2"


def test_sync_is_repeatable(store, hosted_store):
    sync_tree(store, hosted_store)

    assert sync_tree(store, hosted_store) == {"departments": 0, "sections": 0, "students": 0, "conflicts": 0}


def test_sync_dry_run_writes_nothing(store, hosted_store, fake_hosted_db):
    counts = sync_tree(store, hosted_store, dry_run=True)

    assert counts == {"departments": 1, "sections": 1, "students": 1, "conflicts": 0}
    assert not any(r.method == "PUT" for r in fake_hosted_db.requests)


def test_sync_skips_section_ids_reused_across_departments(tmp_path, hosted_store, fake_hosted_db):
    path = tmp_path / "db.json"
    path.write_text(json.dumps([
        {"id": "cs", "name": "Computer Science", "code": "CS", "sections": [
            {"id": "a", "name": "Section A", "students": [{"id": "101", "name": "Alice"}]},
        ]},
        {"id": "ee", "name": "Electrical", "code": "EE", "sections": [
            {"id": "a", "name": "Section A", "students": [{"id": "7", "name": "Gus"}]},
            {"id": "b", "name": "Section B", "students": [{"id": "8", "name": "Hal"}]},
        ]},
    ]))

    counts = sync_tree(JsonFileDirectoryStore(str(path)), hosted_store)

    assert counts == {"departments": 2, "sections": 2, "students": 2, "conflicts": 2}
    assert fake_hosted_db.collections["sections"]["a"]["departmentId"] == "cs"
    assert fake_hosted_db.collections["sections"]["b"]["departmentId"] == "ee"
    assert set(fake_hosted_db.collections["students"]) == {"101", "8"}
