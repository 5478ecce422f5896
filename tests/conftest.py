import json

import httpx
import pytest
from fastapi.testclient import TestClient

from campus_directory.database import get_id_generator, get_store
from campus_directory.ids import CounterIdGenerator
from campus_directory.main import create_app
from campus_directory.storage import HostedDirectoryStore, JsonFileDirectoryStore

HOSTED_URL = "https://directory.test"

# One department, one section, one student; year/semester are stored but must never be returned
SEED_DIRECTORY = [
    {
        "id": "cs",
        "name": "Computer Science",
        "code": "CS",
        "sections": [
            {
                "id": "a",
                "name": "Section A",
                "departmentId": "cs",
                "students": [
                    {
                        "id": "101",
                        "name": "Alice",
                        "fatherName": "Bob",
                        "email": "a@x.com",
                        "phone": "5551234567",
                        "year": "2",
                        "semester": "4",
                    }
                ],
            }
        ],
    }
]


class FakeHostedDB:
    """
    In-memory stand-in for the hosted REST document database, served through
    ``httpx.MockTransport``. Collections are dicts of key -> record.
    """

    def __init__(self):
        self.collections = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.strip("/")
        assert path.endswith(".json"), f"unexpected path {path}"
        segments = path[: -len(".json")].split("/")
        collection = self.collections.setdefault(segments[0], {})
        key = segments[1] if len(segments) > 1 else None

        if request.method == "GET":
            if key is None:
                return httpx.Response(200, json=collection or None)
            return httpx.Response(200, json=collection.get(key))
        if request.method == "PUT":
            collection[key] = json.loads(request.content)
            return httpx.Response(200, json=collection[key])
        if request.method == "DELETE":
            collection.pop(key, None)
            return httpx.Response(200, json=None)
        return httpx.Response(405, json={"error": "Method not allowed"})

    def seed(self):
        self.collections["departments"] = {"cs": {"name": "Computer Science", "code": "CS"}}
        self.collections["sections"] = {"a": {"name": "Section A", "departmentId": "cs"}}
        self.collections["students"] = {
            "101": {
                "id": "101",
                "name": "Alice",
                "fatherName": "Bob",
                "email": "a@x.com",
                "phone": "5551234567",
                "departmentId": "cs",
                "sectionId": "a",
                "year": "2",
                "semester": "4",
            }
        }


@pytest.fixture()
def data_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps(SEED_DIRECTORY))
    return path


@pytest.fixture()
def store(data_file):
    return JsonFileDirectoryStore(str(data_file))


@pytest.fixture()
def fake_hosted_db():
    return FakeHostedDB()


@pytest.fixture()
def hosted_store(fake_hosted_db):
    http_client = httpx.Client(transport=httpx.MockTransport(fake_hosted_db.handler))
    store = HostedDirectoryStore(HOSTED_URL, backoff=0, client=http_client)
    yield store
    store.close()


def _make_client(store):
    app = create_app()
    ids = CounterIdGenerator()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_id_generator] = lambda: ids
    return TestClient(app)


@pytest.fixture()
def client(store):
    """API client backed by a temp-file JSON store seeded with SEED_DIRECTORY."""
    with _make_client(store) as client_instance:
        yield client_instance


@pytest.fixture()
def hosted_client(fake_hosted_db, hosted_store):
    """API client backed by the hosted store over a seeded fake database."""
    fake_hosted_db.seed()
    with _make_client(hosted_store) as client_instance:
        yield client_instance


@pytest.fixture()
def make_client():
    """Factory for API clients over an arbitrary store."""
    return _make_client
