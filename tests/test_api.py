import json

import pytest

from todostore.api import create_app
from todostore.exceptions import StoreUnavailable
from todostore.store import InMemoryTaskStore


@pytest.fixture
def client(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app.test_client()


def _create(client, **body):
    return client.post("/todos", data=json.dumps(body), content_type="application/json")


def test_create_and_list(client):
    response = _create(client, owner="u1", title="Buy milk")
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "application/json"
    task = response.get_json()

    listed = client.get("/todos?userID=u1")
    assert listed.status_code == 200
    assert listed.get_json() == [task]


def test_create_missing_title(client):
    response = _create(client, owner="u1")
    assert response.status_code == 400
    assert client.get("/todos?owner=u1").get_json() == []


def test_list_requires_owner(client):
    assert client.get("/todos").status_code == 400


@pytest.mark.parametrize("method", ["put", "patch"])
def test_update(client, method):
    task = _create(client, owner="u1", title="Buy milk").get_json()

    response = getattr(client, method)(
        f"/todos/{task['taskId']}?userId=u1",
        data=json.dumps({"status": "completed"}),
        content_type="application/json",
    )

    assert response.status_code == 200
    assert response.get_json()["status"] == "completed"


def test_update_missing_task(client):
    response = client.patch("/todos/nope?owner=u1", data='{"status": "completed"}')
    assert response.status_code == 404


def test_delete(client):
    task = _create(client, owner="u1", title="Buy milk").get_json()

    first = client.delete(f"/todos/u1/{task['taskId']}")
    assert first.status_code == 200
    assert first.get_json()["taskId"] == task["taskId"]
    assert client.delete(f"/todos/u1/{task['taskId']}").status_code == 404


def test_store_failure_is_generic(store):
    class BrokenStore(InMemoryTaskStore):
        def query(self, owner):
            raise StoreUnavailable("secret-host:6379 refused")

    client = create_app(BrokenStore()).test_client()
    response = client.get("/todos?owner=u1")

    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal server error"}


def test_health(client):
    assert client.get("/health").get_json() == {"status": "healthy"}


def test_health_unavailable():
    class DownStore(InMemoryTaskStore):
        def ping(self):
            return False

    response = create_app(DownStore()).test_client().get("/health")
    assert response.status_code == 503
