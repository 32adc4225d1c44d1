import json
from unittest.mock import MagicMock

import pytest

from todostore.exceptions import StoreUnavailable
from todostore.handlers import Request, Response, TaskHandlers
from todostore.repository import TaskRepository
from todostore.store import InMemoryTaskStore


def _create(handlers, owner="u1", title="Buy milk", **extra):
    body = {"owner": owner, "title": title, **extra}
    return handlers.create(Request(body=json.dumps(body)))


class TestResponse:
    def test_to_dict(self):
        response = Response.json(200, {"ok": True})
        assert response.to_dict() == {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": '{"ok": true}',
        }

    def test_headers_are_not_shared(self):
        first = Response.json(200, {})
        first.headers["X-Test"] = "1"
        assert "X-Test" not in Response.json(200, {}).headers


class TestRequestFromEvent:
    def test_proxy_event(self):
        request = Request.from_event({
            "body": '{"title": "x"}',
            "pathParameters": {"taskId": "t1"},
            "queryStringParameters": {"userId": "u1"},
        })
        assert request.body == '{"title": "x"}'
        assert request.path_params == {"taskId": "t1"}
        assert request.query_params == {"userId": "u1"}
        assert request.is_base64 is False

    def test_null_parameter_maps(self):
        request = Request.from_event({"pathParameters": None, "queryStringParameters": None})
        assert request.path_params == {}
        assert request.query_params == {}


class TestCreateHandler:
    def test_create_returns_full_record(self, handlers):
        response = _create(handlers, description="2 litres")

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json"
        task = response.payload()
        assert task["taskId"]
        assert task["owner"] == "u1"
        assert task["status"] == "pending"
        assert task["description"] == "2 litres"
        assert task["createdAt"] == task["updatedAt"]

    def test_create_accepts_legacy_owner_name(self, handlers):
        response = handlers.create(Request(body={"userID": "u1", "title": "t"}))
        assert response.status_code == 200
        assert response.payload()["owner"] == "u1"

    def test_missing_title_writes_nothing(self, handlers, store):
        response = handlers.create(Request(body='{"owner": "u1"}'))

        assert response.status_code == 400
        assert response.payload()["code"] == "missing_required_field"
        listed = handlers.list(Request(query_params={"owner": "u1"}))
        assert listed.payload() == []

    def test_missing_body(self, handlers):
        response = handlers.create(Request())
        assert response.status_code == 400
        assert response.payload()["code"] == "missing_body"

    def test_invalid_json(self, handlers):
        response = handlers.create(Request(body="{oops"))
        assert response.status_code == 400
        assert response.payload()["code"] == "invalid_body"


class TestListHandler:
    def test_list_owner_tasks(self, handlers):
        created = _create(handlers).payload()
        _create(handlers, owner="u2")

        response = handlers.list(Request(query_params={"owner": "u1"}))

        assert response.status_code == 200
        assert response.payload() == [created]

    @pytest.mark.parametrize("name", ["userId", "userID", "ownerID"])
    def test_list_accepts_aliases(self, handlers, name):
        _create(handlers)
        response = handlers.list(Request(query_params={name: "u1"}))
        assert len(response.payload()) == 1

    def test_list_missing_owner(self, handlers):
        response = handlers.list(Request())
        assert response.status_code == 400
        assert response.payload()["code"] == "missing_owner"


class TestUpdateHandler:
    def test_update_status(self, handlers):
        task = _create(handlers).payload()

        response = handlers.update(Request(
            body='{"status": "completed"}',
            path_params={"taskId": task["taskId"]},
            query_params={"userId": "u1"},
        ))

        assert response.status_code == 200
        updated = response.payload()
        assert updated["status"] == "completed"
        assert updated["title"] == task["title"]
        assert updated["updatedAt"] > task["updatedAt"]

    def test_update_missing_task(self, handlers):
        response = handlers.update(Request(
            body={"status": "completed"},
            path_params={"taskId": "nope"},
            query_params={"owner": "u1"},
        ))
        assert response.status_code == 404
        assert "u1" in response.payload()["message"]
        assert "nope" in response.payload()["message"]

    def test_update_without_fields(self, handlers):
        task = _create(handlers).payload()
        response = handlers.update(Request(
            body={"colour": "red"},
            path_params={"taskId": task["taskId"]},
            query_params={"owner": "u1"},
        ))
        assert response.status_code == 400
        assert response.payload()["code"] == "no_updatable_fields"

    def test_null_description_clears_it(self, handlers):
        task = _create(handlers, description="2 litres").payload()
        response = handlers.update(Request(
            body='{"description": null}',
            path_params={"taskId": task["taskId"]},
            query_params={"owner": "u1"},
        ))
        assert response.status_code == 200
        assert response.payload()["description"] == ""

    def test_update_missing_identifiers(self, handlers):
        response = handlers.update(Request(body={"status": "completed"}))
        assert response.status_code == 400


class TestDeleteHandler:
    def test_delete_twice(self, handlers):
        task = _create(handlers).payload()
        request = Request(path_params={"userID": "u1", "taskID": task["taskId"]})

        first = handlers.delete(request)
        assert first.status_code == 200
        assert first.payload()["owner"] == "u1"
        assert first.payload()["taskId"] == task["taskId"]
        assert "deleted" in first.payload()["message"]

        assert handlers.delete(request).status_code == 404
        assert handlers.delete(request).status_code == 404

    def test_delete_missing_identifiers(self, handlers):
        response = handlers.delete(Request(path_params={"owner": "u1"}))
        assert response.status_code == 400


class TestFailureMapping:
    def test_store_failure_is_generic_500(self, clock):
        store = MagicMock(spec=InMemoryTaskStore)
        store.query.side_effect = StoreUnavailable("redis at 10.0.0.5:6379 refused connection")
        handlers = TaskHandlers(TaskRepository(store, clock=clock))

        response = handlers.list(Request(query_params={"owner": "u1"}))

        assert response.status_code == 500
        assert response.payload() == {"message": "Internal server error"}
        assert "10.0.0.5" not in response.body

    def test_unexpected_failure_is_generic_500(self, clock):
        store = MagicMock(spec=InMemoryTaskStore)
        store.delete_item.side_effect = RuntimeError("boom")
        handlers = TaskHandlers(TaskRepository(store, clock=clock))

        response = handlers.delete(Request(path_params={"owner": "u1", "taskId": "t1"}))

        assert response.status_code == 500
        assert "boom" not in response.body

    def test_validation_never_reaches_store(self, clock):
        store = MagicMock(spec=InMemoryTaskStore)
        handlers = TaskHandlers(TaskRepository(store, clock=clock))

        handlers.create(Request(body={"owner": "u1"}))
        handlers.update(Request(body={}, path_params={"taskId": "t"}, query_params={"owner": "u1"}))

        store.put_item.assert_not_called()
        store.update_item.assert_not_called()


def test_end_to_end_scenario(handlers):
    created = _create(handlers, title="Buy milk")
    assert created.status_code == 200
    task_id = created.payload()["taskId"]

    listed = handlers.list(Request(query_params={"owner": "u1"})).payload()
    assert task_id in [t["taskId"] for t in listed]

    updated = handlers.update(Request(
        body={"status": "completed"},
        path_params={"taskId": task_id},
        query_params={"owner": "u1"},
    ))
    assert updated.payload()["status"] == "completed"

    key = Request(path_params={"owner": "u1", "taskId": task_id})
    assert handlers.delete(key).status_code == 200
    assert handlers.delete(key).status_code == 404
