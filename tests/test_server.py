from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from todo_app.api_client import TaskApiClient
from todo_app.controller import TaskListController
from todo_app.query_cache import QueryCache
from todo_app.server.api import create_app
from todo_app.server.db import dispose_engine
from todo_app.sync import TaskSyncClient

from .fakes import RecordingCelebration, RecordingNotifier


@pytest.fixture()
def database_url(tmp_path):
    url = f"sqlite:///{(tmp_path / 'todo.db').as_posix()}"
    yield url
    dispose_engine(url)


@pytest.fixture()
def client(database_url):
    with TestClient(create_app(database_url)) as c:
        yield c


def _create(client, **body):
    body.setdefault("title", "Task")
    resp = client.post("/api/tasks", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/api/health").json() == {"ok": True}


def test_create_assigns_ids_and_trims_title(client):
    first = _create(client, title="  Buy milk ", priority=0)
    second = _create(client, title="Fix bug", priority=2, description="login")
    assert first == {"id": 1, "title": "Buy milk", "description": None, "completed": False, "priority": 0}
    assert second["id"] == 2
    assert [t["id"] for t in client.get("/api/tasks").json()] == [1, 2]


@pytest.mark.parametrize("body", [{"title": "   "}, {"title": "ok", "priority": 7}, {}])
def test_create_rejects_invalid_bodies(client, body):
    assert client.post("/api/tasks", json=body).status_code == 422


def test_patch_changes_only_given_fields(client):
    created = _create(client, title="Read", description="chapter 1", priority=1)
    resp = client.patch(f"/api/tasks/{created['id']}", json={"completed": True})
    assert resp.status_code == 200
    assert resp.json() == dict(created, completed=True)

    resp = client.patch(f"/api/tasks/{created['id']}", json={"priority": 2, "description": ""})
    assert resp.json() == dict(created, completed=True, priority=2, description="")


def test_unknown_ids_are_404(client):
    assert client.patch("/api/tasks/99", json={"completed": True}).status_code == 404
    assert client.delete("/api/tasks/99").status_code == 404


def test_delete_removes_exactly_one_task(client):
    keep = _create(client, title="Keep")
    gone = _create(client, title="Gone")
    assert client.delete(f"/api/tasks/{gone['id']}").status_code == 204
    assert client.get("/api/tasks").json() == [keep]


def test_controller_round_trip_against_the_service(client):
    api = TaskApiClient(base_url="http://testserver", session=client)
    notifier, celebration = RecordingNotifier(), RecordingCelebration()
    ctrl = TaskListController(TaskSyncClient(api, QueryCache()), notifier, celebration)

    ctrl.new_title = "Buy milk"
    ctrl.submit_new_task()
    ctrl.new_title = "Fix bug"
    ctrl.new_priority = 2
    ctrl.submit_new_task()
    assert [t.title for t in ctrl.visible_tasks()] == ["Fix bug", "Buy milk"]

    milk = ctrl.visible_tasks()[1]
    assert ctrl.set_completed(milk, True)
    assert celebration.count == 1
    assert ctrl.delete_task(milk.id)

    remaining = ctrl.all_tasks()
    assert [t.title for t in remaining] == ["Fix bug"]
    assert remaining[0].completed is False
    assert [m for m, _ in notifier.messages] == [
        "Task added successfully",
        "Task added successfully",
        "Task deleted successfully",
    ]
