from __future__ import annotations

import logging

import pytest

from todo_app.controller import TaskListController
from todo_app.models import Priority, Task
from todo_app.query_cache import QueryCache
from todo_app.sync import TaskSyncClient

from .fakes import FakeTaskApi, RecordingCelebration, RecordingNotifier


@pytest.fixture()
def sample_tasks():
    return [
        Task(id=1, title="Buy milk", priority=Priority.LOW, completed=False),
        Task(id=2, title="Fix bug", priority=Priority.HIGH, completed=False),
    ]


@pytest.fixture()
def api(sample_tasks) -> FakeTaskApi:
    return FakeTaskApi(sample_tasks)


@pytest.fixture()
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture()
def sync(api, cache) -> TaskSyncClient:
    return TaskSyncClient(api, cache)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def celebration() -> RecordingCelebration:
    return RecordingCelebration()


@pytest.fixture()
def controller(sync, notifier, celebration) -> TaskListController:
    return TaskListController(sync, notifier, celebration)


@pytest.fixture()
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
