"""Remote sync client: task mutations plus cache invalidation."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from todo_app.models import Priority, PriorityLike, Task, parse_priority
from todo_app.ports import TaskApi
from todo_app.query_cache import QueryCache

logger = logging.getLogger(__name__)

TASKS_QUERY_KEY = "/api/tasks"


class TaskSyncClient:
    """Wraps the task API so every successful mutation invalidates the list.

    Failures (``TaskApiError``) propagate to the caller untouched and leave
    the cached list valid. There is no retry and no optimistic update.
    """

    def __init__(self, api: TaskApi, cache: QueryCache) -> None:
        self.api = api
        self.cache = cache

    def list_tasks(self) -> List[Task]:
        return self.cache.fetch(TASKS_QUERY_KEY, self.api.list_tasks)

    def create(self, title: str, description: str = "", priority: PriorityLike = Priority.LOW) -> Task:
        payload = {
            "title": title,
            "description": description,
            "completed": False,
            "priority": int(parse_priority(priority)),
        }
        task = self.api.create_task(payload)
        logger.info("Task created id=%s priority=%s", task.id, task.priority.name)
        self.cache.invalidate(TASKS_QUERY_KEY)
        return task

    def update(
        self,
        task_id: int,
        *,
        completed: Optional[bool] = None,
        priority: Optional[PriorityLike] = None,
        description: Optional[str] = None,
    ) -> Task:
        fields: Dict[str, Any] = {}
        if completed is not None:
            fields["completed"] = bool(completed)
        if priority is not None:
            fields["priority"] = int(parse_priority(priority))
        if description is not None:
            fields["description"] = description
        if not fields:
            raise ValueError("update() needs at least one of completed, priority, description")

        task = self.api.update_task(task_id, fields)
        logger.info("Task updated id=%s fields=%s", task_id, sorted(fields))
        self.cache.invalidate(TASKS_QUERY_KEY)
        return task

    def delete(self, task_id: int) -> None:
        self.api.delete_task(task_id)
        logger.info("Task deleted id=%s", task_id)
        self.cache.invalidate(TASKS_QUERY_KEY)
