"""View/controller for the task list page.

Owns every piece of transient UI state (form fields, filters, sort, expanded
rows, pending flags) and turns user actions into sync-client calls. It knows
nothing about Streamlit; the page binds widgets to its attributes.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from todo_app.api_client import TaskApiError
from todo_app.models import Priority, PriorityLike, Task, parse_priority
from todo_app.pipeline import ALL, filter_and_sort
from todo_app.ports import CelebrationTrigger, NotificationSink
from todo_app.sync import TASKS_QUERY_KEY, TaskSyncClient

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No tasks yet. Add one above!"
NO_MATCH_MESSAGE = "No tasks match your filters."


class TaskListController:
    def __init__(
        self,
        sync: TaskSyncClient,
        notifier: NotificationSink,
        celebration: CelebrationTrigger,
    ) -> None:
        self.sync = sync
        self.notifier = notifier
        self.celebration = celebration

        # new-task form
        self.new_title = ""
        self.new_description = ""
        self.new_priority: Priority = Priority.LOW

        # list controls
        self.search = ""
        self.priority_filter: str = ALL
        self.status_filter: str = ALL
        self.sort_field: str = "priority"
        self.sort_order: str = "desc"

        self.expanded_ids: Set[int] = set()
        self.creating = False
        self.deleting: Set[int] = set()

    # ---- reads ----

    def all_tasks(self) -> List[Task]:
        return self.sync.list_tasks()

    def visible_tasks(self) -> List[Task]:
        return filter_and_sort(
            self.all_tasks(),
            search=self.search,
            priority_filter=self.priority_filter,
            status_filter=self.status_filter,
            sort_field=self.sort_field,
            sort_order=self.sort_order,
        )

    def empty_message(self) -> Optional[str]:
        if not self.all_tasks():
            return EMPTY_LIST_MESSAGE
        if not self.visible_tasks():
            return NO_MATCH_MESSAGE
        return None

    # ---- new-task form ----

    def reset_form(self) -> None:
        self.new_title = ""
        self.new_description = ""
        self.new_priority = Priority.LOW

    def queue_new_task(self) -> bool:
        """Mark the form for submission and return whether it was queued.

        While a create is queued or running ``creating`` stays True, so the
        page renders the create button disabled until ``submit_new_task``
        finishes. A blank title or an already pending create is not queued.
        """
        if self.creating:
            return False
        if not (self.new_title or "").strip():
            logger.debug("Ignoring submit with blank title")
            return False
        self.creating = True
        return True

    def submit_new_task(self) -> Optional[Task]:
        """Create a task from the form fields.

        A blank title is rejected here and never reaches the service. On
        failure the form keeps its contents so the user can retry.
        """
        title = (self.new_title or "").strip()
        if not title:
            self.creating = False
            logger.debug("Ignoring submit with blank title")
            return None

        self.creating = True
        try:
            task = self.sync.create(
                title,
                (self.new_description or "").strip(),
                self.new_priority,
            )
        except TaskApiError as exc:
            self._report_failure("add task", exc)
            return None
        finally:
            self.creating = False

        self.reset_form()
        self.notifier.notify("Task added successfully")
        return task

    # ---- row actions ----

    def set_completed(self, task: Task, completed: bool) -> bool:
        if not task.completed and completed:
            self.celebration.celebrate()
        return self._update(task.id, completed=bool(completed))

    def set_priority(self, task_id: int, priority: PriorityLike) -> bool:
        return self._update(task_id, priority=parse_priority(priority))

    def set_description(self, task_id: int, description: str) -> bool:
        return self._update(task_id, description=description)

    def queue_delete(self, task_id: int) -> bool:
        """Record a delete for ``task_id``; ``delete_task`` carries it out."""
        if task_id in self.deleting:
            return False
        self.deleting.add(task_id)
        return True

    def delete_task(self, task_id: int) -> bool:
        self.deleting.add(task_id)
        try:
            self.sync.delete(task_id)
        except TaskApiError as exc:
            self._report_failure("delete task", exc)
            return False
        finally:
            self.deleting.discard(task_id)

        self.expanded_ids.discard(task_id)
        self.notifier.notify("Task deleted successfully")
        return True

    @property
    def delete_pending(self) -> bool:
        return bool(self.deleting)

    def toggle_expanded(self, task_id: int) -> None:
        if task_id in self.expanded_ids:
            self.expanded_ids.remove(task_id)
        else:
            self.expanded_ids.add(task_id)

    def is_expanded(self, task_id: int) -> bool:
        return task_id in self.expanded_ids

    def refresh(self) -> None:
        """Drop the cached list so the next read goes back to the service."""
        self.sync.cache.invalidate(TASKS_QUERY_KEY)

    def toggle_sort_order(self) -> None:
        self.sort_order = "asc" if self.sort_order == "desc" else "desc"

    # ---- internals ----

    def _update(self, task_id: int, **fields) -> bool:
        try:
            self.sync.update(task_id, **fields)
        except TaskApiError as exc:
            self._report_failure("update task", exc)
            return False
        return True

    def _report_failure(self, action: str, exc: TaskApiError) -> None:
        logger.warning("Could not %s: %s", action, exc)
        self.notifier.notify(f"Could not {action}. Please try again.", level="error")
