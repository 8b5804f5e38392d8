"""Interfaces the controller and sync client depend on.

Concrete implementations live in ``api_client`` (HTTP) and ``effects``
(Streamlit); tests supply fakes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol

from todo_app.models import Task


class TaskApi(Protocol):
    def list_tasks(self) -> List[Task]: ...
    def create_task(self, payload: Dict[str, Any]) -> Task: ...
    def update_task(self, task_id: int, fields: Dict[str, Any]) -> Task: ...
    def delete_task(self, task_id: int) -> None: ...


class NotificationSink(Protocol):
    """Shows a short message to the user; no acknowledgement."""

    def notify(self, message: str, *, level: str = "info") -> None: ...


class CelebrationTrigger(Protocol):
    """Purely cosmetic effect fired when a task gets completed."""

    def celebrate(self) -> None: ...
