"""HTTP API for the task collection.

Run locally with:
  todo-server
or
  uvicorn todo_app.server.api:create_app --factory
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, field_validator

from todo_app.config import TodoServerConfig
from todo_app.logging_setup import setup_logging
from todo_app.models import Priority, Task
from todo_app.server import repo

logger = logging.getLogger(__name__)


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    completed: bool = False
    priority: Priority = Priority.LOW

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value


class TaskUpdate(BaseModel):
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    description: Optional[str] = None


class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    priority: Priority

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(**task.to_dict())


def create_app(database_url: Optional[str] = None) -> FastAPI:
    if database_url is None:
        database_url = TodoServerConfig.from_env().database_url
    repo.init_db(database_url)

    app = FastAPI(title="todo-tasks", version="1.0")

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    @app.get("/api/tasks", response_model=List[TaskOut])
    def list_tasks() -> List[TaskOut]:
        return [TaskOut.from_task(t) for t in repo.list_tasks(database_url)]

    @app.post("/api/tasks", response_model=TaskOut, status_code=201)
    def create_task(req: TaskCreate) -> TaskOut:
        task = repo.create_task(
            database_url,
            title=req.title,
            description=req.description,
            completed=req.completed,
            priority=req.priority,
        )
        logger.info("Created task id=%s", task.id)
        return TaskOut.from_task(task)

    @app.patch("/api/tasks/{task_id}", response_model=TaskOut)
    def update_task(task_id: int, req: TaskUpdate) -> TaskOut:
        fields = req.model_dump(exclude_unset=True, exclude_none=True)
        task = repo.update_task(database_url, task_id, fields)
        if task is None:
            raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
        return TaskOut.from_task(task)

    @app.delete("/api/tasks/{task_id}", status_code=204)
    def delete_task(task_id: int) -> Response:
        if not repo.delete_task(database_url, task_id):
            raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
        logger.info("Deleted task id=%s", task_id)
        return Response(status_code=204)

    return app


def main() -> None:
    import uvicorn

    cfg = TodoServerConfig.from_env()
    setup_logging(level=cfg.log_level)
    uvicorn.run(create_app(cfg.database_url), host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()
