"""HTTP client for the task collection endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from todo_app.models import Task

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"


class TaskApiError(Exception):
    """A request to the task service failed.

    ``status_code`` is 0 when the request never got a response.
    """

    def __init__(self, message: str, *, status_code: int = 0, method: str = "", url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.method = method
        self.url = url


@dataclass(frozen=True)
class ApiResponse:
    ok: bool
    status_code: int
    url: str
    method: str
    data: Any = None
    error: Optional[str] = None

    def raise_for_error(self) -> "ApiResponse":
        if not self.ok:
            raise TaskApiError(
                f"{self.method} {self.url} failed: {self.error or f'HTTP {self.status_code}'}",
                status_code=self.status_code,
                method=self.method,
                url=self.url,
            )
        return self


class TaskApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.timeout_seconds = int(timeout_seconds)
        self._session = session or requests.Session()

    def request(self, method: str, path: str, *, json_body: Any = None) -> ApiResponse:
        """Send one request and describe the outcome; transport errors do not raise."""
        method_u = (method or "GET").upper().strip()
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"

        try:
            resp = self._session.request(
                method_u,
                url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s transport error: %s", method_u, url, exc)
            return ApiResponse(ok=False, status_code=0, url=url, method=method_u, error=str(exc))

        parsed: Any = None
        if resp.content:
            try:
                parsed = resp.json()
            except ValueError:
                parsed = None

        ok = 200 <= int(resp.status_code) < 300
        if ok:
            logger.debug("%s %s -> %s", method_u, url, resp.status_code)
            return ApiResponse(ok=True, status_code=int(resp.status_code), url=url, method=method_u, data=parsed)

        detail: Optional[str] = None
        if isinstance(parsed, dict) and parsed.get("detail") is not None:
            detail = str(parsed["detail"])
        elif resp.text:
            detail = resp.text[:500]
        logger.warning("%s %s -> HTTP %s %s", method_u, url, resp.status_code, detail or "")
        return ApiResponse(
            ok=False,
            status_code=int(resp.status_code),
            url=url,
            method=method_u,
            data=parsed,
            error=detail or f"HTTP {resp.status_code}",
        )

    # ---- task collection ----

    def list_tasks(self) -> List[Task]:
        resp = self.request("GET", TASKS_PATH).raise_for_error()
        if not isinstance(resp.data, list):
            raise TaskApiError(
                f"GET {resp.url} returned a non-list payload",
                status_code=resp.status_code,
                method=resp.method,
                url=resp.url,
            )
        return [self._to_task(resp, item) for item in resp.data]

    def create_task(self, payload: Dict[str, Any]) -> Task:
        resp = self.request("POST", TASKS_PATH, json_body=payload).raise_for_error()
        return self._to_task(resp, resp.data)

    def update_task(self, task_id: int, fields: Dict[str, Any]) -> Task:
        resp = self.request("PATCH", f"{TASKS_PATH}/{int(task_id)}", json_body=fields).raise_for_error()
        return self._to_task(resp, resp.data)

    def delete_task(self, task_id: int) -> None:
        self.request("DELETE", f"{TASKS_PATH}/{int(task_id)}").raise_for_error()

    @staticmethod
    def _to_task(resp: ApiResponse, item: Any) -> Task:
        try:
            return Task.from_dict(item)
        except (KeyError, TypeError, ValueError) as exc:
            raise TaskApiError(
                f"{resp.method} {resp.url} returned a malformed task: {exc}",
                status_code=resp.status_code,
                method=resp.method,
                url=resp.url,
            ) from exc
