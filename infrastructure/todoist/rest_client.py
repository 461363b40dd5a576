import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from core.task_ref import TaskRef

from .errors import TodoistApiError, TodoistPermissionError

API_BASE = "https://api.todoist.com/api/v1"
MOVE_TARGETS = ("project_id", "section_id", "parent_id")

logger = logging.getLogger("todoist_cli.api")


class TasksClient:
    def __init__(
        self,
        session: Optional[requests.Session],
        token_provider: Callable[[], Optional[str]],
        base_url: str = API_BASE,
        timeout: int = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.token_provider = token_provider
        self.timeout = timeout

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        token = self.token_provider()
        if not token:
            raise TodoistPermissionError("Todoist API token missing")
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"Authorization": f"Bearer {token}"}
        logger.debug("%s %s params=%s", method.upper(), url, params)
        try:
            if method == "get":
                resp = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            else:
                resp = getattr(self.session, method)(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TodoistApiError(f"Todoist API network error: {exc}") from exc
        if resp.status_code in (401, 403):
            raise TodoistPermissionError(f"HTTP {resp.status_code}", status_code=resp.status_code, body=resp.text)
        if resp.status_code >= 400:
            logger.warning("Todoist API error on %s %s: %s", method.upper(), path, resp.status_code)
            raise TodoistApiError(
                f"Todoist API error: {resp.status_code} {resp.text[:200]}",
                status_code=resp.status_code,
                body=resp.text,
            )
        if resp.status_code == 204 or not resp.text:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise TodoistApiError(f"Todoist API returned invalid JSON for {path}") from exc

    def list_tasks(self, **filters: str) -> List[TaskRef]:
        """Fetch every active task matching ``filters``, following cursor pages."""
        empty = sorted(key for key, value in filters.items() if not value)
        if empty:
            raise ValueError(f"empty task filter: {', '.join(empty)}")
        params: Dict[str, Any] = dict(filters)
        tasks: List[TaskRef] = []
        while True:
            data = self.request("get", "tasks", params=params) or {}
            tasks.extend(TaskRef.from_api(item) for item in data.get("results") or [])
            cursor = data.get("next_cursor")
            if not cursor:
                return tasks
            params = {**params, "cursor": cursor}

    def get_task(self, task_id: str) -> Dict[str, Any]:
        data = self.request("get", f"tasks/{task_id}")
        if not isinstance(data, dict):
            raise TodoistApiError(f"Task not found: {task_id}")
        return data

    def add_task(self, content: str, **fields: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"content": content}
        payload.update({key: value for key, value in fields.items() if value not in (None, "", [])})
        data = self.request("post", "tasks", payload=payload)
        if not isinstance(data, dict):
            raise TodoistApiError("Todoist API returned no task for create")
        return data

    def move_task(self, task_id: str, **target: str) -> None:
        chosen = {key: value for key, value in target.items() if value}
        if len(chosen) != 1 or next(iter(chosen)) not in MOVE_TARGETS:
            raise ValueError("move requires exactly one of project_id, section_id, parent_id")
        self.request("post", f"tasks/{task_id}/move", payload=chosen)
