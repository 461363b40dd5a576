import json
import logging
import uuid
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from core.ordering import OrderedItem

from .errors import ReorderCommandError, ReorderTransportError, TodoistPermissionError

SYNC_URL = "https://api.todoist.com/api/v1/sync"
REORDER_COMMAND = "item_reorder"
STATUS_OK = "ok"

logger = logging.getLogger("todoist_cli.sync")


def build_reorder_command(items: Sequence[OrderedItem], command_uuid: str) -> Dict[str, Any]:
    return {
        "type": REORDER_COMMAND,
        "uuid": command_uuid,
        "args": {"items": [{"id": item.id, "child_order": item.child_order} for item in items]},
    }


def format_sync_status(status: Any) -> str:
    """Error detail for a per-command status; empty string means success."""
    if not status or status == STATUS_OK:
        return ""
    if isinstance(status, str):
        return status
    try:
        return json.dumps(status)
    except (TypeError, ValueError):
        return str(status)


class SyncClient:
    def __init__(
        self,
        session: Optional[requests.Session],
        token_provider: Callable[[], Optional[str]],
        endpoint: str = SYNC_URL,
        timeout: int = 30,
        uuid_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.endpoint = endpoint
        self.session = session or requests.Session()
        self.token_provider = token_provider
        self.timeout = timeout
        self.uuid_factory = uuid_factory

    def submit_reorder(self, items: Sequence[OrderedItem]) -> None:
        """Apply ``items`` as one atomic item_reorder command.

        A sequence of zero or one items cannot change anything and is skipped
        without touching the network.
        """
        if len(items) <= 1:
            logger.debug("reorder skipped: %s item(s)", len(items))
            return
        token = self.token_provider()
        if not token:
            raise TodoistPermissionError("Todoist API token missing")
        command_uuid = self.uuid_factory()
        payload = {"commands": [build_reorder_command(items, command_uuid)]}
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        logger.debug("submitting %s for %s items (uuid=%s)", REORDER_COMMAND, len(items), command_uuid)
        try:
            response = self.session.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ReorderTransportError(f"Todoist reorder failed: {exc}") from exc

        body = response.text or ""
        if not 200 <= response.status_code < 300:
            reason = response.reason or ""
            status_label = f"{response.status_code} {reason}".strip()
            detail = f": {body}" if body else ""
            logger.warning("reorder rejected with HTTP %s", response.status_code)
            raise ReorderTransportError(
                f"Todoist reorder failed ({status_label}){detail}",
                status_code=response.status_code,
                reason=reason,
                body=body,
            )

        message = format_sync_status(self._command_status(response, command_uuid))
        if message:
            logger.warning("reorder command %s not applied: %s", command_uuid, message)
            raise ReorderCommandError(f"Todoist reorder failed: {message}", detail=message, command_uuid=command_uuid)

    @staticmethod
    def _command_status(response: requests.Response, command_uuid: str) -> Any:
        if not response.text:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        statuses = data.get("sync_status")
        if not isinstance(statuses, dict):
            return None
        return statuses.get(command_uuid)
