from .errors import (
    ReorderCommandError,
    ReorderError,
    ReorderTransportError,
    TodoistApiError,
    TodoistError,
    TodoistPermissionError,
)
from .rest_client import API_BASE, TasksClient
from .sync_client import SYNC_URL, SyncClient

__all__ = [
    "API_BASE",
    "SYNC_URL",
    "ReorderCommandError",
    "ReorderError",
    "ReorderTransportError",
    "SyncClient",
    "TasksClient",
    "TodoistApiError",
    "TodoistError",
    "TodoistPermissionError",
]
