from typing import Optional


class TodoistError(RuntimeError):
    pass


class TodoistApiError(TodoistError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TodoistPermissionError(TodoistApiError):
    pass


class ReorderError(TodoistError):
    pass


class ReorderTransportError(ReorderError):
    """The reorder request failed at the HTTP or network layer; nothing was applied."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = "",
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ReorderCommandError(ReorderError):
    """HTTP succeeded but the service rejected the reorder command."""

    def __init__(self, message: str, detail: str, command_uuid: str) -> None:
        super().__init__(message)
        self.detail = detail
        self.command_uuid = command_uuid
