import json
from datetime import datetime, timezone
from typing import Dict, Optional

from .constants import EXIT_FAILURE, EXIT_OK, EXIT_USAGE

# Attributes of Todoist errors worth surfacing to scripts parsing the output.
_ERROR_FIELDS = ("status_code", "reason", "detail", "command_uuid")


def iso_timestamp() -> str:
    """UTC timestamp for structured CLI output."""
    return datetime.now(timezone.utc).isoformat()


def error_details(error: BaseException) -> Dict[str, object]:
    """Machine-readable part of a failure: error class plus any remote status it carries."""
    details: Dict[str, object] = {"type": type(error).__name__}
    for name in _ERROR_FIELDS:
        value = getattr(error, name, None)
        if value not in (None, ""):
            details[name] = value
    return details


def structured_response(
    command: str,
    *,
    status: str = "OK",
    message: str = "",
    payload: Optional[Dict] = None,
    summary: Optional[str] = None,
    exit_code: int = EXIT_OK,
) -> int:
    """Print one JSON envelope for ``command`` and hand back its exit code."""
    body: Dict[str, object] = {
        "command": command,
        "status": status,
        "message": message,
        "timestamp": iso_timestamp(),
        "payload": payload or {},
    }
    if summary:
        body["summary"] = summary
    print(json.dumps(body, ensure_ascii=False, indent=2))
    return exit_code


def structured_error(
    command: str,
    message: str,
    *,
    payload: Optional[Dict] = None,
    error: Optional[BaseException] = None,
) -> int:
    """Failure envelope (exit 1); ``error`` adds its HTTP status / sync detail under ``payload.error``."""
    body = dict(payload or {})
    if error is not None:
        body["error"] = error_details(error)
    return structured_response(command, status="ERROR", message=message, payload=body, exit_code=EXIT_FAILURE)


def usage_error(command: str, message: str) -> int:
    """Rejected before any request was made (exit 2)."""
    return structured_response(command, status="USAGE", message=message, exit_code=EXIT_USAGE)


__all__ = ["error_details", "iso_timestamp", "structured_response", "structured_error", "usage_error"]
