"""Todoist CLI commands."""

import argparse
from typing import Any, Dict, List, Optional, Tuple

import requests

from application.task_ordering import apply_order_intent
from config import get_api_base, get_sync_url, require_token, set_user_token
from core.order_intent import OrderIntent, OrderIntentError, parse_order_intent
from core.ordering import OrderedItem
from core.task_ref import TaskRef
from infrastructure.todoist import SyncClient, TasksClient, TodoistError

from .cli_io import structured_error, structured_response, usage_error


def _build_clients() -> Tuple[TasksClient, SyncClient]:
    """Factory for the REST and sync clients sharing one HTTP session."""
    session = requests.Session()
    tasks = TasksClient(session, require_token, base_url=get_api_base())
    sync = SyncClient(session, require_token, endpoint=get_sync_url())
    return tasks, sync


def _parse_intent(args: argparse.Namespace) -> Optional[OrderIntent]:
    return parse_order_intent(getattr(args, "top", False), getattr(args, "order", None))


def _order_payload(ordered: Optional[List[OrderedItem]]) -> Optional[List[Dict[str, Any]]]:
    if ordered is None:
        return None
    return [{"id": item.id, "child_order": item.child_order} for item in ordered]


def cmd_auth(args: argparse.Namespace) -> int:
    """Set or clear the Todoist API token."""
    if args.unset:
        set_user_token("")
        return structured_response("auth", message="Token cleared", payload={"token": None})
    if not args.token:
        return usage_error("auth", "Pass --token <token> or --unset")
    set_user_token(args.token)
    return structured_response("auth", message="Token saved", payload={"token": "***"})


def cmd_add(args: argparse.Namespace) -> int:
    """Create a task, then place it when --top/--order is given."""
    try:
        intent = _parse_intent(args)
    except OrderIntentError as exc:
        return usage_error("add", str(exc))
    content = " ".join(args.content).strip()
    if not content:
        return usage_error("add", "Task content is empty")
    fields: Dict[str, Any] = {
        "description": args.description,
        "project_id": args.project_id,
        "section_id": args.section_id,
        "parent_id": args.parent_id,
        "labels": list(args.labels or []),
        "due_string": args.due,
    }
    if args.priority:
        fields["priority"] = 5 - args.priority
    tasks, sync = _build_clients()
    try:
        created = tasks.add_task(content, **fields)
    except TodoistError as exc:
        return structured_error("add", str(exc), error=exc)
    task = TaskRef.from_api(created)
    try:
        ordered = apply_order_intent(tasks, sync, task, intent)
    except (TodoistError, ValueError) as exc:
        return structured_error(
            "add",
            f"Task {task.id} created but not repositioned: {exc}",
            payload={"task": created},
            error=exc,
        )
    return structured_response(
        "add",
        message=f"Added: {created.get('content', content)}",
        payload={"task": created, "order": _order_payload(ordered)},
        summary=task.id,
    )


def cmd_move(args: argparse.Namespace) -> int:
    """Move a task under a new project/section/parent, optionally placing it."""
    try:
        intent = _parse_intent(args)
    except OrderIntentError as exc:
        return usage_error("move", str(exc))
    targets = {
        key: value
        for key, value in (
            ("project_id", args.project_id),
            ("section_id", args.section_id),
            ("parent_id", args.parent_id),
        )
        if value
    }
    if len(targets) != 1:
        return usage_error("move", "Specify exactly one of --project-id, --section-id, --parent")
    tasks, sync = _build_clients()
    try:
        tasks.move_task(args.task_id, **targets)
        moved = tasks.get_task(args.task_id)
    except TodoistError as exc:
        return structured_error("move", str(exc), error=exc)
    task = TaskRef.from_api(moved)
    try:
        ordered = apply_order_intent(tasks, sync, task, intent)
    except (TodoistError, ValueError) as exc:
        return structured_error(
            "move",
            f"Task {task.id} moved but not repositioned: {exc}",
            payload={"task": moved},
            error=exc,
        )
    return structured_response(
        "move",
        message=f"Moved: {moved.get('content', task.id)}",
        payload={"task": moved, "order": _order_payload(ordered)},
        summary=task.id,
    )


def cmd_reorder(args: argparse.Namespace) -> int:
    """Reposition an existing task inside its current scope."""
    try:
        intent = _parse_intent(args)
    except OrderIntentError as exc:
        return usage_error("reorder", str(exc))
    if intent is None:
        return usage_error("reorder", 'Specify "--top" or "--order <position>".')
    tasks, sync = _build_clients()
    try:
        task = TaskRef.from_api(tasks.get_task(args.task_id))
        ordered = apply_order_intent(tasks, sync, task, intent)
    except (TodoistError, ValueError) as exc:
        return structured_error("reorder", str(exc), error=exc)
    position = next((item.child_order for item in ordered or [] if item.id == task.id), 1)
    return structured_response(
        "reorder",
        message=f"Task {task.id} placed at position {position}",
        payload={"task_id": task.id, "position": position, "order": _order_payload(ordered)},
        summary=str(position),
    )
