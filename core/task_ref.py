from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


def _optional_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass
class TaskRef:
    """Minimal view of a remote task: identity, placement and sibling order."""

    id: str
    project_id: str
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    child_order: int = 0

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "TaskRef":
        raw_order = payload.get("child_order")
        if raw_order is None:
            raw_order = payload.get("order")
        try:
            child_order = int(raw_order) if raw_order is not None else 0
        except (TypeError, ValueError):
            child_order = 0
        return cls(
            id=str(payload["id"]),
            project_id=str(payload.get("project_id") or ""),
            section_id=_optional_id(payload.get("section_id")),
            parent_id=_optional_id(payload.get("parent_id")),
            child_order=child_order,
        )


def scope_filter(task: TaskRef) -> Dict[str, str]:
    """Query filter selecting the task's siblings: parent, else section, else project."""
    if task.parent_id:
        return {"parent_id": task.parent_id}
    if task.section_id:
        return {"section_id": task.section_id}
    if task.project_id:
        return {"project_id": task.project_id}
    raise ValueError(f"task {task.id} has no parent, section or project id")


def same_scope(task: TaskRef, candidate: TaskRef) -> bool:
    # Project is not compared: candidates always come from a scope-filtered fetch.
    return task.section_id == candidate.section_id and task.parent_id == candidate.parent_id
