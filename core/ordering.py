from typing import Iterable, List, NamedTuple

from .task_ref import TaskRef, same_scope


class OrderedItem(NamedTuple):
    id: str
    child_order: int


def sort_by_child_order(tasks: Iterable[TaskRef]) -> List[TaskRef]:
    return sorted(tasks, key=lambda item: (item.child_order, item.id))


def clamp_index(position: int, length: int) -> int:
    return min(max(position - 1, 0), length)


def insert_at_position(task: TaskRef, position: int, candidates: Iterable[TaskRef]) -> List[OrderedItem]:
    """Compute the full sibling order with ``task`` placed at 1-based ``position``.

    Candidates outside the task's scope and any stale copy of the task itself
    are dropped; the rest keep their relative order (child_order, then id).
    Out-of-range positions clamp to the first or last slot. The returned keys
    run 1..N without gaps.
    """
    remaining = sort_by_child_order(
        candidate for candidate in candidates if same_scope(task, candidate) and candidate.id != task.id
    )
    index = clamp_index(position, len(remaining))
    ordered = remaining[:index] + [task] + remaining[index:]
    return [OrderedItem(item.id, number) for number, item in enumerate(ordered, start=1)]
