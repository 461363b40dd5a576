from typing import List, Protocol, Sequence

from core.ordering import OrderedItem
from core.task_ref import TaskRef


class TaskSource(Protocol):
    def list_tasks(self, **filters: str) -> List[TaskRef]:
        ...


class ReorderSink(Protocol):
    def submit_reorder(self, items: Sequence[OrderedItem]) -> None:
        ...
