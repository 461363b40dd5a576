"""Place a task at a given position among its siblings.

Every call fetches the current siblings once, computes the complete target
order and hands it to the sink as a single batch. Nothing is cached between
calls and nothing is retried.
"""

import logging
from typing import List, Optional

from core.order_intent import OrderIntent
from core.ordering import OrderedItem, insert_at_position
from core.task_ref import TaskRef, scope_filter

from .ports import ReorderSink, TaskSource

logger = logging.getLogger("todoist_cli.ordering")


def move_task_to_position(source: TaskSource, sink: ReorderSink, task: TaskRef, position: int) -> List[OrderedItem]:
    scope = scope_filter(task)
    siblings = source.list_tasks(**scope)
    ordered = insert_at_position(task, position, siblings)
    logger.debug(
        "task %s -> position %s in %s (%s fetched, %s ordered)",
        task.id,
        position,
        scope,
        len(siblings),
        len(ordered),
    )
    sink.submit_reorder(ordered)
    return ordered


def move_task_to_top(source: TaskSource, sink: ReorderSink, task: TaskRef) -> List[OrderedItem]:
    return move_task_to_position(source, sink, task, 1)


def apply_order_intent(
    source: TaskSource,
    sink: ReorderSink,
    task: TaskRef,
    intent: Optional[OrderIntent],
) -> Optional[List[OrderedItem]]:
    if intent is None:
        return None
    if intent.is_top:
        return move_task_to_top(source, sink, task)
    return move_task_to_position(source, sink, task, intent.position)
