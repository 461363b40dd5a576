from .order_intent import OrderIntent, OrderIntentError, parse_order_intent
from .ordering import OrderedItem, insert_at_position, sort_by_child_order
from .task_ref import TaskRef, same_scope, scope_filter

__all__ = [
    "OrderIntent",
    "OrderIntentError",
    "parse_order_intent",
    # Ordering
    "OrderedItem",
    "insert_at_position",
    "sort_by_child_order",
    # Scope
    "TaskRef",
    "same_scope",
    "scope_filter",
]
