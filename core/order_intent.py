import re
from dataclasses import dataclass
from typing import Final, Literal, Optional

OrderKind = Literal["top", "position"]

TOP_KEYWORD: Final[str] = "top"
_POSITION_PATTERN = re.compile(r"^[0-9]+$")

ERR_EXCLUSIVE = 'Use either "--top" or "--order <position>".'
ERR_INVALID_ORDER = 'Invalid --order value. Use "top" or a positive integer.'


class OrderIntentError(ValueError):
    pass


@dataclass(frozen=True)
class OrderIntent:
    kind: OrderKind
    position: int = 1

    def __post_init__(self) -> None:
        if self.position < 1:
            raise OrderIntentError(ERR_INVALID_ORDER)

    @classmethod
    def top(cls) -> "OrderIntent":
        return cls("top")

    @classmethod
    def at(cls, position: int) -> "OrderIntent":
        return cls("position", position)

    @property
    def is_top(self) -> bool:
        return self.kind == "top"


def parse_order_intent(top: bool = False, order: Optional[str] = None) -> Optional[OrderIntent]:
    """Turn the --top / --order option pair into an OrderIntent.

    Returns None when neither option asks for a position: the task then keeps
    the place the service gave it and no ordering request is made.
    Raises OrderIntentError for conflicting or malformed input.
    """
    value = (order or "").strip()
    if top and value:
        raise OrderIntentError(ERR_EXCLUSIVE)
    if top:
        return OrderIntent.top()
    if not value:
        return None
    if value.lower() == TOP_KEYWORD:
        return OrderIntent.top()
    if not _POSITION_PATTERN.match(value):
        raise OrderIntentError(ERR_INVALID_ORDER)
    position = int(value, 10)
    if position < 1:
        raise OrderIntentError(ERR_INVALID_ORDER)
    return OrderIntent.at(position)
