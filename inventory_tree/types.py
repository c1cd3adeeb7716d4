"""Common type aliases and enumerations.

``RenderItemFn`` and ``RenderContainerFn`` are the two hooks of a rendering
strategy (see :mod:`inventory_tree.renderer.strategy`); ``SanitizeFn`` is the
shape of the text sanitizer collaborators threaded through rendering.
"""

from enum import StrEnum, auto
from typing import Callable, Sequence, Union, TYPE_CHECKING


# Forward declarations to avoid circular imports:
if TYPE_CHECKING:
    from inventory_tree.models import ContainerItem, InventoryItem
    from inventory_tree.renderer.strategy import RenderContext

ItemID = int

Node = Union["InventoryItem", "ContainerItem"]

SanitizeFn = Callable[[str], str]

RenderItemFn = Callable[["InventoryItem", int, int, "RenderContext"], str]
RenderContainerFn = Callable[
    ["ContainerItem", Sequence[str], int, int, "RenderContext"], str
]


class CostUnit(StrEnum):
    """Coin denominations used in item costs."""

    CP = auto()
    SP = auto()
    EP = auto()
    GP = auto()
    PP = auto()


class EncumbranceLevel(StrEnum):
    """Carrying bands derived from Strength (variant encumbrance rules)."""

    UNENCUMBERED = auto()
    ENCUMBERED = auto()
    HEAVILY_ENCUMBERED = auto()
    OVERLOADED = auto()
