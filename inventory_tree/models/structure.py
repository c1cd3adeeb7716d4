"""Immutable nested inventory snapshot.

The :class:`NestedInventoryStructure` is the output of the tree builder and
the input of the weight and rendering passes. Like every model in this
package it is a frozen dataclass over ``pyrsistent`` collections; a fresh one
is built for each call and discarded after rendering.
"""

from dataclasses import dataclass
from typing import Iterator

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

from inventory_tree.models.container import ContainerItem
from inventory_tree.types import Node


@dataclass(frozen=True)
class NestedInventoryStructure:
    """Container tree for one character.

    Attributes:
        character_id: Id of the owning character (the implicit root container).
        root_items: Items carried directly, in input order.
        containers: Every resolved container keyed by its id as a string.
        total_items: Number of records supplied, independent of filtering.
    """

    character_id: int
    root_items: PVector[Node] = pvector()
    containers: PMap[str, ContainerItem] = pmap()
    total_items: int = 0

    def walk(self) -> Iterator[Node]:
        """Yield every node depth-first in render order."""
        stack = list(reversed(self.root_items))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, ContainerItem):
                stack.extend(reversed(node.contents))
