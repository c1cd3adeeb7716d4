from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from inventory_tree.models.definition import ItemDefinition
from inventory_tree.models.item import InventoryItem
from inventory_tree.types import ItemID, Node


@dataclass(frozen=True)
class ContainerItem:
    """Resolved container: the underlying item plus what it holds.

    Created by the tree builder, never supplied by callers. Leaves of the tree
    stay plain :class:`InventoryItem` instances, so ``isinstance(node,
    ContainerItem)`` is the only branch needed when walking a structure.

    Attributes:
        item:
            The container's own inventory line.
        contents:
            Direct children in input order (leaves or nested containers).
        current_weight:
            Weight of everything inside, excluding the container's own base
            weight. Nested magic containers contribute only their base weight.
    """

    item: InventoryItem
    contents: PVector[Node] = pvector()
    current_weight: float = 0.0

    @property
    def id(self) -> ItemID:
        return self.item.id

    @property
    def definition(self) -> ItemDefinition:
        return self.item.definition

    @property
    def quantity(self) -> float:
        return self.item.quantity

    @property
    def name(self) -> str:
        return self.item.name
