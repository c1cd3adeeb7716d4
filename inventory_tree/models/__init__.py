"""inventory_tree.models
=================================

Aggregate import surface for the inventory data model.

Callers construct :class:`InventoryItem` / :class:`ItemDefinition` (or pass
raw upstream mappings through :mod:`inventory_tree.loader`); the tree builder
derives :class:`ContainerItem` views and the
:class:`NestedInventoryStructure` snapshot. All classes are frozen
dataclasses, so a pass over the data never mutates what the caller supplied::

    from inventory_tree.models import InventoryItem, ItemDefinition

"""

from .definition import Cost, ItemDefinition
from .item import InventoryItem
from .container import ContainerItem
from .structure import NestedInventoryStructure

__all__ = [
    "ContainerItem",
    "Cost",
    "InventoryItem",
    "ItemDefinition",
    "NestedInventoryStructure",
]
