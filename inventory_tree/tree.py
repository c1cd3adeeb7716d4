"""Container tree construction from parent-pointer references.

Upstream inventories are flat: every item names the container holding it via
``container_entity_id`` (the character id meaning "carried directly"). The
builder groups items by that reference and assembles an immutable
:class:`NestedInventoryStructure`.

Resolution rules:

1. Items with quantity <= 0 are dropped unless
   ``include_zero_quantity_items`` is set. A dropped container takes its
   contents with it.
2. A reference is resolved only against the character id or a container in
   the same batch. Anything else (unknown id, a non-container parent, the
   item itself) puts the item at the root.
3. Parent chains that loop without reaching the character are broken by
   moving the loop member that appears first in the input to the root. Each
   walk is bounded by the batch size.
4. The depth-first descent keeps a visited set; a container id met a second
   time (duplicate ids) is kept as a plain leaf and never re-entered.

Working data is held in ordinary dicts/lists and frozen into ``pyrsistent``
collections at the end, so the caller's records are never touched.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from pyrsistent import pmap, pvector
from pyrsistent.typing import PVector

from inventory_tree.loader import with_numeric_quantity
from inventory_tree.models import (
    ContainerItem,
    InventoryItem,
    NestedInventoryStructure,
)
from inventory_tree.options import DEFAULT_OPTIONS, ProcessingOptions
from inventory_tree.types import Node
from inventory_tree.weight import contents_weight

logger = logging.getLogger(__name__)

ParentKey = Optional[str]  # None is the character (root)


def _is_included(item: InventoryItem, options: ProcessingOptions) -> bool:
    return options.include_zero_quantity_items or item.quantity > 0


def _container_index(items: Sequence[InventoryItem]) -> Dict[str, int]:
    """Map container id (as string) to the position of its first occurrence."""
    index: Dict[str, int] = {}
    for position, item in enumerate(items):
        if item.definition.is_container:
            index.setdefault(str(item.id), position)
    return index


def resolve_parents(
    items: Sequence[InventoryItem], character_id: int
) -> List[ParentKey]:
    """Return the effective parent key of every item, by position.

    Unresolvable references and loops are redirected to the root (``None``).
    """
    root = str(character_id)
    containers = _container_index(items)

    parents: List[ParentKey] = []
    for item in items:
        key = str(item.container_entity_id)
        if key == root:
            parents.append(None)
        elif key in containers and key != str(item.id):
            parents.append(key)
        else:
            logger.warning(
                "Item %s references unknown container %s; placing it at the root",
                item.id,
                item.container_entity_id,
            )
            parents.append(None)

    for start in range(len(items)):
        chain: List[int] = []
        on_chain: Set[int] = set()
        current = start
        while parents[current] is not None:
            if current in on_chain:
                loop = chain[chain.index(current) :]
                breaker = min(loop)
                logger.warning(
                    "Containers %s contain each other; placing %s at the root",
                    [items[i].id for i in loop],
                    items[breaker].id,
                )
                parents[breaker] = None
                break
            chain.append(current)
            on_chain.add(current)
            current = containers[parents[current]]  # type: ignore[index]
    return parents


def group_by_parent(
    items: Sequence[InventoryItem], parents: Sequence[ParentKey]
) -> Dict[ParentKey, List[InventoryItem]]:
    """Bucket items under their parent key, preserving input order."""
    buckets: Dict[ParentKey, List[InventoryItem]] = {}
    for item, parent in zip(items, parents):
        buckets.setdefault(parent, []).append(item)
    return buckets


def _resolve_nodes(
    items: Sequence[InventoryItem],
    buckets: Dict[ParentKey, List[InventoryItem]],
    visited: Set[str],
    containers: Dict[str, ContainerItem],
    options: ProcessingOptions,
) -> PVector[Node]:
    return pvector(
        _resolve_node(item, buckets, visited, containers, options)
        for item in items
        if _is_included(item, options)
    )


def _resolve_node(
    item: InventoryItem,
    buckets: Dict[ParentKey, List[InventoryItem]],
    visited: Set[str],
    containers: Dict[str, ContainerItem],
    options: ProcessingOptions,
) -> Node:
    if not item.definition.is_container:
        return item
    key = str(item.id)
    if key in visited:
        logger.warning(
            "Container %s reached twice; keeping the repeat as a plain item", item.id
        )
        return item
    visited.add(key)

    contents = _resolve_nodes(
        buckets.get(key, []), buckets, visited, containers, options
    )
    container = ContainerItem(
        item=item, contents=contents, current_weight=contents_weight(contents)
    )
    containers[key] = container
    return container


def build_nested_inventory(
    items: Sequence[InventoryItem],
    character_id: int,
    options: ProcessingOptions = DEFAULT_OPTIONS,
) -> NestedInventoryStructure:
    """Build the container tree for ``character_id``.

    Arguments:
        items: Flat inventory lines (never mutated). A quantity that is not
            a number is treated as 0.
        character_id: Id used by root-level items as their container reference.
        options: Zero-quantity filtering switch. The hierarchy switch only
            affects rendering, so weights never depend on it.

    Returns:
        NestedInventoryStructure: Root items in input order plus every resolved
        container keyed by id string. ``total_items`` is ``len(items)``.
    """
    loaded = [with_numeric_quantity(item) for item in items]
    parents = resolve_parents(loaded, character_id)
    buckets = group_by_parent(loaded, parents)

    visited: Set[str] = set()
    containers: Dict[str, ContainerItem] = {}
    root_items = _resolve_nodes(
        buckets.get(None, []), buckets, visited, containers, options
    )

    logger.debug(
        "Built inventory for character %s: %d root items, %d containers",
        character_id,
        len(root_items),
        len(containers),
    )
    return NestedInventoryStructure(
        character_id=character_id,
        root_items=root_items,
        containers=pmap(containers),
        total_items=len(items),
    )
