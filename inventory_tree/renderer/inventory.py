"""Depth-first render walk over a nested inventory."""

from dataclasses import dataclass
from typing import List, Sequence

from inventory_tree.models import ContainerItem, NestedInventoryStructure
from inventory_tree.renderer.markup import Element, Raw, serialize
from inventory_tree.renderer.strategy import (
    DEFAULT_STRATEGY,
    LIST_TAG,
    ROOT_LIST_LEVEL,
    RenderContext,
    RenderStrategy,
)
from inventory_tree.types import Node


@dataclass(frozen=True)
class RenderedInventory:
    """Markup plus the number of nodes handed to a strategy hook."""

    markup: str
    rendered_items: int


def _render_nodes(
    nodes: Sequence[Node],
    depth: int,
    strategy: RenderStrategy,
    context: RenderContext,
    next_index_ref: List[int],
) -> List[str]:
    """Render ``nodes`` in order, numbering each before its contents.

    ``next_index_ref`` is a single-item list used as a counter shared across
    the whole walk. Without ``respect_container_hierarchy`` every node is
    rendered at depth 0: a container gets an empty nested list and its
    contents follow it as siblings.
    """
    nested = context.options.respect_container_hierarchy
    fragments: List[str] = []
    for node in nodes:
        index = next_index_ref[0]
        next_index_ref[0] += 1
        if not isinstance(node, ContainerItem):
            fragments.append(strategy.render_item(node, index, depth, context))
        elif nested:
            contents = _render_nodes(
                node.contents, depth + 1, strategy, context, next_index_ref
            )
            fragments.append(
                strategy.render_container(node, contents, index, depth, context)
            )
        else:
            fragments.append(strategy.render_container(node, [], index, depth, context))
            fragments.extend(
                _render_nodes(node.contents, depth, strategy, context, next_index_ref)
            )
    return fragments


def render_inventory(
    structure: NestedInventoryStructure,
    strategy: RenderStrategy = DEFAULT_STRATEGY,
    context: RenderContext = RenderContext(),
) -> RenderedInventory:
    """Render ``structure`` with ``strategy``.

    Indices are 1-based and follow depth-first pre-order across the whole
    inventory, so a container is numbered before anything it holds. The
    top-level list element is always emitted, even with nothing inside.
    """
    next_index_ref: List[int] = [1]
    fragments = _render_nodes(structure.root_items, 0, strategy, context, next_index_ref)
    wrapper = Element(LIST_TAG, children=tuple(Raw(fragment) for fragment in fragments))
    return RenderedInventory(
        markup=serialize(wrapper, ROOT_LIST_LEVEL),
        rendered_items=next_index_ref[0] - 1,
    )
