"""Rendering strategies.

A :class:`RenderStrategy` bundles the two hooks the render walk calls for
every visible node:

* ``render_item(item, index, depth, context) -> str``
* ``render_container(container, contents, index, depth, context) -> str``,
  where ``contents`` are the already rendered child fragments, which the
  container must place inside its nested list element.

``index`` is the node's 1-based position in depth-first order across the
whole inventory; ``depth`` is 0 for root items. Everything a hook needs
beyond the node travels in the :class:`RenderContext` (options and sanitizer
collaborators), so strategies hold no state of their own and can be swapped
freely without touching tree building or weight math.

The built-in Fantasy Grounds strategy emits one ``<id-NNNNN>`` element per
item::

    <id-00001>
        <count type="number">1</count>
        <name type="string">Longsword</name>
        <weight type="number">3</weight>
        <locked type="number">1</locked>
        <isidentified type="number">1</isidentified>
        <type type="string">Martial Weapon</type>
        <cost type="string">15 gp</cost>
    </id-00001>

with containers adding a nested ``<inventorylist>`` after their own fields.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from inventory_tree import sanitize
from inventory_tree.errors import InventoryInputError
from inventory_tree.models import ContainerItem, InventoryItem
from inventory_tree.options import DEFAULT_OPTIONS, ProcessingOptions
from inventory_tree.renderer.markup import (
    Element,
    Raw,
    format_number,
    formatted_text,
    number,
    serialize,
    string,
)
from inventory_tree.types import RenderContainerFn, RenderItemFn, SanitizeFn
from inventory_tree.weight import per_item_weight

LIST_TAG = "inventorylist"
ITEM_TAG_DIGITS = 5
ROOT_LIST_LEVEL = 2
MISSING_COST = "-"


@dataclass(frozen=True)
class RenderContext:
    """Per-call inputs shared by every hook invocation.

    Attributes:
        options: Processing options in effect.
        sanitize_text: Collaborator escaping plain-text fields.
        sanitize_html: Collaborator cleaning rich-text descriptions.
    """

    options: ProcessingOptions = DEFAULT_OPTIONS
    sanitize_text: SanitizeFn = sanitize.sanitize_text
    sanitize_html: SanitizeFn = sanitize.sanitize_html

    def text(self, value: str) -> str:
        return self.sanitize_text(value) if self.options.sanitize_output else value

    def rich_text(self, value: str) -> str:
        return self.sanitize_html(value) if self.options.sanitize_output else value


@dataclass(frozen=True)
class RenderStrategy:
    render_item: RenderItemFn
    render_container: RenderContainerFn


def item_tag(index: int) -> str:
    return f"id-{index:0{ITEM_TAG_DIGITS}d}"


def item_level(depth: int) -> int:
    """Indent level of an item element; each nesting adds the list and the item."""
    return ROOT_LIST_LEVEL + 1 + 2 * depth


def item_fields(item: InventoryItem, context: RenderContext) -> List[Element]:
    """Value elements describing ``item`` (shared by items and containers)."""
    options = context.options
    definition = item.definition
    fields = [
        number("count", item.quantity),
        string("name", context.text(item.name)),
        number("weight", per_item_weight(item)),
        number("locked", 1),
        number("isidentified", 1 if options.mark_items_as_identified else 0),
    ]
    item_type = definition.sub_type or definition.filter_type
    if item_type:
        fields.append(string("type", context.text(item_type)))
    if options.include_cost_information:
        cost = definition.cost
        if cost is None:
            fields.append(string("cost", MISSING_COST))
        else:
            amount = format_number(cost.quantity)
            fields.append(string("cost", f"{amount} {context.text(str(cost.unit))}"))
    if options.generate_detailed_xml and definition.description:
        fields.append(
            formatted_text("description", context.rich_text(definition.description))
        )
    return fields


def fantasy_grounds_item(
    item: InventoryItem, index: int, depth: int, context: RenderContext
) -> str:
    element = Element(item_tag(index), children=tuple(item_fields(item, context)))
    return serialize(element, item_level(depth))


def fantasy_grounds_container(
    container: ContainerItem,
    contents: Sequence[str],
    index: int,
    depth: int,
    context: RenderContext,
) -> str:
    nested = Element(LIST_TAG, children=tuple(Raw(fragment) for fragment in contents))
    element = Element(
        item_tag(index),
        children=(*item_fields(container.item, context), nested),
    )
    return serialize(element, item_level(depth))


FANTASY_GROUNDS_STRATEGY = RenderStrategy(
    render_item=fantasy_grounds_item,
    render_container=fantasy_grounds_container,
)

DEFAULT_STRATEGY = FANTASY_GROUNDS_STRATEGY

STRATEGY_REGISTRY: Dict[str, RenderStrategy] = {
    "fantasy_grounds": FANTASY_GROUNDS_STRATEGY,
}


def get_strategy(name: str) -> RenderStrategy:
    if name not in STRATEGY_REGISTRY:
        raise InventoryInputError(
            f"Unknown render strategy {name!r}; "
            f"expected one of {sorted(STRATEGY_REGISTRY)}"
        )
    return STRATEGY_REGISTRY[name]
