"""Weight and encumbrance calculations.

All functions are pure and operate on the immutable models. The weight rules:

* Per-item weight is the listed weight divided by the bundle size, exactly
  (1 lb per 50 arrows is 0.02, never rounded).
* A container's ``current_weight`` covers its contents only, never its own
  base weight.
* What a container passes up to whatever holds it is its own weight plus its
  contents scaled by ``weight_multiplier``. A multiplier of 0 (Bag of Holding
  and friends) passes up nothing for the contents, while they stay visible in
  the tree and keep their own listed weights.

Encumbrance follows the variant rules: Strength x5 / x10 / x15 bands with a
x30 drag/push/lift limit, all doubled by Powerful Build.
"""

from dataclasses import dataclass
from typing import Iterable, List

from inventory_tree.models import (
    ContainerItem,
    InventoryItem,
    NestedInventoryStructure,
)
from inventory_tree.types import EncumbranceLevel, Node

ENCUMBERED_FACTOR = 5
HEAVILY_ENCUMBERED_FACTOR = 10
MAXIMUM_FACTOR = 15
DRAG_PUSH_LIFT_FACTOR = 30
POWERFUL_BUILD_MULTIPLIER = 2


def per_item_weight(item: InventoryItem) -> float:
    """Weight of a single item: listed weight over bundle size."""
    definition = item.definition
    weight = item.custom_weight or definition.weight or 0
    bundle_size = max(definition.bundle_size or 1, 1)
    return weight / bundle_size


def item_weight(item: InventoryItem) -> float:
    """Weight of the whole stack on one inventory line."""
    return per_item_weight(item) * item.quantity


def content_multiplier(container: ContainerItem) -> float:
    multiplier = container.definition.weight_multiplier
    return 1 if multiplier is None else multiplier


def carried_weight(node: Node) -> float:
    """Weight ``node`` contributes to the container (or character) holding it."""
    if isinstance(node, ContainerItem):
        own = item_weight(node.item)
        multiplier = content_multiplier(node)
        if multiplier == 0:
            return own
        return own + node.current_weight * multiplier
    return item_weight(node)


def contents_weight(contents: Iterable[Node]) -> float:
    return sum((carried_weight(child) for child in contents), 0)


def container_weight(container: ContainerItem) -> float:
    """Weight of everything inside ``container``.

    The container's own multiplier is not applied, so a magic container still
    reports what it holds; nested magic containers only add their base weight.
    """
    return contents_weight(container.contents)


def total_weight(structure: NestedInventoryStructure) -> float:
    """Total weight carried by the character."""
    return contents_weight(structure.root_items)


def magic_containers(structure: NestedInventoryStructure) -> List[ContainerItem]:
    """Containers whose contents weigh nothing (``weight_multiplier == 0``)."""
    return [
        node
        for node in structure.walk()
        if isinstance(node, ContainerItem) and node.definition.weight_multiplier == 0
    ]


@dataclass(frozen=True)
class Encumbrance:
    """Carrying capacity thresholds in pounds.

    Attributes:
        normal: Above this the character is encumbered.
        heavy: Above this the character is heavily encumbered.
        maximum: Maximum carrying capacity.
        drag_push_lift: Maximum weight that can be dragged, pushed or lifted.
    """

    normal: float
    heavy: float
    maximum: float
    drag_push_lift: float


@dataclass(frozen=True)
class EncumbrancePenalty:
    speed_penalty: int
    disadvantage: bool


def encumbrance(strength_score: float, has_powerful_build: bool = False) -> Encumbrance:
    """Return the carrying thresholds for a Strength score."""
    multiplier = POWERFUL_BUILD_MULTIPLIER if has_powerful_build else 1
    return Encumbrance(
        normal=strength_score * ENCUMBERED_FACTOR * multiplier,
        heavy=strength_score * HEAVILY_ENCUMBERED_FACTOR * multiplier,
        maximum=strength_score * MAXIMUM_FACTOR * multiplier,
        drag_push_lift=strength_score * DRAG_PUSH_LIFT_FACTOR * multiplier,
    )


def encumbrance_level(weight: float, thresholds: Encumbrance) -> EncumbranceLevel:
    """Classify a carried weight against the thresholds (bands are inclusive)."""
    if weight > thresholds.maximum:
        return EncumbranceLevel.OVERLOADED
    if weight > thresholds.heavy:
        return EncumbranceLevel.HEAVILY_ENCUMBERED
    if weight > thresholds.normal:
        return EncumbranceLevel.ENCUMBERED
    return EncumbranceLevel.UNENCUMBERED


ENCUMBRANCE_PENALTIES = {
    EncumbranceLevel.UNENCUMBERED: EncumbrancePenalty(0, False),
    EncumbranceLevel.ENCUMBERED: EncumbrancePenalty(10, False),
    EncumbranceLevel.HEAVILY_ENCUMBERED: EncumbrancePenalty(20, True),
    # Overloaded characters cannot move at all; no speed delta applies.
    EncumbranceLevel.OVERLOADED: EncumbrancePenalty(0, True),
}


def encumbrance_penalties(level: EncumbranceLevel) -> EncumbrancePenalty:
    return ENCUMBRANCE_PENALTIES[level]
