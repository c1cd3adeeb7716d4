"""Inventory processing orchestration.

:func:`process_inventory` is the single entry point tying the stages
together for one character:

1. Records are converted to models (:mod:`inventory_tree.loader`); unusable
   ones are logged and skipped.
2. The container tree is built (:mod:`inventory_tree.tree`), which also
   annotates every container with the weight of its contents.
3. The tree is rendered with the selected strategy
   (:mod:`inventory_tree.renderer.inventory`).
4. Statistics are collected from the structure and the render pass.

The function is pure: caller records are never mutated and identical inputs
give byte-identical markup. :class:`InventoryProcessor` is a thin holder for a
strategy for callers that want to swap it once and reuse it.
"""

from dataclasses import dataclass, replace
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from inventory_tree import sanitize
from inventory_tree.errors import InventoryInputError
from inventory_tree.loader import items_from_records
from inventory_tree.models import NestedInventoryStructure
from inventory_tree.options import ProcessingOptions, resolve_options
from inventory_tree.renderer.inventory import render_inventory
from inventory_tree.renderer.strategy import (
    DEFAULT_STRATEGY,
    RenderContext,
    RenderStrategy,
)
from inventory_tree.tree import build_nested_inventory
from inventory_tree.types import SanitizeFn
from inventory_tree.weight import magic_containers, total_weight

logger = logging.getLogger(__name__)

OptionsLike = Optional[ProcessingOptions | Mapping[str, Any]]


@dataclass(frozen=True)
class ProcessingStatistics:
    """Summary numbers for one processed inventory.

    Attributes:
        total_items: Number of records supplied, independent of filtering.
        container_count: Containers resolved in the tree.
        magic_containers: Containers whose contents weigh nothing.
        total_weight: Weight carried by the character.
        rendered_items: Nodes emitted by the strategy.
        skipped_items: Records that were not rendered (unusable, zero
            quantity or inside a dropped container).
        magic_container_names: Names of the magic containers, in tree order.
    """

    total_items: int
    container_count: int
    magic_containers: int
    total_weight: float
    rendered_items: int = 0
    skipped_items: int = 0
    magic_container_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProcessingResult:
    nested_structure: NestedInventoryStructure
    rendered_output: str
    statistics: ProcessingStatistics


def _check_items(items: Any) -> Sequence[Any]:
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InventoryInputError(
            f"items must be a sequence of inventory records, got {type(items).__name__}"
        )
    return items


def process_inventory(
    items: Sequence[Any],
    character_id: int,
    options: OptionsLike = None,
    strategy: Optional[RenderStrategy] = None,
    sanitize_text: SanitizeFn = sanitize.sanitize_text,
    sanitize_html: SanitizeFn = sanitize.sanitize_html,
) -> ProcessingResult:
    """Build, weigh and render the inventory of ``character_id``.

    Args:
        items (Sequence[Any]): ``InventoryItem`` models and/or raw upstream
            mappings. Never mutated.
        character_id (int): Id root-level items use as their container reference.
        options (ProcessingOptions | Mapping | None): Options object or a plain
            mapping (camelCase or snake_case keys, unknown keys ignored).
        strategy (RenderStrategy | None): Rendering hooks; the Fantasy Grounds
            strategy when ``None``.
        sanitize_text (SanitizeFn): Plain-text sanitizer used for names and types.
        sanitize_html (SanitizeFn): Rich-text sanitizer used for descriptions.

    Returns:
        ProcessingResult: The nested structure, the rendered markup and the
            statistics.

    Raises:
        InventoryInputError: ``items`` is not a sequence of records.
    """
    records = _check_items(items)
    resolved = resolve_options(options)
    strategy = strategy if strategy is not None else DEFAULT_STRATEGY

    models = items_from_records(records)
    structure = build_nested_inventory(models, character_id, resolved)
    structure = replace(structure, total_items=len(records))

    context = RenderContext(
        options=resolved, sanitize_text=sanitize_text, sanitize_html=sanitize_html
    )
    rendered = render_inventory(structure, strategy, context)

    magic = magic_containers(structure)
    statistics = ProcessingStatistics(
        total_items=structure.total_items,
        container_count=len(structure.containers),
        magic_containers=len(magic),
        total_weight=total_weight(structure),
        rendered_items=rendered.rendered_items,
        skipped_items=structure.total_items - rendered.rendered_items,
        magic_container_names=tuple(container.name for container in magic),
    )
    logger.debug(
        "Processed %d records for character %s: %d rendered, %d skipped, %s lb",
        statistics.total_items,
        character_id,
        statistics.rendered_items,
        statistics.skipped_items,
        statistics.total_weight,
    )
    return ProcessingResult(
        nested_structure=structure,
        rendered_output=rendered.markup,
        statistics=statistics,
    )


class InventoryProcessor:
    """Reusable processor holding a rendering strategy."""

    def __init__(self, strategy: RenderStrategy = DEFAULT_STRATEGY) -> None:
        self.strategy = strategy

    def set_strategy(self, strategy: RenderStrategy) -> None:
        """Render with ``strategy`` from the next call on."""
        self.strategy = strategy

    def process(
        self,
        items: Sequence[Any],
        character_id: int,
        options: OptionsLike = None,
        sanitize_text: SanitizeFn = sanitize.sanitize_text,
        sanitize_html: SanitizeFn = sanitize.sanitize_html,
    ) -> ProcessingResult:
        return process_inventory(
            items,
            character_id,
            options,
            self.strategy,
            sanitize_text=sanitize_text,
            sanitize_html=sanitize_html,
        )
