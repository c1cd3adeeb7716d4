"""Processing options.

:class:`ProcessingOptions` is the whole configuration surface of the
pipeline. It is passed explicitly to every stage; nothing is read from module
globals or the environment. Callers holding a plain dict (for example options
forwarded from a web form) use :meth:`ProcessingOptions.from_mapping`, which
accepts the upstream camelCase key names as well as the Python field names,
ignores unknown keys and falls back to the defaults for omitted ones.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ProcessingOptions:
    """Switches controlling tree building and rendering.

    Attributes:
        include_zero_quantity_items: Keep items with quantity <= 0 in the tree
            and in the rendered output.
        respect_container_hierarchy: Nest items under their containers. When
            False every item is rendered at the root.
        generate_detailed_xml: Emit item descriptions.
        sanitize_output: Pass names, types and descriptions through the
            sanitizer collaborators before rendering.
        include_cost_information: Emit the cost field.
        mark_items_as_identified: Render items as identified.
    """

    include_zero_quantity_items: bool = False
    respect_container_hierarchy: bool = True
    generate_detailed_xml: bool = False
    sanitize_output: bool = True
    include_cost_information: bool = True
    mark_items_as_identified: bool = True

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "ProcessingOptions":
        """Build options from a loosely shaped mapping."""
        if not values:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, bool] = {}
        for key, value in values.items():
            name = CAMEL_CASE_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = bool(value)
        return cls(**kwargs)


DEFAULT_OPTIONS = ProcessingOptions()

CAMEL_CASE_ALIASES: Dict[str, str] = {
    "includeZeroQuantityItems": "include_zero_quantity_items",
    "respectContainerHierarchy": "respect_container_hierarchy",
    "generateDetailedXML": "generate_detailed_xml",
    "sanitizeOutput": "sanitize_output",
    "includeCostInformation": "include_cost_information",
    "markItemsAsIdentified": "mark_items_as_identified",
}


def resolve_options(
    options: "ProcessingOptions | Mapping[str, Any] | None",
) -> ProcessingOptions:
    """Return ``options`` as a :class:`ProcessingOptions` instance."""
    if isinstance(options, ProcessingOptions):
        return options
    return ProcessingOptions.from_mapping(options)
