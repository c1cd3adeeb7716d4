"""Minimal element builder and serializer for the inventory markup.

Fragments are composed from :class:`Element` nodes and turned into text by
:func:`serialize`, which produces the exact layout the consuming application
expects: one element per line, tab indentation, value elements annotated with
a ``type`` attribute. Text is written as given; escaping is the caller's
choice (see :mod:`inventory_tree.sanitize`). Already-rendered fragments are
embedded with :class:`Raw` and copied verbatim.
"""

from dataclasses import dataclass
import math
from typing import Optional, Tuple, Union

INDENT = "\t"


@dataclass(frozen=True)
class Raw:
    """Pre-rendered markup inserted as-is (it carries its own indentation)."""

    text: str


@dataclass(frozen=True)
class Element:
    """Markup element.

    Attributes:
        tag: Element name.
        text: Inline content for value elements. ``None`` makes this a list
            element rendered over several lines (even when it has no children).
        attributes: Ordered ``(name, value)`` pairs.
        children: Nested elements or raw fragments.
    """

    tag: str
    text: Optional[str] = None
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple[Union["Element", Raw], ...] = ()


MarkupNode = Union[Element, Raw]


def format_number(value: float) -> str:
    """Render whole numbers without a decimal part and others in shortest form."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def number(tag: str, value: float) -> Element:
    return Element(tag, text=format_number(value), attributes=(("type", "number"),))


def string(tag: str, value: str) -> Element:
    return Element(tag, text=value, attributes=(("type", "string"),))


def formatted_text(tag: str, value: str) -> Element:
    return Element(tag, text=value, attributes=(("type", "formattedtext"),))


def serialize(node: MarkupNode, level: int = 0) -> str:
    """Serialize ``node`` with ``level`` leading tabs, newline-terminated."""
    if isinstance(node, Raw):
        return node.text
    pad = INDENT * level
    attributes = "".join(f' {name}="{value}"' for name, value in node.attributes)
    if node.text is not None and not node.children:
        return f"{pad}<{node.tag}{attributes}>{node.text}</{node.tag}>\n"
    inner = "".join(serialize(child, level + 1) for child in node.children)
    return f"{pad}<{node.tag}{attributes}>\n{inner}{pad}</{node.tag}>\n"
