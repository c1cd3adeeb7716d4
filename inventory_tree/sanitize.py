"""Default text sanitizers handed to the renderer.

Rendering never escapes text on its own: when ``sanitize_output`` is set it
calls the two collaborators carried by the
:class:`inventory_tree.renderer.strategy.RenderContext`. These are the stock
implementations; callers with their own escaping rules pass replacements.

``sanitize_text`` is for single-line plain fields (names, types): every
markup-significant character is escaped and whitespace is flattened.
``sanitize_html`` is for rich descriptions: a small whitelist of formatting
tags survives without attributes, every other tag is dropped, stray angle
brackets and bare ampersands are escaped and existing entities are kept, so
the result is well-formed inside the markup.
"""

import html
import re

MAX_TEXT_LENGTH = 1000
MAX_HTML_LENGTH = 10000

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_DANGEROUS_PROTOCOLS = re.compile(r"(?:javascript|vbscript|data):", re.IGNORECASE)
_EVENT_HANDLERS = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_SCRIPT_OR_STYLE = re.compile(
    r"<(script|style)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL
)
_EVENT_ATTRIBUTES = re.compile(
    r"\s+on\w+\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+)", re.IGNORECASE
)
_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_HEADING_OPEN = re.compile(r"<h[1-6][^>]*>", re.IGNORECASE)
_HEADING_CLOSE = re.compile(r"</h[1-6]>", re.IGNORECASE)
_TABLE_HEADER = re.compile(r"<(/?)th\b", re.IGNORECASE)
_SPAN = re.compile(r"</?span[^>]*>", re.IGNORECASE)
_BARE_AMPERSAND = re.compile(r"&(?!(?:[a-zA-Z]+|#[0-9]+|#x[0-9a-fA-F]+);)")
_TAG = re.compile(r"</?([a-zA-Z][a-zA-Z0-9]*)(?:\s[^<>]*)?/?>")

ALLOWED_TAGS = (
    "p",
    "b",
    "i",
    "u",
    "strong",
    "em",
    "table",
    "tr",
    "td",
    "ul",
    "ol",
    "li",
)


def _escape_brackets(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


def sanitize_text(text: str) -> str:
    """Escape a plain-text field for use as element content."""
    if not text:
        return ""
    cleaned = _DANGEROUS_PROTOCOLS.sub("", str(text))
    cleaned = _EVENT_HANDLERS.sub("", cleaned)
    cleaned = cleaned.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    cleaned = _CONTROL_CHARS.sub("", cleaned)
    return html.escape(cleaned[:MAX_TEXT_LENGTH].strip(), quote=True)


def _filter_tags(markup: str) -> str:
    """Keep whitelisted tags (bare), drop the rest and escape stray brackets."""
    parts = []
    position = 0
    for match in _TAG.finditer(markup):
        parts.append(_escape_brackets(markup[position : match.start()]))
        tag = match.group(1).lower()
        if tag in ALLOWED_TAGS:
            slash = "/" if match.group(0).startswith("</") else ""
            parts.append(f"<{slash}{tag}>")
        position = match.end()
    parts.append(_escape_brackets(markup[position:]))
    return "".join(parts)


def _balance_tags(markup: str) -> str:
    """Close unclosed whitelisted tags and drop surplus closing tags."""
    for tag in ALLOWED_TAGS:
        opened = len(re.findall(rf"<{tag}(?:\s[^>]*)?>", markup, re.IGNORECASE))
        closing = re.compile(rf"</{tag}>", re.IGNORECASE)
        closed = len(closing.findall(markup))
        if opened > closed:
            markup += f"</{tag}>" * (opened - closed)
        for _ in range(closed - opened):
            last = list(closing.finditer(markup))[-1]
            markup = markup[: last.start()] + markup[last.end() :]
    return markup


def sanitize_html(text: str) -> str:
    """Clean a rich-text description for a ``formattedtext`` field.

    The input is cut to ``MAX_HTML_LENGTH`` before cleaning, so the cut can
    never split an entity or a tag of the result.
    """
    if not text:
        return ""
    markup = str(text)[:MAX_HTML_LENGTH]
    markup = _SCRIPT_OR_STYLE.sub("", markup)
    markup = _EVENT_ATTRIBUTES.sub("", markup)
    markup = _DANGEROUS_PROTOCOLS.sub("", markup)
    markup = _SPAN.sub("", markup)
    markup = _BREAK.sub("\n", markup)
    markup = _HEADING_OPEN.sub("<p><b>", markup)
    markup = _HEADING_CLOSE.sub("</b></p>", markup)
    markup = _TABLE_HEADER.sub(r"<\1td", markup)
    markup = _CONTROL_CHARS.sub("", markup)
    markup = _BARE_AMPERSAND.sub("&amp;", markup)
    markup = _balance_tags(_filter_tags(markup))
    return _WHITESPACE.sub(" ", markup).strip()
