# src/notekind/markup.py
"""
Generic retained markup tree.

A tree is either a leaf (any plain value, printed and escaped on output; a
`Raw` string, emitted verbatim) or a `Node` with a tag, an attribute mapping
and an ordered sequence of children. Downstream adapters consume this
structure directly, so keep it plain.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

# Elements that never carry children in HTML output
_VOID_TAGS = frozenset({"br", "hr", "img", "input", "meta", "link", "source"})


@dataclass(frozen=True, slots=True)
class Raw:
    """Pre-rendered markup (html, svg, ...) that must not be escaped."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Node:
    tag: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        # accept any iterable of children, store an immutable tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))


def node(tag: str, attrs: Mapping[str, Any] | None = None, *children: Any) -> Node:
    return Node(tag, dict(attrs or {}), tuple(children))


def iter_nodes(tree: Any) -> Iterator[Node]:
    """Depth-first walk over every Node in `tree`."""
    if isinstance(tree, Node):
        yield tree
        for child in tree.children:
            yield from iter_nodes(child)


def text_content(tree: Any) -> str:
    """Concatenated text of all leaves, without markup."""
    if tree is None:
        return ""
    if isinstance(tree, Node):
        return "".join(text_content(c) for c in tree.children)
    return str(tree)


def to_html(tree: Any) -> str:
    if tree is None:
        return ""
    if isinstance(tree, Raw):
        return tree.text
    if not isinstance(tree, Node):
        return escape_html(str(tree))

    attrs = _attrs_html(tree.attrs)
    if tree.tag in _VOID_TAGS and not tree.children:
        return f"<{tree.tag}{attrs} />"

    inner = "".join(to_html(c) for c in tree.children)
    return f"<{tree.tag}{attrs}>{inner}</{tree.tag}>"


def _attrs_html(attrs: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
            continue
        if key == "style" and isinstance(value, Mapping):
            value = ";".join(f"{k}:{v}" for k, v in value.items())
        elif key == "class" and isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        parts.append(f' {key}="{escape_attr(str(value))}"')
    return "".join(parts)


def escape_html(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def escape_attr(s: str) -> str:
    # safe for attribute values in double quotes
    return escape_html(s).replace("\n", " ").replace("\r", " ")
