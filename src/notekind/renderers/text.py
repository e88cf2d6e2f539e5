# src/notekind/renderers/text.py
from __future__ import annotations

import pprint
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import bleach
import markdown

from .. import display, kinds
from ..errors import MalformedValueError
from ..markup import Node, Raw
from ..notes import Artifact, Note, RenderContext
from ..options import int_option
from .base import html_artifact, payload_artifact
from .limits import TextLimits, truncate_text

if TYPE_CHECKING:
    from ..engine import Engine


def _source_text(note: Note) -> str:
    """
    Text payload of md/tex/html values: a string, or a sequence of strings
    joined by newlines.
    """
    value = note.value
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return "\n".join(value)
    raise MalformedValueError(
        f"{note.kind} expects text, got {type(value).__name__}", kind=note.kind
    )


# ---- Markdown / TeX / raw HTML (non-nestable) ------------------------------------


@dataclass(slots=True)
class MarkdownRenderer:
    kind: str = kinds.MD
    options: frozenset[str] = frozenset()
    nestable: bool = False

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        text = _source_text(note)
        body = markdown.markdown(text, extensions=["fenced_code", "tables"])
        tree = Node("div", {"class": "kind-md"}, (Raw(body),))
        return payload_artifact(note, tree, display.markdown(text))


@dataclass(slots=True)
class TexRenderer:
    kind: str = kinds.TEX
    options: frozenset[str] = frozenset()
    nestable: bool = False

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        text = _source_text(note).strip()
        if not text.startswith("$") and not text.startswith("\\["):
            text = f"$${text}$$"
        tree = Node("span", {"class": "kind-tex"}, (text,))
        return payload_artifact(note, tree, display.latex(text))


# Conservative default: allow basic formatting + links + tables + code.
_ALLOWED_TAGS = [
    "p", "br", "hr", "b", "strong", "i", "em", "u", "blockquote", "pre", "code",
    "ul", "ol", "li", "h1", "h2", "h3", "h4", "h5", "h6",
    "table", "thead", "tbody", "tr", "th", "td", "a", "span", "div", "img",
]
_ALLOWED_ATTRS = {
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "title", "width", "height"],
    "*": ["class"],
}
_ALLOWED_PROTOCOLS = ["http", "https", "mailto", "data"]


def sanitize_html(html: str) -> str:
    cleaned = bleach.clean(
        html,
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRS,
        protocols=_ALLOWED_PROTOCOLS,
        strip=True,
    )
    return bleach.linkify(cleaned, callbacks=[bleach.callbacks.nofollow])


@dataclass(slots=True)
class HtmlRenderer:
    kind: str = kinds.HTML
    options: frozenset[str] = frozenset()
    nestable: bool = False

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        html = _source_text(note)
        if engine.settings.sanitize_html:
            html = sanitize_html(html)
        return payload_artifact(note, Raw(html), display.raw_html(html))


# ---- Code / pprint / hidden / video -----------------------------------------------


@dataclass(slots=True)
class CodeRenderer:
    kind: str = kinds.CODE
    options: frozenset[str] = frozenset({"language"})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        code = note.value if isinstance(note.value, str) else repr(note.value)
        out, _ = truncate_text(
            code, limits=TextLimits(max_chars=engine.settings.max_text_chars)
        )
        language = str(note.options.get("language") or "python")
        tree = Node(
            "pre",
            {"class": "kind-code"},
            (Node("code", {"class": f"language-{language}"}, (out,)),),
        )
        return html_artifact(note, tree)


@dataclass(slots=True)
class PprintRenderer:
    kind: str = kinds.PPRINT
    options: frozenset[str] = frozenset({"width"})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        width = int_option(note.options, "width", 80, kind=note.kind, minimum=1)
        out, _ = truncate_text(
            pprint.pformat(note.value, width=width),
            limits=TextLimits(max_chars=engine.settings.max_text_chars),
        )
        tree = Node("pre", {"class": "kind-pprint"}, (Node("code", {}, (out,)),))
        return html_artifact(note, tree)


@dataclass(slots=True)
class HiddenRenderer:
    kind: str = kinds.HIDDEN
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        return html_artifact(note, None)


@dataclass(slots=True)
class VideoRenderer:
    kind: str = kinds.VIDEO
    options: frozenset[str] = frozenset({"width", "height", "autoplay", "loop", "muted"})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        attrs: dict[str, Any] = {"controls": True}
        value = note.value
        if isinstance(value, str):
            attrs["src"] = value
        elif isinstance(value, Mapping) and isinstance(value.get("src"), str):
            attrs.update(value)
        else:
            raise MalformedValueError(
                f"{note.kind} expects a url or {{'src': url}}", kind=note.kind
            )
        attrs.update(note.options)
        return html_artifact(note, Node("video", attrs, ()))
