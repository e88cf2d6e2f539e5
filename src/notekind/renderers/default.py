# src/notekind/renderers/default.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..markup import Node
from ..notes import Artifact, Note, RenderContext
from .base import html_artifact
from .limits import printed, safe_str

if TYPE_CHECKING:
    from ..engine import Engine


@dataclass(slots=True)
class DefaultRenderer:
    """
    Fallback for values without a kind and for kinds nobody registered.

    Never fails: a value without a kind is shown as its text; an unknown kind
    is flagged as unimplemented next to the printed value.
    """

    kind: str | None = None
    options: frozenset[str] | None = None  # accepts anything
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        max_chars = engine.settings.max_text_chars

        if note.kind is None:
            return html_artifact(note, safe_str(note.value, max_chars=max_chars))

        tree = Node(
            "div",
            {"class": "kind-unimplemented"},
            (
                Node("div", {}, ("Unimplemented: ", Node("code", {}, (note.kind,)))),
                Node("code", {}, (printed(note.value, max_chars=max_chars),)),
            ),
        )
        return html_artifact(note, tree)
