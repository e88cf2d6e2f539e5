# src/notekind/renderers/base.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol

from ..display import MimePayload, html_payload
from ..notes import Artifact, Note, RenderContext

if TYPE_CHECKING:
    from ..engine import Engine


class Renderer(Protocol):
    kind: str | None
    options: frozenset[str] | None  # None: options are not checked
    nestable: bool

    def render(
        self, note: Note, *, ctx: RenderContext, engine: Engine
    ) -> Artifact: ...


def html_artifact(
    note: Note,
    tree: Any,
    *,
    dependencies: Iterable[str] = (),
) -> Artifact:
    """Artifact whose payload is the markup tree itself, as html."""
    return Artifact(
        markup=tree,
        payload=html_payload(tree),
        kind=note.kind,
        dependencies=note.dependencies | frozenset(dependencies),
    )


def payload_artifact(note: Note, tree: Any, payload: MimePayload) -> Artifact:
    """Artifact with a kind-specific payload next to its markup."""
    return Artifact(
        markup=tree,
        payload=payload,
        kind=note.kind,
        dependencies=note.dependencies,
    )
