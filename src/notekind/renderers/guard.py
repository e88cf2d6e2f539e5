# src/notekind/renderers/guard.py
from __future__ import annotations

import logging
from typing import Callable

from ..display import html_payload
from ..errors import PolicyError
from ..markup import Node
from ..notes import Artifact, Note, RenderContext

LOGGER = logging.getLogger(__name__)


def diagnostic_node(text: str, *, kind: str | None) -> Node:
    attrs = {"class": "kind-error", "style": "color:red"}
    if kind is not None:
        attrs["data-kind"] = kind
    return Node("div", attrs, (text,))


def nested_message(kind: str | None, environment: str) -> str:
    return f"nested rendering of {kind} not possible in {environment}"


def guard(
    note: Note,
    ctx: RenderContext,
    compute: Callable[[Note], Artifact],
    *,
    environment: str,
) -> Artifact:
    """
    Run `compute` for a kind that must own its display region.

    At top level the artifact is returned as computed. Inside a composite the
    payload is kept (so callers inspecting it still see the real
    representation) but the markup becomes a diagnostic.
    """
    artifact = compute(note)
    if not ctx.nested:
        return artifact

    LOGGER.debug("non-nestable %s rendered at depth %d", note.kind, ctx.depth)
    return Artifact(
        markup=diagnostic_node(nested_message(note.kind, environment), kind=note.kind),
        payload=artifact.payload,
        kind=artifact.kind,
        dependencies=artifact.dependencies,
    )


def policy_artifact(note: Note, err: PolicyError) -> Artifact:
    """Render a policy failure as inline content."""
    tree = diagnostic_node(err.message, kind=err.kind or note.kind)
    return Artifact(
        markup=tree,
        payload=html_payload(tree),
        kind=note.kind,
        dependencies=note.dependencies,
    )
