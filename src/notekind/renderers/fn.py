# src/notekind/renderers/fn.py
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .. import kinds
from ..errors import FnDepthError, MalformedValueError
from ..notes import Artifact, Note, RenderContext

if TYPE_CHECKING:
    from ..engine import Engine

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class FnRenderer:
    """
    Deferred value: call user code at render time, then render the result.

    Two value shapes are accepted:

      {"x": 1, "y": 2, FN_KEY: f}  ->  f({"x": 1, "y": 2})
      (f, 1, 2)                    ->  f(1, 2)

    For the mapping shape the callable may also be passed as the FN_KEY
    option. When both are given, the callable in the value wins.
    Exceptions raised by the callable propagate to the caller.
    """

    kind: str = kinds.FN
    options: frozenset[str] = frozenset({kinds.FN_KEY})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        limit = engine.settings.max_fn_depth
        if ctx.fn_depth >= limit:
            raise FnDepthError(limit, kind=note.kind)

        f, call = _split(note)
        LOGGER.debug("calling deferred %r (fn depth %d)", f, ctx.fn_depth)
        result = call()

        inner = Note.of(result, form=note.form)
        return engine.render(inner, ctx=ctx.enter_fn())


def _split(note: Note) -> tuple[Callable[..., Any], Callable[[], Any]]:
    value = note.value

    if isinstance(value, Mapping):
        f = value.get(kinds.FN_KEY, note.options.get(kinds.FN_KEY))
        if not callable(f):
            raise MalformedValueError(
                f"{note.kind} needs a callable under {kinds.FN_KEY!r}", kind=note.kind
            )
        inputs = {k: v for k, v in value.items() if k != kinds.FN_KEY}
        return f, lambda: f(inputs)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and value:
        f, *args = value
        if not callable(f):
            raise MalformedValueError(
                f"{note.kind} sequence must start with a callable", kind=note.kind
            )
        return f, lambda: f(*args)

    raise MalformedValueError(
        f"{note.kind} expects a mapping or (callable, *args), got {type(value).__name__}",
        kind=note.kind,
    )
