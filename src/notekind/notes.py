# src/notekind/notes.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .display import MimePayload


@dataclass(frozen=True, slots=True)
class Note:
    """
    One unit of rendering work: a value, the form it came from, and how to
    show it. Notes are never mutated; use `evolve` to derive a new one.
    """

    value: Any
    form: Any = None
    kind: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)
    dependencies: frozenset[str] = frozenset()

    @classmethod
    def of(cls, value: Any, form: Any = None) -> Note:
        """
        Build a Note, lifting explicit kind metadata off a `Kinded` value.
        """
        from .kinds import Kinded

        if isinstance(value, Kinded):
            return cls(
                value=value.value,
                form=form,
                kind=value.kind,
                options=dict(value.options),
            )
        return cls(value=value, form=form)

    def evolve(self, **changes: Any) -> Note:
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class Artifact:
    markup: Any
    payload: MimePayload
    kind: str | None = None
    dependencies: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class RenderContext:
    """
    Explicit per-call rendering context.

    nested:   True once inside any composite renderer.
    depth:    composite nesting depth.
    fn_depth: number of deferred-function hops taken so far.
    """

    nested: bool = False
    depth: int = 0
    fn_depth: int = 0

    def enter_composite(self) -> RenderContext:
        return replace(self, nested=True, depth=self.depth + 1)

    def enter_fn(self) -> RenderContext:
        return replace(self, fn_depth=self.fn_depth + 1)


TOP_LEVEL = RenderContext()
