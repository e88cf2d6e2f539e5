# src/notekind/engine.py
from __future__ import annotations

import logging
import threading
from typing import Any

from .advice import DefaultAdvisor, KindAdvisor
from .display import is_displayable
from .errors import PolicyError
from .kernel import Kernel
from .kinds import Kinded
from .notes import TOP_LEVEL, Artifact, Note, RenderContext
from .options import validate_options
from .renderers.guard import guard, policy_artifact
from .renderers.registry import Registry, get_registry
from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)


class Engine:
    """
    Kind-dispatch rendering.

    Rendering-policy problems (unknown kind, bad options, illegal nesting,
    values a kind cannot show) come back as diagnostic content. Failures of
    the advisor, the kernel or user callables propagate.
    """

    def __init__(
        self,
        *,
        registry: Registry | None = None,
        advisor: KindAdvisor | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.advisor: KindAdvisor = advisor or DefaultAdvisor()
        self.settings = settings or get_settings()

    def advise(self, note: Note) -> Note:
        """
        Fill in `note.kind`: from a `Kinded` value if there is one, otherwise
        from the advisor's top suggestion.
        """
        if note.kind is not None:
            return note
        if isinstance(note.value, Kinded):
            return note.evolve(
                value=note.value.value,
                kind=note.value.kind,
                options={**note.value.options, **note.options},
            )
        advice = self.advisor.advise(note.form, note.value)
        if not advice:
            return note
        LOGGER.debug("advised %s (%s)", advice[0].kind, advice[0].reason)
        return note.evolve(kind=advice[0].kind)

    def render(self, note: Note, ctx: RenderContext | None = None) -> Artifact:
        ctx = ctx or TOP_LEVEL
        note = self.advise(note)
        renderer = self.registry.resolve(note.kind)

        if renderer.options is not None:
            err = validate_options(note.kind, renderer.options, note.options)
            if err is not None:
                return policy_artifact(note, err)

        try:
            if not renderer.nestable:
                return guard(
                    note,
                    ctx,
                    lambda n: renderer.render(n, ctx=ctx, engine=self),
                    environment=self.settings.environment_name,
                )
            return renderer.render(note, ctx=ctx, engine=self)
        except PolicyError as e:
            LOGGER.debug("policy failure rendering %s: %s", note.kind, e.message)
            return policy_artifact(note, e)

    def render_value(
        self, value: Any, form: Any = None, ctx: RenderContext | None = None
    ) -> Artifact:
        return self.render(Note.of(value, form), ctx)

    def kind_eval(self, form: Any, kernel: Kernel) -> Any:
        """
        Evaluate `form` and return something the notebook can display.

        Natively displayable values come back untouched; everything else is
        rendered at top level and its payload returned.
        """
        value = kernel.evaluate(form)
        if is_displayable(value):
            return value
        return self.render(Note.of(value, form), TOP_LEVEL).payload


_ENGINE: Engine | None = None
_ENGINE_LOCK = threading.Lock()


def get_engine() -> Engine:
    """The process-wide engine over the process-wide registry and settings."""
    global _ENGINE
    if _ENGINE is None:
        with _ENGINE_LOCK:
            if _ENGINE is None:
                _ENGINE = Engine()
    return _ENGINE


def reset_engine() -> None:
    global _ENGINE
    with _ENGINE_LOCK:
        _ENGINE = None


def render(note: Note, ctx: RenderContext | None = None) -> Artifact:
    return get_engine().render(note, ctx)


def render_value(value: Any, form: Any = None, ctx: RenderContext | None = None) -> Artifact:
    return get_engine().render_value(value, form, ctx)


def kind_eval(form: Any, kernel: Kernel) -> Any:
    return get_engine().kind_eval(form, kernel)
