from __future__ import annotations

from dataclasses import dataclass

import notekind.renderers.registry as reg
from notekind import kinds
from notekind.engine import Engine
from notekind.markup import text_content
from notekind.notes import Artifact, Note, RenderContext
from notekind.renderers.base import html_artifact
from notekind.renderers.default import DefaultRenderer
from notekind.settings import Settings


@dataclass
class DummyRenderer:
    kind: str
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        return html_artifact(note, f"{self.kind}:{note.value}")


def test_resolve_returns_registered_renderer() -> None:
    r = reg.Registry()
    d = DummyRenderer(kind="kind/dummy")
    r.register("kind/dummy", d)

    assert r.resolve("kind/dummy") is d
    assert "kind/dummy" in r


def test_resolve_unknown_or_missing_kind_returns_default() -> None:
    r = reg.Registry()
    assert isinstance(r.resolve("kind/nope"), DefaultRenderer)
    assert r.resolve(None) is r.default
    assert r.resolve("kind/nope") is r.default


def test_last_registration_wins() -> None:
    r = reg.Registry()
    first = DummyRenderer(kind="kind/x")
    second = DummyRenderer(kind="kind/x")
    r.register("kind/x", first)
    r.register("kind/x", second)
    assert r.resolve("kind/x") is second
    assert r.kinds() == ["kind/x"]


def test_any_kind_value_is_accepted() -> None:
    r = reg.Registry()
    r.register("", DummyRenderer(kind=""))
    r.register("weird kind/with spaces", DummyRenderer(kind="w"))
    assert r.resolve("") is not r.default


def test_default_registry_has_builtin_kinds() -> None:
    r = reg.default_registry()
    for k in (
        kinds.IMAGE, kinds.MD, kinds.TEX, kinds.HTML, kinds.VEGA_LITE,
        kinds.PLOTLY, kinds.CYTOSCAPE, kinds.HIGHCHARTS, kinds.ECHARTS,
        kinds.VECTOR, kinds.SET, kinds.SEQ, kinds.MAP, kinds.TABLE,
        kinds.MARKUP, kinds.DATASET, kinds.CODE, kinds.PPRINT,
        kinds.HIDDEN, kinds.VIDEO, kinds.FN,
    ):
        assert k in r, k
        assert r.resolve(k) is not r.default


def test_non_nestable_flags_on_builtins() -> None:
    r = reg.default_registry()
    non_nestable = {k for k in r.kinds() if not r.resolve(k).nestable}
    assert non_nestable == {
        kinds.IMAGE, kinds.MD, kinds.TEX, kinds.HTML, kinds.VEGA_LITE
    }


def test_register_renderer_extends_process_registry() -> None:
    reg.reset_registry()
    try:
        reg.register_renderer(DummyRenderer(kind="kind/custom"))
        engine = Engine(registry=reg.get_registry(), settings=Settings())
        art = engine.render(Note(value=5, kind="kind/custom"))
        assert text_content(art.markup) == "kind/custom:5"
        # built-ins are still there
        assert kinds.MD in reg.get_registry()
    finally:
        reg.reset_registry()
