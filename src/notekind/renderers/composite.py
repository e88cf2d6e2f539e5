# src/notekind/renderers/composite.py
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .. import kinds
from ..assets import require_library
from ..backends import is_dataframe, to_dataframe, to_json
from ..errors import MalformedValueError, NestingDepthError
from ..markup import Node
from ..notes import Artifact, Note, RenderContext
from .base import html_artifact
from .limits import printed

if TYPE_CHECKING:
    from ..engine import Engine

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Printed:
    """An element shown as its printed text, without kind dispatch."""

    value: Any


def render_composite(
    note: Note,
    css_class: str,
    elements: Iterable[Any],
    ctx: RenderContext,
    engine: Engine,
) -> Artifact:
    """
    Render every element nested, in order, into one container.

    A failing element only affects its own slot: policy failures come back
    from the engine as diagnostic artifacts.
    """
    child_ctx = _enter(note, ctx, engine)
    max_chars = engine.settings.max_text_chars

    items: list[Node] = []
    deps: set[str] = set()
    for el in elements:
        if isinstance(el, _Printed):
            markup: Any = printed(el.value, max_chars=max_chars)
        else:
            art = engine.render_value(el, ctx=child_ctx)
            markup = art.markup
            deps |= art.dependencies
        items.append(Node("div", {"class": "kind-item"}, (markup,)))

    tree = Node("div", {"class": css_class}, tuple(items))
    return html_artifact(note, tree, dependencies=deps)


def _enter(note: Note, ctx: RenderContext, engine: Engine) -> RenderContext:
    # self-referential containers stop here instead of exhausting the stack
    limit = engine.settings.max_composite_depth
    if ctx.depth >= limit:
        raise NestingDepthError(limit, kind=note.kind)
    return ctx.enter_composite()


def _iterable(note: Note) -> Iterable[Any]:
    value = note.value
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Iterable):
        raise MalformedValueError(
            f"{note.kind} expects a collection, got {type(value).__name__}",
            kind=note.kind,
        )
    return value


@dataclass(slots=True)
class VectorRenderer:
    kind: str = kinds.VECTOR
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        return render_composite(note, "kind-vector", _iterable(note), ctx, engine)


@dataclass(slots=True)
class SetRenderer:
    kind: str = kinds.SET
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        return render_composite(note, "kind-set", _iterable(note), ctx, engine)


@dataclass(slots=True)
class SeqRenderer:
    kind: str = kinds.SEQ
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        return render_composite(note, "kind-seq", _iterable(note), ctx, engine)


@dataclass(slots=True)
class MapRenderer:
    kind: str = kinds.MAP
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        if not isinstance(note.value, Mapping):
            raise MalformedValueError(
                f"{note.kind} expects a mapping, got {type(note.value).__name__}",
                kind=note.kind,
            )
        return render_composite(note, "kind-map", _interleave(note.value), ctx, engine)


def _interleave(m: Mapping[Any, Any]) -> list[Any]:
    # key, value, key, value, ... in iteration order
    out: list[Any] = []
    for k, v in m.items():
        out.append(k if kinds.kind_of(k) is not None else _Printed(k))
        out.append(v)
    return out


# ---- Tables ---------------------------------------------------------------------


@dataclass(slots=True)
class TableRenderer:
    kind: str = kinds.TABLE
    options: frozenset[str] = frozenset(
        {"use_datatables", "datatables", "column_names", "row_vectors", "row_maps"}
    )
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        columns, rows = table_shape(note.value, note.options, kind=note.kind)
        tree: Node = table_node(columns, rows, max_chars=engine.settings.max_text_chars)

        if not note.options.get("use_datatables"):
            return html_artifact(note, tree)

        dt_options = note.options.get("datatables") or {}
        LOGGER.debug("table with %d rows via DataTables", len(rows))
        script = require_library(
            "datatables",
            f"new DataTable(container.querySelector('table'), {to_json(dt_options)});",
            engine.settings,
        )
        wrapped = Node("div", {"class": "kind-table-wrap"}, (tree, script))
        return html_artifact(note, wrapped, dependencies={"datatables"})


def table_shape(
    value: Any, options: Mapping[str, Any], *, kind: str | None = kinds.TABLE
) -> tuple[list[Any] | None, list[list[Any]]]:
    """
    Normalise the accepted table inputs to (column identifiers, rows).

    Column identifiers are None when the input has no header.
    """
    spec: dict[str, Any] = {}
    if isinstance(value, Mapping) and (
        {"column_names", "row_vectors", "row_maps"} & set(value)
    ):
        spec.update(value)
    elif is_dataframe(value):
        df = to_dataframe(value)
        spec["column_names"] = list(df.columns)
        spec["row_vectors"] = [list(r) for r in df.itertuples(index=False, name=None)]
    elif isinstance(value, Mapping):
        # column-oriented: {"x": [...], "y": [...]}
        cols = list(value)
        series = [_sequence(f"table column {c!r}", value[c], kind=kind) for c in cols]
        if len({len(s) for s in series}) > 1:
            raise MalformedValueError("table columns differ in length", kind=kind)
        spec["column_names"] = cols
        spec["row_vectors"] = [list(r) for r in zip(*series)]
    elif isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        rows = list(value)
        if rows and all(isinstance(r, Mapping) for r in rows):
            spec["row_maps"] = rows
        else:
            spec["row_vectors"] = rows
    elif value is not None:
        raise MalformedValueError(
            f"cannot show {type(value).__name__} as a table", kind=kind
        )

    for key in ("column_names", "row_vectors", "row_maps"):
        if key in options:
            spec[key] = options[key]

    columns = spec.get("column_names")
    if columns is not None:
        columns = _sequence("column_names", columns, kind=kind)

    if spec.get("row_maps") is not None:
        maps = _sequence("row_maps", spec["row_maps"], kind=kind)
        for i, m in enumerate(maps):
            if not isinstance(m, Mapping):
                raise MalformedValueError(
                    f"table row {i} must be a mapping, got {type(m).__name__}",
                    kind=kind,
                )
        if columns is None:
            columns = []
            for m in maps:
                for k in m:
                    if k not in columns:
                        columns.append(k)
        rows = [[m.get(c) for c in columns] for m in maps]
    else:
        vectors = _sequence("row_vectors", spec.get("row_vectors") or [], kind=kind)
        rows = [_row(r, kind=kind) for r in vectors]

    if columns is not None:
        for i, r in enumerate(rows):
            if len(r) != len(columns):
                raise MalformedValueError(
                    f"table row {i} has {len(r)} cells, expected {len(columns)}",
                    kind=kind,
                )
    return columns, rows


def _sequence(what: str, v: Any, *, kind: str | None) -> list[Any]:
    if isinstance(v, (str, bytes)) or not isinstance(v, Iterable):
        raise MalformedValueError(
            f"{what} must be a sequence, got {type(v).__name__}", kind=kind
        )
    return list(v)


def _row(r: Any, *, kind: str | None) -> list[Any]:
    if isinstance(r, (str, bytes)) or not isinstance(r, Iterable):
        raise MalformedValueError(
            f"table rows must be sequences, got {type(r).__name__}", kind=kind
        )
    return list(r)


def table_node(
    columns: list[Any] | None, rows: list[list[Any]], *, max_chars: int
) -> Node:
    # cells are plain printed text whatever they hold
    parts: list[Node] = []
    if columns is not None:
        header = Node(
            "tr", {}, tuple(Node("th", {}, (printed(c, max_chars=max_chars),)) for c in columns)
        )
        parts.append(Node("thead", {}, (header,)))

    body = tuple(
        Node(
            "tr", {}, tuple(Node("td", {}, (printed(c, max_chars=max_chars),)) for c in r)
        )
        for r in rows
    )
    parts.append(Node("tbody", {}, body))
    return Node("table", {"class": "kind-table"}, tuple(parts))


# ---- Markup trees ---------------------------------------------------------------


@dataclass(slots=True)
class MarkupRenderer:
    """A markup tree whose leaves may be kinded values rendered in place."""

    kind: str = kinds.MARKUP
    options: frozenset[str] = frozenset()
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        if not isinstance(note.value, Node):
            raise MalformedValueError(
                f"{note.kind} expects a markup Node, got {type(note.value).__name__}",
                kind=note.kind,
            )
        deps: set[str] = set()
        tree = self._walk(note.value, _enter(note, ctx, engine), engine, deps)
        return html_artifact(note, tree, dependencies=deps)

    def _walk(
        self, tree: Node, ctx: RenderContext, engine: Engine, deps: set[str]
    ) -> Node:
        children: list[Any] = []
        for child in tree.children:
            if isinstance(child, Node):
                children.append(self._walk(child, ctx, engine, deps))
            elif kinds.kind_of(child) is not None:
                art = engine.render_value(child, ctx=ctx)
                deps |= art.dependencies
                children.append(art.markup)
            else:
                children.append(child)
        return Node(tree.tag, tree.attrs, tuple(children))
