# src/notekind/kinds.py
"""
Kind tags and helpers for attaching an explicit kind to a value.

    from notekind import kinds

    kinds.md("# Title")
    kinds.html("<b>x</b>")
    kinds.fn({"x": 1, "y": 2}, {FN_KEY: lambda m: m["x"] + m["y"]})

The tag vocabulary is open: `Kinded(value, "kind/anything")` is valid and
simply routes to the default renderer until something registers that kind.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

IMAGE = "kind/image"
MD = "kind/md"
TEX = "kind/tex"
HTML = "kind/html"
VEGA_LITE = "kind/vega-lite"
PLOTLY = "kind/plotly"
CYTOSCAPE = "kind/cytoscape"
HIGHCHARTS = "kind/highcharts"
ECHARTS = "kind/echarts"
TABLE = "kind/table"
DATASET = "kind/dataset"
VECTOR = "kind/vector"
SET = "kind/set"
SEQ = "kind/seq"
MAP = "kind/map"
MARKUP = "kind/markup"
CODE = "kind/code"
PPRINT = "kind/pprint"
HIDDEN = "kind/hidden"
VIDEO = "kind/video"
FN = "kind/fn"

# Reserved key selecting the callable of a deferred-function value
FN_KEY = "kindly/f"


@dataclass(frozen=True, slots=True)
class Kinded:
    value: Any
    kind: str
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)


def kinded(value: Any, kind: str, options: Mapping[str, Any] | None = None) -> Kinded:
    return Kinded(value=value, kind=kind, options=dict(options or {}))


def kind_of(value: Any) -> str | None:
    """Explicit kind of `value`, if it carries one."""
    if isinstance(value, Kinded):
        return value.kind
    return None


def image(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, IMAGE, options)


def md(value: str, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, MD, options)


def tex(value: str, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, TEX, options)


def html(value: str, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, HTML, options)


def vega_lite(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, VEGA_LITE, options)


def plotly(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, PLOTLY, options)


def cytoscape(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, CYTOSCAPE, options)


def highcharts(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, HIGHCHARTS, options)


def echarts(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, ECHARTS, options)


def table(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, TABLE, options)


def dataset(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, DATASET, options)


def vector(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, VECTOR, options)


def set_(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, SET, options)


def seq(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, SEQ, options)


def map_(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, MAP, options)


def markup(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, MARKUP, options)


def code(value: str, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, CODE, options)


def pprint(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, PPRINT, options)


def hidden(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, HIDDEN, options)


def video(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, VIDEO, options)


def fn(value: Any, options: Mapping[str, Any] | None = None) -> Kinded:
    return kinded(value, FN, options)
