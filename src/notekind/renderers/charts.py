# src/notekind/renderers/charts.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import display, kinds
from ..assets import require_library
from ..backends import json_safe, to_json
from ..markup import Node
from ..notes import Artifact, Note, RenderContext
from .base import html_artifact, payload_artifact

if TYPE_CHECKING:
    from ..engine import Engine

# JavaScript run once the library is available; `container` is the chart div
# and {spec} the JSON-encoded chart description.
PLOTLY_CMD = "Plotly.newPlot(container, {spec});"
HIGHCHARTS_CMD = "Highcharts.chart(container, {spec});"
CYTOSCAPE_CMD = "var value = {spec}; value['container'] = container; cytoscape(value);"
ECHARTS_CMD = "var chart = echarts.init(container); chart.setOption({spec});"


@dataclass(slots=True)
class ChartRenderer:
    """
    Chart drawn client-side by a third-party library.

    The artifact is a sized div holding a loader script, so it nests fine
    inside composites.
    """

    kind: str
    library: str
    command: str
    options: frozenset[str] = frozenset({"width", "height"})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        settings = engine.settings
        style = {
            "height": note.options.get("height") or settings.chart_height,
            "width": note.options.get("width") or settings.chart_width,
        }
        script = require_library(
            self.library, self.command.replace("{spec}", to_json(note.value)), settings
        )
        tree = Node(
            "div",
            {"class": f"kind-{self.library}", "style": style},
            (script,),
        )
        return html_artifact(note, tree, dependencies={self.library})


def chart_renderers() -> list[ChartRenderer]:
    return [
        ChartRenderer(kind=kinds.PLOTLY, library="plotly", command=PLOTLY_CMD),
        ChartRenderer(kind=kinds.HIGHCHARTS, library="highcharts", command=HIGHCHARTS_CMD),
        ChartRenderer(kind=kinds.CYTOSCAPE, library="cytoscape", command=CYTOSCAPE_CMD),
        ChartRenderer(kind=kinds.ECHARTS, library="echarts", command=ECHARTS_CMD),
    ]


@dataclass(slots=True)
class VegaLiteRenderer:
    """Vega-Lite spec handed to the notebook's own vega-lite mime renderer."""

    kind: str = kinds.VEGA_LITE
    options: frozenset[str] = frozenset()
    nestable: bool = False

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        spec = json_safe(note.value)
        tree = Node(
            "div",
            {"class": "kind-vega-lite"},
            (Node("pre", {}, (json.dumps(spec, indent=2),)),),
        )
        return payload_artifact(note, tree, display.vega_lite(spec))
