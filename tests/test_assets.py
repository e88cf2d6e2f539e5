from __future__ import annotations

import re

from notekind import kinds
from notekind.assets import LIBRARIES, library, require_js, require_library
from notekind.engine import Engine
from notekind.markup import Raw, to_html
from notekind.renderers.registry import default_registry
from notekind.settings import Settings

URL = "https://cdn.example.org/plotly.min.js"


def _script(node) -> str:
    assert node.tag == "script"
    (raw,) = node.children
    assert isinstance(raw, Raw)
    return raw.text


def _render_fn(js: str, ident: str) -> str:
    m = re.search(rf"var (render_{ident}_[0-9a-f]{{12}}) = function", js)
    assert m is not None
    return m.group(1)


def test_loader_checks_then_loads_else_runs() -> None:
    js = _script(require_js(URL, "Plotly", "Plotly.newPlot(container, {});"))
    render_fn = _render_fn(js, "Plotly")

    assert "if (typeof Plotly === 'undefined')" in js
    assert "window.loadScript_Plotly" in js
    assert f'window.promise_Plotly || window.loadScript_Plotly("{URL}")' in js
    assert "} else {" in js
    # once after the load promise, once inline
    assert js.count(f"{render_fn}(") == 2
    assert js.index(".then(") < js.index("} else {")
    assert "Plotly.newPlot(container, {});" in js


def test_two_snippets_for_same_library_do_not_collide() -> None:
    a = _script(require_js(URL, "Plotly", "x();"))
    b = _script(require_js(URL, "Plotly", "x();"))

    assert _render_fn(a, "Plotly") != _render_fn(b, "Plotly")
    for js in (a, b):
        assert "if (typeof Plotly === 'undefined')" in js
        assert "} else {" in js


def test_dotted_globals_get_safe_identifiers() -> None:
    js = _script(require_js(URL, "vega.embed", "x();"))
    assert "typeof vega.embed === 'undefined'" in js
    assert "window.loadScript_vega_embed" in js


def test_library_url_override() -> None:
    settings = Settings(library_urls={"plotly": "https://mirror.local/plotly.js"})
    assert library("plotly", settings).url == "https://mirror.local/plotly.js"
    assert library("echarts", settings).url == LIBRARIES["echarts"].url

    js = _script(require_library("plotly", "x();", settings))
    assert "https://mirror.local/plotly.js" in js


def test_chart_renderer_embeds_spec_and_dependency() -> None:
    engine = Engine(registry=default_registry(), settings=Settings(chart_height="300px"))
    art = engine.render_value(kinds.highcharts({"title": {"text": "t"}}))

    assert art.dependencies == frozenset({"highcharts"})
    assert art.markup.attrs["style"] == {"height": "300px", "width": "500px"}
    html = to_html(art.markup)
    assert 'style="height:300px;width:500px"' in html
    assert 'Highcharts.chart(container, {"title": {"text": "t"}});' in html
    assert art.payload.data == html


def test_chart_kinds_nest_inside_composites() -> None:
    engine = Engine(registry=default_registry(), settings=Settings())
    art = engine.render_value([kinds.cytoscape({"elements": []}), kinds.echarts({"series": []})])
    html = art.payload.data
    assert "nested rendering" not in html
    assert "value['container'] = container; cytoscape(value);" in html
    assert "echarts.init(container)" in html
    assert "typeof cytoscape === 'undefined'" in html
    assert "typeof echarts === 'undefined'" in html
