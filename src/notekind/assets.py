# src/notekind/assets.py
"""
Client-side loaders for third-party visualization libraries.

Every chart artifact carries its own <script>. When several artifacts on one
page need the same library, the library is fetched once: the load promise is
shared per library on `window`, and the `typeof` check skips loading when
the global already exists. The render command always runs, inline when the
library is present, after the load promise settles otherwise. A load that
never completes leaves the render pending; there is no timeout.
"""
from __future__ import annotations

import json
import re
import uuid
from dataclasses import dataclass

from .markup import Node, Raw
from .settings import Settings, get_settings

_IDENT_RE = re.compile(r"\W")


@dataclass(frozen=True, slots=True)
class JsLibrary:
    name: str
    url: str
    js_object: str  # global the library defines once loaded


LIBRARIES: dict[str, JsLibrary] = {
    "plotly": JsLibrary(
        "plotly", "https://cdn.plot.ly/plotly-2.35.2.min.js", "Plotly"
    ),
    "cytoscape": JsLibrary(
        "cytoscape",
        "https://cdnjs.cloudflare.com/ajax/libs/cytoscape/3.30.4/cytoscape.min.js",
        "cytoscape",
    ),
    "highcharts": JsLibrary(
        "highcharts", "https://code.highcharts.com/highcharts.js", "Highcharts"
    ),
    "echarts": JsLibrary(
        "echarts",
        "https://cdn.jsdelivr.net/npm/echarts@5.4.1/dist/echarts.min.js",
        "echarts",
    ),
    "datatables": JsLibrary(
        "datatables",
        "https://cdn.datatables.net/2.1.8/js/dataTables.min.js",
        "DataTable",
    ),
}


def library(name: str, settings: Settings | None = None) -> JsLibrary:
    """Built-in library by name, with any URL override from settings applied."""
    settings = settings or get_settings()
    lib = LIBRARIES[name]
    url = settings.library_urls.get(name)
    if url:
        return JsLibrary(lib.name, url, lib.js_object)
    return lib


def _ident(js_object: str) -> str:
    return _IDENT_RE.sub("_", js_object)


def require_js(url: str, js_object: str, render_cmd: str) -> Node:
    """
    Build a <script> node that loads `url` unless `js_object` is already
    defined, then runs `render_cmd`.

    The render runs exactly once per snippet: synchronously when the global
    is already present, otherwise after the shared load promise resolves.

    `render_cmd` is JavaScript that may use `container`, the element the
    script sits in.
    """
    ident = _ident(js_object)
    uid = uuid.uuid4().hex[:12]
    render_fn = f"render_{ident}_{uid}"
    container = f"container_{ident}_{uid}"
    loader = f"loadScript_{ident}"
    promise = f"promise_{ident}"

    js = f"""
(function () {{
  var {container} = document.currentScript ? document.currentScript.parentElement : document.body;
  var {render_fn} = function (container) {{
    {render_cmd}
  }};
  window.{loader} = window.{loader} || (src => new Promise(resolve => {{
    var script = document.createElement('script');
    script.src = src;
    script.addEventListener('load', resolve);
    document.head.appendChild(script);
  }}));
  if (typeof {js_object} === 'undefined') {{
    window.{promise} = window.{promise} || window.{loader}({json.dumps(url)});
    window.{promise}.then(() => {{
      console.log('{js_object} loaded');
      {render_fn}({container});
    }});
  }} else {{
    {render_fn}({container});
  }}
}})();
""".strip()
    return Node("script", {}, (Raw(js),))


def require_library(
    name: str, render_cmd: str, settings: Settings | None = None
) -> Node:
    lib = library(name, settings)
    return require_js(lib.url, lib.js_object, render_cmd)
