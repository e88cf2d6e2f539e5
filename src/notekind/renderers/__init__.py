# src/notekind/renderers/__init__.py
from __future__ import annotations

from .registry import Registry
from .charts import VegaLiteRenderer, chart_renderers
from .composite import (
    MapRenderer,
    MarkupRenderer,
    SeqRenderer,
    SetRenderer,
    TableRenderer,
    VectorRenderer,
)
from .dataset import DatasetRenderer
from .fn import FnRenderer
from .image import ImageRenderer
from .text import (
    CodeRenderer,
    HiddenRenderer,
    HtmlRenderer,
    MarkdownRenderer,
    PprintRenderer,
    TexRenderer,
    VideoRenderer,
)


def register_default_renderers(registry: Registry) -> None:
    builtins = [
        ImageRenderer(),
        MarkdownRenderer(),
        TexRenderer(),
        HtmlRenderer(),
        VegaLiteRenderer(),
        *chart_renderers(),
        VectorRenderer(),
        SetRenderer(),
        SeqRenderer(),
        MapRenderer(),
        TableRenderer(),
        MarkupRenderer(),
        DatasetRenderer(),
        CodeRenderer(),
        PprintRenderer(),
        HiddenRenderer(),
        VideoRenderer(),
        FnRenderer(),
    ]
    for r in builtins:
        registry.register(r.kind, r)
