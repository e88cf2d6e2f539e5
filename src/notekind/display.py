# src/notekind/display.py
"""
Platform payloads: the MIME-typed values handed to the notebook transport.

The transport itself lives outside notekind; a `MimePayload` only needs to
expose `_repr_mimebundle_` for IPython to show it as-is.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any

from matplotlib.figure import Figure

from .kernel import Binding
from .markup import to_html

HTML = "text/html"
PLAIN = "text/plain"
MARKDOWN = "text/markdown"
LATEX = "text/latex"
PNG = "image/png"
VEGA_LITE = "application/vnd.vegalite.v5+json"


@dataclass(frozen=True, slots=True)
class MimePayload:
    mime: str
    data: Any

    def to_bundle(self) -> dict[str, Any]:
        bundle: dict[str, Any] = {self.mime: self.data}
        if self.mime != PLAIN and isinstance(self.data, str):
            bundle.setdefault(PLAIN, self.data)
        return bundle

    def _repr_mimebundle_(self, include: Any = None, exclude: Any = None) -> dict[str, Any]:
        return self.to_bundle()


def html_payload(tree: Any) -> MimePayload:
    """Wrap a finished markup tree as an html document payload."""
    return MimePayload(HTML, to_html(tree))


def raw_html(s: str) -> MimePayload:
    return MimePayload(HTML, s)


def markdown(s: str) -> MimePayload:
    return MimePayload(MARKDOWN, s)


def latex(s: str) -> MimePayload:
    return MimePayload(LATEX, s)


def png(data: bytes) -> MimePayload:
    return MimePayload(PNG, base64.b64encode(data).decode("ascii"))


def vega_lite(spec: Any) -> MimePayload:
    return MimePayload(VEGA_LITE, spec)


def is_displayable(value: Any) -> bool:
    """
    True for values the notebook already knows how to show.

    Those are passed through untouched instead of being rendered:
    nothing at all, an already produced payload, a matplotlib figure, and
    kernel binding handles.
    """
    if value is None:
        return True
    if isinstance(value, (MimePayload, Binding)):
        return True
    if isinstance(value, Figure):
        return True
    return False
