from __future__ import annotations

import sys
from types import SimpleNamespace
from typing import Any

import pytest

import notekind.renderers.text as text_mod
from notekind import kinds
from notekind.display import HTML, LATEX, MARKDOWN
from notekind.engine import Engine
from notekind.markup import Raw, text_content, to_html
from notekind.renderers.limits import TextLimits, truncate_text
from notekind.renderers.registry import default_registry
from notekind.settings import Settings


def _engine(**settings: Any) -> Engine:
    return Engine(registry=default_registry(), settings=Settings(**settings))


def test_markdown_markup_and_payload() -> None:
    art = _engine().render_value(kinds.md("# Title\n\n| a | b |\n|---|---|\n| 1 | 2 |"))
    assert art.payload.mime == MARKDOWN
    assert art.payload.data.startswith("# Title")
    html = to_html(art.markup)
    assert '<div class="kind-md">' in html
    assert "<h1>Title</h1>" in html
    assert "<table>" in html


def test_markdown_accepts_list_of_lines() -> None:
    art = _engine().render_value(kinds.md(["a", "b"]))
    assert art.payload.data == "a\nb"


def test_markdown_rejects_non_text() -> None:
    art = _engine().render_value(kinds.md(123))  # type: ignore[arg-type]
    assert "expects text" in text_content(art.markup)


def test_tex_wraps_in_display_math() -> None:
    art = _engine().render_value(kinds.tex("x^2"))
    assert art.payload.mime == LATEX
    assert art.payload.data == "$$x^2$$"
    already = _engine().render_value(kinds.tex("$a$"))
    assert already.payload.data == "$a$"


def test_html_is_raw_by_default() -> None:
    art = _engine().render_value(kinds.html("<script>x()</script><b>y</b>"))
    assert isinstance(art.markup, Raw)
    assert art.payload.mime == HTML
    assert art.payload.data == "<script>x()</script><b>y</b>"


def test_html_sanitized_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_clean(s: str, **kwargs: Any) -> str:
        calls.append(s)
        return s.replace("<script>x()</script>", "")

    fake_bleach = SimpleNamespace(
        clean=fake_clean,
        linkify=lambda s, callbacks=None: s,
        callbacks=SimpleNamespace(nofollow=lambda attrs, new=False: attrs),
    )
    monkeypatch.setattr(text_mod, "bleach", fake_bleach)

    art = _engine(sanitize_html=True).render_value(kinds.html("<script>x()</script><b>y</b>"))
    assert calls == ["<script>x()</script><b>y</b>"]
    assert art.payload.data == "<b>y</b>"


def test_sanitize_html_with_real_bleach_strips_scripts() -> None:
    out = text_mod.sanitize_html('<b>ok</b><script>alert(1)</script><a href="http://x.org">l</a>')
    assert "<script" not in out
    assert "<b>ok</b>" in out
    assert 'rel="nofollow"' in out


def test_code_and_pprint() -> None:
    engine = _engine()
    code = engine.render_value(kinds.code("a < b", {"language": "clojure"}))
    assert to_html(code.markup) == (
        '<pre class="kind-code"><code class="language-clojure">a &lt; b</code></pre>'
    )

    pp = engine.render_value(kinds.pprint({"k": list(range(3))}))
    assert text_content(pp.markup) == "{'k': [0, 1, 2]}"


def test_code_is_truncated_to_limits() -> None:
    art = _engine(max_text_chars=5).render_value(kinds.code("x" * 20))
    assert text_content(art.markup) == "xxxxx\n…"


def test_hidden_renders_nothing() -> None:
    art = _engine().render_value(kinds.hidden(object()))
    assert art.markup is None
    assert art.payload.data == ""


def test_video() -> None:
    engine = _engine()
    art = engine.render_value(kinds.video("https://x.org/v.mp4", {"width": 320}))
    assert to_html(art.markup) == '<video controls src="https://x.org/v.mp4" width="320"></video>'

    bad = engine.render_value(kinds.video(3))
    assert "expects a url" in text_content(bad.markup)


def test_vega_lite_payload_is_json_safe() -> None:
    import numpy as np

    art = _engine().render_value(kinds.vega_lite({"mark": "bar", "width": np.int64(4)}))
    assert art.payload.mime == "application/vnd.vegalite.v5+json"
    assert art.payload.data == {"mark": "bar", "width": 4}
    assert "&quot;mark&quot;" in to_html(art.markup)


def test_truncate_text_marks_cut_text() -> None:
    assert truncate_text("abc", limits=TextLimits(max_chars=5)) == ("abc", False)
    assert truncate_text("abcdef", limits=TextLimits(max_chars=3)) == ("abc\n…", True)
    assert truncate_text("a\nbcdef", limits=TextLimits(max_chars=2)) == ("a\n…", True)
