from __future__ import annotations

import pandas as pd
from matplotlib.figure import Figure

from notekind import kinds
from notekind.advice import DefaultAdvisor
from notekind.markup import Node


def _top(value: object) -> str | None:
    advice = DefaultAdvisor().advise("form", value)
    return advice[0].kind if advice else None


def test_explicit_kind_wins() -> None:
    advice = DefaultAdvisor().advise(None, kinds.md("x"))
    assert [(a.kind, a.reason) for a in advice] == [(kinds.MD, "explicit")]


def test_inferred_kinds() -> None:
    assert _top(Figure()) == kinds.IMAGE
    assert _top(pd.DataFrame()) == kinds.DATASET
    assert _top(Node("div")) == kinds.MARKUP
    assert _top({"a": 1}) == kinds.MAP
    assert _top([1]) == kinds.VECTOR
    assert _top((1,)) == kinds.VECTOR
    assert _top({1}) == kinds.SET
    assert _top(frozenset()) == kinds.SET
    assert _top(x for x in []) == kinds.SEQ
    assert _top(range(3)) == kinds.SEQ


def test_scalars_get_no_advice() -> None:
    for v in (1, 1.5, "s", b"b", None, True):
        assert _top(v) is None
