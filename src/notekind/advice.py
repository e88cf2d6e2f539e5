# src/notekind/advice.py
from __future__ import annotations

import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from matplotlib.figure import Figure

from . import kinds
from .backends import is_dataframe
from .markup import Node


@dataclass(frozen=True, slots=True)
class Advice:
    kind: str
    reason: str


class KindAdvisor(Protocol):
    def advise(self, form: Any, value: Any) -> list[Advice]:
        """Candidate kinds for `value`, best first. May be empty."""
        ...


class DefaultAdvisor:
    """
    Infers a kind from the value's Python type.

    Explicitly kinded values come first; plain scalars get no advice and fall
    to the default renderer.
    """

    def advise(self, form: Any, value: Any) -> list[Advice]:
        out: list[Advice] = []

        explicit = kinds.kind_of(value)
        if explicit is not None:
            out.append(Advice(explicit, "explicit"))
            return out

        if isinstance(value, Figure):
            out.append(Advice(kinds.IMAGE, "matplotlib figure"))
        elif is_dataframe(value):
            out.append(Advice(kinds.DATASET, "dataframe"))
        elif isinstance(value, Node):
            out.append(Advice(kinds.MARKUP, "markup tree"))
        elif isinstance(value, Mapping):
            out.append(Advice(kinds.MAP, "mapping"))
        elif isinstance(value, (list, tuple)):
            out.append(Advice(kinds.VECTOR, "sequence"))
        elif isinstance(value, (set, frozenset)):
            out.append(Advice(kinds.SET, "set"))
        elif isinstance(value, (types.GeneratorType, range, map, filter, zip)):
            out.append(Advice(kinds.SEQ, "lazy sequence"))

        return out
