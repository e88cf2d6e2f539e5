# src/notekind/renderers/dataset.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import kinds
from ..backends import df_to_html_simple, is_dataframe, to_dataframe
from ..errors import MalformedValueError
from ..markup import Node, Raw
from ..notes import Artifact, Note, RenderContext
from ..options import int_option
from .base import html_artifact

if TYPE_CHECKING:
    from ..engine import Engine


@dataclass(slots=True)
class DatasetRenderer:
    kind: str = kinds.DATASET
    options: frozenset[str] = frozenset({"max_rows"})
    nestable: bool = True

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        if not is_dataframe(note.value):
            raise MalformedValueError(
                f"{note.kind} expects a DataFrame, got {type(note.value).__name__}",
                kind=note.kind,
            )
        df = to_dataframe(note.value)
        max_rows = int_option(
            note.options, "max_rows", engine.settings.max_dataset_rows, kind=note.kind
        )

        children: list[object] = [Raw(df_to_html_simple(df, max_rows))]
        if len(df) > max_rows:
            children.append(
                Node(
                    "div",
                    {"class": "kind-dataset-note"},
                    (f"Showing {max_rows} of {len(df)} rows",),
                )
            )
        tree = Node("div", {"class": "kind-dataset-wrap"}, tuple(children))
        return html_artifact(note, tree)
