# src/notekind/renderers/image.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import display, kinds
from ..backends import image_to_png_bytes
from ..errors import MalformedValueError
from ..markup import Node
from ..notes import Artifact, Note, RenderContext
from .base import payload_artifact

if TYPE_CHECKING:
    from ..engine import Engine


@dataclass(slots=True)
class ImageRenderer:
    kind: str = kinds.IMAGE
    options: frozenset[str] = frozenset({"alt", "width", "height"})
    nestable: bool = False

    def render(self, note: Note, *, ctx: RenderContext, engine: Engine) -> Artifact:
        value = note.value
        # a one-element sequence wrapping the image is accepted too
        if isinstance(value, (list, tuple)) and len(value) == 1:
            value = value[0]

        data = image_to_png_bytes(value)
        if data is None:
            raise MalformedValueError(
                f"{note.kind} cannot encode {type(value).__name__} as png",
                kind=note.kind,
            )

        payload = display.png(data)
        attrs = {
            "src": f"data:{display.PNG};base64,{payload.data}",
            "alt": note.options.get("alt") or "image",
            "style": "max-width:100%;height:auto",
            "width": note.options.get("width"),
            "height": note.options.get("height"),
        }
        return payload_artifact(note, Node("img", attrs, ()), payload)
