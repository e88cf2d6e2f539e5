# src/notekind/__init__.py
from __future__ import annotations

from . import kinds
from .display import MimePayload
from .engine import Engine, get_engine, kind_eval, render, render_value, reset_engine
from .kernel import Binding, NamespaceKernel
from .kinds import Kinded
from .markup import Node, Raw
from .notes import Artifact, Note, RenderContext
from .renderers.registry import get_registry, register_renderer
from .settings import get_settings, set_settings

__all__ = [
    "kinds",
    "Kinded",
    "Note",
    "Artifact",
    "RenderContext",
    "Node",
    "Raw",
    "MimePayload",
    "Binding",
    "NamespaceKernel",
    "Engine",
    "get_engine",
    "reset_engine",
    "render",
    "render_value",
    "kind_eval",
    "get_registry",
    "register_renderer",
    "get_settings",
    "set_settings",
]
