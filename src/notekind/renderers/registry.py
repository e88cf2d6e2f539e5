# src/notekind/renderers/registry.py
from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Mapping

from .base import Renderer
from .default import DefaultRenderer

LOGGER = logging.getLogger(__name__)


class Registry:
    """
    Kind tag -> renderer, with a guaranteed default.

    Registration happens at setup time. Writers take a lock and publish a
    fresh mapping; readers just dereference the current one, so renders
    from several threads can share one registry without locking.
    """

    def __init__(self, *, default: Renderer | None = None) -> None:
        self._default: Renderer = default or DefaultRenderer()
        self._renderers: Mapping[str, Renderer] = MappingProxyType({})
        self._lock = threading.Lock()

    @property
    def default(self) -> Renderer:
        return self._default

    def register(self, kind: str, renderer: Renderer) -> None:
        """Register `renderer` for `kind`, replacing any previous one."""
        with self._lock:
            updated = dict(self._renderers)
            replaced = kind in updated
            updated[kind] = renderer
            self._renderers = MappingProxyType(updated)
        LOGGER.debug(
            "%s renderer for %s: %s",
            "replaced" if replaced else "registered",
            kind,
            type(renderer).__name__,
        )

    def resolve(self, kind: str | None) -> Renderer:
        if kind is None:
            return self._default
        return self._renderers.get(kind, self._default)

    def kinds(self) -> list[str]:
        return sorted(self._renderers)

    def __contains__(self, kind: object) -> bool:
        return kind in self._renderers


def default_registry() -> Registry:
    """A registry holding every built-in kind."""
    from . import register_default_renderers

    reg = Registry()
    register_default_renderers(reg)
    return reg


_REGISTRY: Registry | None = None
_REGISTRY_LOCK = threading.Lock()


def get_registry() -> Registry:
    """The process-wide registry, built with the built-in kinds on first use."""
    global _REGISTRY
    if _REGISTRY is None:
        with _REGISTRY_LOCK:
            if _REGISTRY is None:
                _REGISTRY = default_registry()
    return _REGISTRY


def register_renderer(r: Renderer, *, kind: str | None = None) -> None:
    """Register `r` on the process-wide registry under `kind` or `r.kind`."""
    tag = kind or r.kind
    if tag is None:
        raise ValueError("renderer has no kind; pass kind= explicitly")
    get_registry().register(tag, r)


def reset_registry() -> None:
    """Drop the process-wide registry; the next access rebuilds it."""
    global _REGISTRY
    with _REGISTRY_LOCK:
        _REGISTRY = None
