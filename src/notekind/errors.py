# src/notekind/errors.py
from __future__ import annotations

from typing import Any, Iterable


class NotekindError(Exception):
    pass


class PolicyError(NotekindError):
    """
    A rendering-policy failure.

    The render entry point catches these and turns them into diagnostic
    content; they never escape `Engine.render`.
    """

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class InvalidOptionsError(PolicyError):
    def __init__(self, keys: Iterable[Any], *, kind: str | None = None) -> None:
        self.keys = sorted((str(k) for k in keys))
        super().__init__(f"invalid options: {', '.join(self.keys)}", kind=kind)


class MalformedValueError(PolicyError):
    pass


class FnDepthError(PolicyError):
    def __init__(self, limit: int, *, kind: str | None = None) -> None:
        self.limit = limit
        super().__init__(
            f"deferred function nesting exceeded max_fn_depth={limit}", kind=kind
        )


class NestingDepthError(PolicyError):
    def __init__(self, limit: int, *, kind: str | None = None) -> None:
        self.limit = limit
        super().__init__(
            f"composite nesting exceeded max_composite_depth={limit}", kind=kind
        )
