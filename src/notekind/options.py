# src/notekind/options.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .errors import InvalidOptionsError, MalformedValueError

LOGGER = logging.getLogger(__name__)


def validate_options(
    kind: str | None,
    declared: Iterable[str],
    options: Mapping[str, Any] | None,
) -> InvalidOptionsError | None:
    """
    Check user-supplied options against the names a kind declares.

    Returns None when every key is recognised, otherwise an
    InvalidOptionsError naming the unknown keys (it is returned, not raised).
    """
    if not options:
        return None

    allowed = frozenset(declared)
    unknown = [k for k in options if k not in allowed]
    if not unknown:
        return None

    err = InvalidOptionsError(unknown, kind=kind)
    LOGGER.debug("rejecting options for %s: %s", kind, err.keys)
    return err


def int_option(
    options: Mapping[str, Any],
    key: str,
    default: int,
    *,
    kind: str | None = None,
    minimum: int = 0,
) -> int:
    """
    Read an integer option, falling back to `default` only when it is absent.

    Values that are not integers, or fall below `minimum`, raise
    MalformedValueError so they render as content.
    """
    value = options.get(key)
    if value is None:
        return default
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError):
        raise MalformedValueError(
            f"option {key!r} must be an integer, got {value!r}", kind=kind
        ) from None
    if isinstance(value, bool) or n < minimum:
        raise MalformedValueError(
            f"option {key!r} must be an integer >= {minimum}, got {value!r}", kind=kind
        )
    return n
