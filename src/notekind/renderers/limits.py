# src/notekind/renderers/limits.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..settings import DEFAULT_MAX_TEXT_CHARS


@dataclass(frozen=True, slots=True)
class TextLimits:
    max_chars: int = DEFAULT_MAX_TEXT_CHARS


def truncate_text(text: str, *, limits: TextLimits) -> tuple[str, bool]:
    """
    Cut `text` down to the limits. Returns (text, truncated?).
    """
    max_chars = max(1, int(limits.max_chars))
    if len(text) <= max_chars:
        return text, False

    # make it obvious it’s cut
    out = text[:max_chars]
    out = out + ("\n…" if not out.endswith("\n") else "…")
    return out, True


def printed(x: Any, *, max_chars: int = DEFAULT_MAX_TEXT_CHARS) -> str:
    """
    Printed representation of a scalar, as shown in composite and table cells.

    Strings print as themselves, everything else through repr. Never raises.
    """
    if isinstance(x, str):
        s = x
    else:
        try:
            s = repr(x)
        except Exception:
            s = "<unprintable>"

    if len(s) <= max_chars:
        return s
    return s[:max_chars] + "…"


def safe_str(x: Any, *, max_chars: int = DEFAULT_MAX_TEXT_CHARS) -> str:
    """
    Best-effort str() with a hard cap, falling back to repr.
    """
    try:
        s = str(x)
    except Exception:
        try:
            s = repr(x)
        except Exception:
            s = "<unprintable>"

    if len(s) <= max_chars:
        return s
    return s[:max_chars] + "…"
