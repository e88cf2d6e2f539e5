# src/notekind/backends.py
from __future__ import annotations

import io
import json
import math
from datetime import date, datetime
from typing import Any

import matplotlib

matplotlib.use("Agg")  # safe headless default

import numpy as np
import pandas as pd
from matplotlib.figure import Figure

# Optional: polars support
try:  # pragma: no cover
    import polars as pl  # type: ignore
except Exception:  # pragma: no cover
    pl = None  # type: ignore[assignment]

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def fig_to_png_bytes(fig: Figure) -> bytes:
    """Render a matplotlib Figure to PNG bytes."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight", dpi=100)
    buf.seek(0)
    return buf.read()


def image_to_png_bytes(obj: Any) -> bytes | None:
    """
    Encode an image-like value as PNG.

    Handles matplotlib figures, PNG bytes and anything exposing a PIL-style
    `save(fp, format=...)`. Returns None when `obj` is none of those.
    """
    if isinstance(obj, Figure):
        return fig_to_png_bytes(obj)

    if isinstance(obj, (bytes, bytearray)):
        data = bytes(obj)
        return data if data.startswith(_PNG_MAGIC) else None

    save = getattr(obj, "save", None)
    if callable(save):
        buf = io.BytesIO()
        save(buf, format="PNG")
        return buf.getvalue()

    return None


def is_dataframe(obj: Any) -> bool:
    if isinstance(obj, pd.DataFrame):
        return True
    if pl is not None and isinstance(obj, pl.DataFrame):  # type: ignore[arg-type]
        return True
    return False


def to_dataframe(obj: Any) -> pd.DataFrame:
    if isinstance(obj, pd.DataFrame):
        return obj
    if pl is not None and isinstance(obj, pl.DataFrame):  # type: ignore[arg-type]
        return obj.to_pandas()
    raise TypeError(f"Expected a DataFrame, got {type(obj)!r}")


def df_to_html_simple(df: pd.DataFrame, max_rows: int) -> str:
    """
    Render a simple HTML table for the first N rows of a DataFrame.
    """
    trimmed = df.head(max_rows)
    return trimmed.to_html(
        classes="kind-dataset",
        border=0,
        index=False,
        escape=True,
    )


def _is_na(x: Any) -> bool:
    """
    Return True only for scalar-like NA values.
    pd.isna(list/dict/array) returns array-like -> must NOT be used as bool.
    """
    try:
        res = pd.isna(x)
    except (TypeError, ValueError):
        return False

    if isinstance(res, (bool, np.bool_)):
        return bool(res)

    # array-like result => not a scalar NA check
    return False


def json_safe(x: Any) -> Any:
    if x is None:
        return None

    # Containers FIRST
    if isinstance(x, dict):
        return {str(k): json_safe(v) for k, v in x.items()}

    if isinstance(x, (list, tuple, set, frozenset)):
        return [json_safe(v) for v in x]

    if isinstance(x, np.ndarray):
        return [json_safe(v) for v in x.tolist()]

    if isinstance(x, pd.Series):
        return [json_safe(v) for v in x.tolist()]

    # Then primitives / scalars
    if isinstance(x, (str, int, bool)):
        return x

    if isinstance(x, float):
        if math.isnan(x) or math.isinf(x):
            return None
        return x

    if isinstance(x, (datetime, date)):
        return x.isoformat()

    if isinstance(x, np.generic):
        return json_safe(x.item())

    if _is_na(x):
        return None

    return str(x)


def to_json(x: Any) -> str:
    """JSON text for embedding a chart spec in a script."""
    # "</" would close the surrounding <script> element early
    return json.dumps(json_safe(x)).replace("</", "<\\/")
