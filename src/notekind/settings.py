# src/notekind/settings.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import configparser
import os

DEFAULT_ENVIRONMENT_NAME = "Jupyter"
DEFAULT_MAX_FN_DEPTH = 8
DEFAULT_MAX_COMPOSITE_DEPTH = 32
DEFAULT_MAX_DATASET_ROWS = 200
DEFAULT_MAX_TEXT_CHARS = 50_000
DEFAULT_CHART_WIDTH = "500px"
DEFAULT_CHART_HEIGHT = "500px"


@dataclass(frozen=True, slots=True)
class Settings:
    # Shown in nested-rendering diagnostics
    environment_name: str = DEFAULT_ENVIRONMENT_NAME

    # Limits
    max_fn_depth: int = DEFAULT_MAX_FN_DEPTH
    max_composite_depth: int = DEFAULT_MAX_COMPOSITE_DEPTH
    max_dataset_rows: int = DEFAULT_MAX_DATASET_ROWS
    max_text_chars: int = DEFAULT_MAX_TEXT_CHARS

    # Chart containers
    chart_width: str = DEFAULT_CHART_WIDTH
    chart_height: str = DEFAULT_CHART_HEIGHT

    # Raw html
    sanitize_html: bool = False

    # name -> url overrides for client-side libraries
    library_urls: dict[str, str] = field(default_factory=dict)


def _strip_quotes(s: str) -> str:
    s = s.strip()
    if len(s) >= 2 and ((s[0] == s[-1] == "'") or (s[0] == s[-1] == '"')):
        return s[1:-1].strip()
    return s


def _resolve_ini_path() -> Path | None:
    """
    Resolution order:
      1) env var NOTEKIND_INI
      2) ./notekind.ini (cwd)
      3) None
    """
    env_path = os.environ.get("NOTEKIND_INI")
    if env_path:
        p = Path(env_path).expanduser()
        if p.exists() and p.is_file():
            return p

    cwd_ini = Path.cwd() / "notekind.ini"
    if cwd_ini.exists() and cwd_ini.is_file():
        return cwd_ini

    return None


def _parse_bool(
    cfg: configparser.ConfigParser,
    section: str,
    key: str,
    default: bool,
) -> bool:
    try:
        return cfg.getboolean(section, key, fallback=default)
    except ValueError:
        return default


def _parse_int(
    cfg: configparser.ConfigParser,
    section: str,
    key: str,
    default: int,
) -> int:
    try:
        value = cfg.getint(section, key, fallback=default)
    except ValueError:
        return default
    # limits must stay positive
    return value if value > 0 else default


def load_settings() -> Settings:
    """
    Load optional notekind.ini and return Settings.

    Defaults apply for anything the ini does not set (or sets badly).
    """
    ini_path = _resolve_ini_path()
    if ini_path is None:
        return Settings()

    cfg = configparser.ConfigParser()
    cfg.read(ini_path)

    library_urls: dict[str, str] = {}
    if cfg.has_section("libraries"):
        for name, url in cfg.items("libraries"):
            url = _strip_quotes(url)
            if url:
                library_urls[name.strip().lower()] = url

    section = "render"
    if not cfg.has_section(section):
        return Settings(library_urls=library_urls)

    environment_name = (
        _strip_quotes(
            cfg.get(section, "environment_name", fallback=DEFAULT_ENVIRONMENT_NAME)
        )
        or DEFAULT_ENVIRONMENT_NAME
    )
    chart_width = (
        _strip_quotes(cfg.get(section, "chart_width", fallback=DEFAULT_CHART_WIDTH))
        or DEFAULT_CHART_WIDTH
    )
    chart_height = (
        _strip_quotes(cfg.get(section, "chart_height", fallback=DEFAULT_CHART_HEIGHT))
        or DEFAULT_CHART_HEIGHT
    )

    return Settings(
        environment_name=environment_name,
        max_fn_depth=_parse_int(cfg, section, "max_fn_depth", DEFAULT_MAX_FN_DEPTH),
        max_composite_depth=_parse_int(
            cfg, section, "max_composite_depth", DEFAULT_MAX_COMPOSITE_DEPTH
        ),
        max_dataset_rows=_parse_int(
            cfg, section, "max_dataset_rows", DEFAULT_MAX_DATASET_ROWS
        ),
        max_text_chars=_parse_int(
            cfg, section, "max_text_chars", DEFAULT_MAX_TEXT_CHARS
        ),
        chart_width=chart_width,
        chart_height=chart_height,
        sanitize_html=_parse_bool(cfg, section, "sanitize_html", False),
        library_urls=library_urls,
    )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def set_settings(settings: Settings | None) -> None:
    """
    Replace the process-wide settings (None re-reads the ini on next access).

    Engines capture settings when they are built, so call this before
    `get_engine()` or rebuild the engine with `reset_engine()`.
    """
    global _SETTINGS
    if settings is not None and not isinstance(settings, Settings):
        raise ValueError("settings must be a Settings instance or None")
    _SETTINGS = settings
