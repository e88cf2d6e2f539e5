# tests/test_settings.py
from __future__ import annotations

from pathlib import Path

import pytest

import notekind.settings as settings_mod


def _reset_settings_cache() -> None:
    settings_mod._SETTINGS = None  # type: ignore[attr-defined]


def test_load_settings_defaults_when_no_ini(monkeypatch, tmp_path: Path) -> None:
    """
    Ensure we do NOT accidentally read ./notekind.ini from the repo root.
    """
    _reset_settings_cache()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTEKIND_INI", raising=False)

    s = settings_mod.load_settings()

    assert s.environment_name == settings_mod.DEFAULT_ENVIRONMENT_NAME
    assert s.max_fn_depth == settings_mod.DEFAULT_MAX_FN_DEPTH
    assert s.max_composite_depth == settings_mod.DEFAULT_MAX_COMPOSITE_DEPTH
    assert s.max_dataset_rows == settings_mod.DEFAULT_MAX_DATASET_ROWS
    assert s.sanitize_html is False
    assert s.library_urls == {}


def test_load_settings_reads_env_ini(monkeypatch, tmp_path: Path) -> None:
    _reset_settings_cache()
    monkeypatch.chdir(tmp_path)

    ini = tmp_path / "custom.ini"
    ini.write_text(
        "\n".join(
            [
                "[render]",
                'environment_name = "Clojupyter"',
                "max_fn_depth = 3",
                "max_composite_depth = 12",
                "chart_height = 320px",
                "sanitize_html = yes",
                "",
                "[libraries]",
                "Plotly = 'https://mirror.local/plotly.js'",
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("NOTEKIND_INI", str(ini))

    s = settings_mod.load_settings()

    assert s.environment_name == "Clojupyter"
    assert s.max_fn_depth == 3
    assert s.max_composite_depth == 12
    assert s.chart_height == "320px"
    assert s.chart_width == settings_mod.DEFAULT_CHART_WIDTH
    assert s.sanitize_html is True
    assert s.library_urls == {"plotly": "https://mirror.local/plotly.js"}


def test_cwd_ini_is_used_and_bad_values_fall_back(monkeypatch, tmp_path: Path) -> None:
    _reset_settings_cache()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTEKIND_INI", raising=False)

    (tmp_path / "notekind.ini").write_text(
        "[render]\nmax_fn_depth = lots\nmax_dataset_rows = -4\nsanitize_html = maybe\n",
        encoding="utf-8",
    )

    s = settings_mod.load_settings()

    assert s.max_fn_depth == settings_mod.DEFAULT_MAX_FN_DEPTH
    assert s.max_composite_depth == settings_mod.DEFAULT_MAX_COMPOSITE_DEPTH
    assert s.max_dataset_rows == settings_mod.DEFAULT_MAX_DATASET_ROWS
    assert s.sanitize_html is False


def test_ini_without_render_section_keeps_defaults(monkeypatch, tmp_path: Path) -> None:
    _reset_settings_cache()
    monkeypatch.chdir(tmp_path)
    ini = tmp_path / "notekind.ini"
    ini.write_text("[other]\nx = 1\n", encoding="utf-8")
    monkeypatch.setenv("NOTEKIND_INI", str(ini))

    assert settings_mod.load_settings() == settings_mod.Settings()


def test_get_settings_is_cached_and_settable(monkeypatch, tmp_path: Path) -> None:
    _reset_settings_cache()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NOTEKIND_INI", raising=False)

    first = settings_mod.get_settings()
    assert settings_mod.get_settings() is first

    custom = settings_mod.Settings(environment_name="Lab")
    settings_mod.set_settings(custom)
    assert settings_mod.get_settings() is custom

    with pytest.raises(ValueError):
        settings_mod.set_settings("nope")  # type: ignore[arg-type]

    settings_mod.set_settings(None)
    assert settings_mod.get_settings() == settings_mod.Settings()
    _reset_settings_cache()
