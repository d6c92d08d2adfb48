from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from html_analyzer.config import (
    AnalyzerConfig,
    ConfigError,
    apply_overrides,
    build_config,
    get_timeout,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".html-analyzer.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_timeout_env(monkeypatch):
    monkeypatch.delenv("HTML_ANALYZER_TIMEOUT", raising=False)


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-analyzer]
        connect_timeout = 2.5
        read_timeout = 4
        max_document_size = 1024
        user_agent = "probe/1.0"
        """,
    )

    config = load_config(tmp_path)

    assert config == AnalyzerConfig(
        connect_timeout=2.5,
        read_timeout=4,
        max_document_size=1024,
        user_agent="probe/1.0",
    )


def test_loads_config_from_dotfile_in_parent(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [html-analyzer]
        read_timeout = 1.5
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.read_timeout == 1.5
    assert config.connect_timeout == AnalyzerConfig().connect_timeout


def test_pyproject_without_table_falls_through_to_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "unrelated"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [tool.html-analyzer]
        user_agent = "dotfile"
        """,
    )

    assert load_config(tmp_path).user_agent == "dotfile"


def test_invalid_toml_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.html-analyzer\n", encoding="utf-8")

    assert load_config(tmp_path) == AnalyzerConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-analyzer]
        retries = 3
        """,
    )

    with pytest.raises(ConfigError, match="tool.html-analyzer"):
        load_config(tmp_path)


def test_non_table_setting_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        html-analyzer = "fast"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"connect_timeout": 0}, "`connect_timeout` must be a positive finite number"),
        ({"read_timeout": -1.0}, "`read_timeout` must be a positive finite number"),
        ({"connect_timeout": float("inf")}, "`connect_timeout` must be a positive finite number"),
        ({"read_timeout": float("nan")}, "`read_timeout` must be a positive finite number"),
        ({"read_timeout": "10"}, "`read_timeout` must be a number"),
        ({"connect_timeout": True}, "`connect_timeout` must be a number"),
        ({"max_document_size": 0}, "`max_document_size` must be a positive integer"),
        ({"max_document_size": 1.5}, "`max_document_size` must be an integer"),
        ({"user_agent": ""}, "`user_agent` must not be empty"),
    ],
)
def test_validate_config_rejects_bad_values(overrides: dict, message: str):
    with pytest.raises(ConfigError, match=message):
        validate_config(AnalyzerConfig(**overrides))


def test_apply_overrides_ignores_none():
    config = AnalyzerConfig()

    assert apply_overrides(config, read_timeout=None) is config
    assert apply_overrides(config, read_timeout=3).read_timeout == 3


def test_get_timeout_reads_environment(monkeypatch):
    monkeypatch.setenv("HTML_ANALYZER_TIMEOUT", "2.5")

    assert get_timeout() == 2.5


def test_get_timeout_defaults_when_unset():
    assert get_timeout(default=7.0) == 7.0


@pytest.mark.parametrize("value", ["soon", "0", "-3", "nan", "inf", "-inf"])
def test_get_timeout_rejects_invalid_values(monkeypatch, value: str):
    monkeypatch.setenv("HTML_ANALYZER_TIMEOUT", value)

    with pytest.raises(ValueError):
        get_timeout()


def test_build_config_timeout_sets_both_phases(tmp_path: Path):
    config = build_config(tmp_path, timeout=3)

    assert config.connect_timeout == 3
    assert config.read_timeout == 3


def test_build_config_explicit_timeout_beats_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HTML_ANALYZER_TIMEOUT", "8")

    assert build_config(tmp_path).read_timeout == 8
    assert build_config(tmp_path, timeout=2).read_timeout == 2


def test_build_config_wraps_environment_errors(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HTML_ANALYZER_TIMEOUT", "never")

    with pytest.raises(ConfigError, match="HTML_ANALYZER_TIMEOUT"):
        build_config(tmp_path)


def test_build_config_rejects_unknown_override(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, retries=3)


def test_infinite_timeout_in_toml_is_rejected(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.html-analyzer]
        connect_timeout = inf
        """,
    )

    with pytest.raises(ConfigError, match="`connect_timeout` must be a positive finite number"):
        build_config(tmp_path)


def test_first_table_found_walking_up_wins(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [html-analyzer]
        user_agent = "outer"
        """,
    )
    inner = tmp_path / "inner"
    inner.mkdir()
    _write_pyproject(
        inner,
        """
        [tool.html-analyzer]
        user_agent = "inner"
        """,
    )

    assert load_config(inner).user_agent == "inner"
