"""Configuration loading and management."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_DOCUMENT_SIZE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    TIMEOUT_ENV_VAR,
)


@dataclass
class AnalyzerConfig:
    """Configuration for fetching documents.

    Attributes:
        connect_timeout: Seconds to wait for the connection to be established.
        read_timeout: Seconds to wait between bytes of the response.
        max_document_size: Maximum response body size in bytes.
        user_agent: Value sent in the ``User-Agent`` request header.

    Examples:
        AnalyzerConfig(connect_timeout=2.5, read_timeout=5)
    """

    # Timeouts
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    # Limits
    max_document_size: int = DEFAULT_MAX_DOCUMENT_SIZE

    # Request
    user_agent: str = DEFAULT_USER_AGENT


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`read_timeout` must be a positive number")
    """


def load_config(search_path: Path) -> AnalyzerConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root. In each
    directory the ``[tool.html-analyzer]`` table of `pyproject.toml` is tried
    first, then the ``[html-analyzer]`` or ``[tool.html-analyzer]`` table of
    `.html-analyzer.toml`. The first table found wins; TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        AnalyzerConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If the winning table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path.cwd())
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in _CONFIG_SOURCES:
            config_file = directory / filename
            found = _find_table(config_file, table_paths)
            if found is None:
                continue
            table_path, settings = found
            return _config_from_table(settings, config_file, table_path)

    return AnalyzerConfig()


_CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "html-analyzer"),)),
    (".html-analyzer.toml", (("html-analyzer",), ("tool", "html-analyzer"))),
)


def _find_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[tuple[str, ...], object] | None:
    """Return the first table present in `config_file` with its dotted path."""
    if not config_file.is_file():
        return None

    try:
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        node: object = data
        for key in table_path:
            if not isinstance(node, dict) or key not in node:
                break
            node = node[key]
        else:
            return table_path, node
    return None


def _config_from_table(
    settings: object, config_file: Path, table_path: tuple[str, ...]
) -> AnalyzerConfig:
    message = f"Invalid `[{'.'.join(table_path)}]` settings in {config_file}"
    if not isinstance(settings, dict):
        raise ConfigError(message)
    try:
        return AnalyzerConfig(**settings)
    except TypeError as error:
        raise ConfigError(message) from error


def _check_timeout(key: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"`{key}` must be a number")
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"`{key}` must be a positive finite number")


def validate_config(config: AnalyzerConfig) -> None:
    """Validate an `AnalyzerConfig` instance.

    Raises:
        ConfigError: If a timeout is not a positive finite number, the size
            limit is not a positive integer, or the user agent is empty.
    """
    _check_timeout("connect_timeout", config.connect_timeout)
    _check_timeout("read_timeout", config.read_timeout)


    size = config.max_document_size
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigError("`max_document_size` must be an integer")
    if size <= 0:
        raise ConfigError("`max_document_size` must be a positive integer")

    if not isinstance(config.user_agent, str) or not config.user_agent:
        raise ConfigError("`user_agent` must not be empty")


def apply_overrides(config: AnalyzerConfig, **overrides: object) -> AnalyzerConfig:
    """Apply override values to an `AnalyzerConfig`.

    Args:
        config: Base configuration to update.
        overrides: Values keyed by configuration field name; None values are ignored.

    Returns:
        AnalyzerConfig: Updated configuration, or `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `AnalyzerConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def get_timeout(default: float | None = None) -> float | None:
    """Resolve a timeout override from the environment.

    Args:
        default: Value returned when the environment variable is unset.

    Returns:
        float | None: Timeout in seconds, or `default`.

    Raises:
        ValueError: If the environment value is not a positive finite number.

    Examples:
        os.environ["HTML_ANALYZER_TIMEOUT"] = "2.5"
        get_timeout()  # 2.5
    """
    env_value = os.environ.get(TIMEOUT_ENV_VAR)
    if env_value is None:
        return default

    try:
        timeout = float(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {TIMEOUT_ENV_VAR}: {env_value} (expected positive number)"
        )
        raise ValueError(error_message) from error

    if not math.isfinite(timeout) or timeout <= 0:
        error_message = f"{TIMEOUT_ENV_VAR} must be a positive finite number, got {env_value}."
        raise ValueError(error_message)

    return timeout


def build_config(
    search_path: Path, timeout: float | None = None, **overrides: object
) -> AnalyzerConfig:
    """Load, override, and validate configuration.

    An explicit `timeout` wins over ``HTML_ANALYZER_TIMEOUT``; either one sets
    both the connect and read timeouts.

    Args:
        search_path: Directory where configuration files are resolved.
        timeout: Optional timeout applied to both connect and read phases.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        AnalyzerConfig: Validated configuration.

    Raises:
        ConfigError: If loading, the environment override, or validation fails.

    Examples:
        config = build_config(Path.cwd(), timeout=3)
    """
    config = load_config(search_path)

    if timeout is None:
        try:
            timeout = get_timeout()
        except ValueError as error:
            raise ConfigError(str(error)) from error
    if timeout is not None:
        config = apply_overrides(config, connect_timeout=timeout, read_timeout=timeout)

    try:
        config = apply_overrides(config, **overrides)
    except TypeError as error:
        raise ConfigError(str(error)) from error
    validate_config(config)
    return config
