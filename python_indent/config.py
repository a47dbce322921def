"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

@dataclass
class IndentConfig:
    """Configuration for the newline-and-indent engine.

    Attributes:
        tab_size: Number of columns per indentation level.
        use_tab_on_hanging_indent: Use a tab stop (``$1``) instead of the
            final cursor marker (``$0``) in FULL hanging indent snippets.
        trim_lines_with_only_whitespace: Delete the content of the current
            line when it only holds whitespace.
        keep_hanging_bracket_on_line: Treat FULL hanging indents as PARTIAL so
            the closing bracket stays attached to the following content.

    Examples:
        IndentConfig(tab_size=2, keep_hanging_bracket_on_line=True)
    """

    tab_size: int = 4
    use_tab_on_hanging_indent: bool = False
    trim_lines_with_only_whitespace: bool = False
    keep_hanging_bracket_on_line: bool = False


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`tab_size` must be a positive integer")
    """


# Editor-style setting names accepted in TOML files
_KEY_ALIASES = {
    "tabSize": "tab_size",
    "useTabOnHangingIndent": "use_tab_on_hanging_indent",
    "trimLinesWithOnlyWhitespace": "trim_lines_with_only_whitespace",
    "keepHangingBracketOnLine": "keep_hanging_bracket_on_line",
}

_BOOLEAN_FIELDS = (
    "use_tab_on_hanging_indent",
    "trim_lines_with_only_whitespace",
    "keep_hanging_bracket_on_line",
)


def load_config(search_path: Path) -> IndentConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.python-indent]`` table from `pyproject.toml` and the
    ``[python-indent]`` or ``[tool.python-indent]`` table from
    `.python-indent.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        IndentConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("src"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "python-indent")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".python-indent.toml",
            table_paths=[("python-indent",), ("tool", "python-indent")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return IndentConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> IndentConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> IndentConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return IndentConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return IndentConfig()

    try:
        return IndentConfig(**normalize_keys(raw_config))
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_keys(raw_config: dict[str, object]) -> dict[str, object]:
    """Translate editor-style setting names to `IndentConfig` field names.

    Args:
        raw_config: Settings as read from a TOML table.

    Returns:
        dict[str, object]: Settings keyed by `IndentConfig` field names.

    Raises:
        ConfigError: If a setting is given under both of its names.

    Examples:
        normalize_keys({"tabSize": 2})  # {"tab_size": 2}
    """
    normalized: dict[str, object] = {}
    for key, value in raw_config.items():
        name = _KEY_ALIASES.get(key, key)
        if name in normalized:
            raise ConfigError(f"`{name}` is set more than once")
        normalized[name] = value
    return normalized


def validate_config(config: IndentConfig) -> None:
    """Validate an `IndentConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If `tab_size` is not a positive integer or a toggle is
            not a boolean.

    Examples:
        validate_config(IndentConfig(tab_size=2))
    """
    _ensure_integers({"tab_size": config.tab_size})
    _ensure_positive({"tab_size": config.tab_size})
    _ensure_booleans({name: getattr(config, name) for name in _BOOLEAN_FIELDS})


def apply_overrides(config: IndentConfig, **overrides: object) -> IndentConfig:
    """Apply override values to an `IndentConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        IndentConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `IndentConfig`.

    Examples:
        updated = apply_overrides(config, tab_size=2)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> IndentConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        IndentConfig: Validated configuration ready for use.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), tab_size=2)
    """
    config = load_config(search_path)
    known = {item.name for item in fields(IndentConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")
