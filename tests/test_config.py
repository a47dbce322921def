from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from python_indent.config import (
    ConfigError,
    IndentConfig,
    apply_overrides,
    build_config,
    load_config,
    normalize_keys,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".python-indent.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        use_tab_on_hanging_indent = true
        trim_lines_with_only_whitespace = true
        keep_hanging_bracket_on_line = true
        """,
    )

    config = load_config(tmp_path)

    assert config == IndentConfig(
        tab_size=2,
        use_tab_on_hanging_indent=True,
        trim_lines_with_only_whitespace=True,
        keep_hanging_bracket_on_line=True,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [python-indent]
        tab_size = 8
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.tab_size == 8


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.python-indent]
        keep_hanging_bracket_on_line = true
        """,
    )

    assert load_config(tmp_path).keep_hanging_bracket_on_line is True


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [python-indent]
        tab_size = 8
        """,
    )

    assert load_config(tmp_path).tab_size == 2


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.black]
        line-length = 100
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [python-indent]
        tab_size = 3
        """,
    )

    assert load_config(tmp_path).tab_size == 3


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.tab_size == 2


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.python-indent]
        """,
    )

    config = load_config(child)

    assert config == IndentConfig()


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == IndentConfig()
    assert config.tab_size == 4


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 6
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.tab_size == 6


def test_load_config_errors_on_unknown_setting(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_errors_when_table_is_not_a_mapping(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        python-indent = 4
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_editor_style_names_are_accepted(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tabSize = 2
        useTabOnHangingIndent = true
        trimLinesWithOnlyWhitespace = true
        keepHangingBracketOnLine = true
        """,
    )

    config = load_config(tmp_path)

    assert config == IndentConfig(
        tab_size=2,
        use_tab_on_hanging_indent=True,
        trim_lines_with_only_whitespace=True,
        keep_hanging_bracket_on_line=True,
    )


def test_partial_config_merges_with_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        keepHangingBracketOnLine = true
        """,
    )

    config = load_config(tmp_path)

    assert config.keep_hanging_bracket_on_line is True
    # Defaults preserved
    defaults = IndentConfig()
    assert config.tab_size == defaults.tab_size
    assert config.use_tab_on_hanging_indent == defaults.use_tab_on_hanging_indent


def test_normalize_keys_translates_aliases():
    assert normalize_keys({"tabSize": 2, "use_tab_on_hanging_indent": True}) == {
        "tab_size": 2,
        "use_tab_on_hanging_indent": True,
    }


def test_normalize_keys_rejects_setting_given_twice():
    with pytest.raises(ConfigError):
        normalize_keys({"tabSize": 2, "tab_size": 4})


@pytest.mark.parametrize(
    "config",
    [
        IndentConfig(tab_size=0),
        IndentConfig(tab_size=-4),
        IndentConfig(tab_size="4"),  # type: ignore[arg-type]
        IndentConfig(tab_size=True),
        IndentConfig(tab_size=4.0),  # type: ignore[arg-type]
        IndentConfig(use_tab_on_hanging_indent="yes"),  # type: ignore[arg-type]
        IndentConfig(trim_lines_with_only_whitespace=1),  # type: ignore[arg-type]
        IndentConfig(keep_hanging_bracket_on_line=None),  # type: ignore[arg-type]
    ],
)
def test_validate_config_rejects_invalid_values(config: IndentConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(IndentConfig())


def test_apply_overrides_ignores_none():
    config = IndentConfig(tab_size=2)

    assert apply_overrides(config, tab_size=None) is config
    assert apply_overrides(config, tab_size=8, keep_hanging_bracket_on_line=None) == IndentConfig(
        tab_size=8
    )


def test_build_config_applies_overrides_on_loaded_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = 2
        trim_lines_with_only_whitespace = true
        """,
    )

    config = build_config(tmp_path, tab_size=3)

    assert config.tab_size == 3
    assert config.trim_lines_with_only_whitespace is True


def test_build_config_rejects_unknown_override(tmp_path: Path):
    with pytest.raises(ConfigError, match="Unknown configuration option"):
        build_config(tmp_path, indent_width=2)


def test_build_config_validates_result(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, tab_size=0)


def test_build_config_validates_loaded_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.python-indent]
        tab_size = "wide"
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)
