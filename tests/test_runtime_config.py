from __future__ import annotations

from pathlib import Path

import pytest

from dayspan.runtime_config import DEFAULT_CONFIG_PATH, default_runtime_config, load_runtime_config


def _write_config(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_load_runtime_config_reads_sections(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "runtime.toml",
        [
            "[resolver]",
            'default_zone = "America/Chicago"',
            "",
            "[output]",
            'format = "json"',
            "",
            "[logging]",
            'level = "debug"',
        ],
    )

    config = load_runtime_config(config_path)

    assert config.config_path == config_path.resolve()
    assert config.default_zone == "America/Chicago"
    assert config.output_format == "json"
    assert config.log_level == "DEBUG"


def test_load_runtime_config_fills_missing_values_with_defaults(tmp_path: Path) -> None:
    config = load_runtime_config(_write_config(tmp_path / "runtime.toml", ["[resolver]"]))
    defaults = default_runtime_config()

    assert config.default_zone == defaults.default_zone == ""
    assert config.output_format == defaults.output_format == "iso"
    assert config.log_level == defaults.log_level == "WARNING"


def test_load_runtime_config_default_file_is_valid() -> None:
    config = load_runtime_config()

    if DEFAULT_CONFIG_PATH.exists():
        assert config.config_path == DEFAULT_CONFIG_PATH
    assert config.output_format in {"iso", "epoch-ms", "json"}


def test_load_runtime_config_missing_explicit_file(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="not found"):
        load_runtime_config(tmp_path / "missing.toml")


def test_load_runtime_config_rejects_unknown_format(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "runtime.toml", ["[output]", 'format = "csv"'])

    with pytest.raises(RuntimeError, match="unsupported value 'csv'"):
        load_runtime_config(config_path)


def test_load_runtime_config_rejects_invalid_toml(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "runtime.toml", ["[resolver", "default_zone ="])

    with pytest.raises(RuntimeError, match="invalid runtime config TOML"):
        load_runtime_config(config_path)


def test_load_runtime_config_rejects_non_table_section(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path / "runtime.toml", ['resolver = "Asia/Kolkata"'])

    with pytest.raises(RuntimeError, match=r"section \[resolver\] must be a table"):
        load_runtime_config(config_path)
