"""Runtime configuration loader (config-first, flag-overrides)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.toml"
DEFAULT_LOCAL_OVERRIDE_PATH = Path(__file__).resolve().parents[2] / "config" / "runtime.local.toml"

OUTPUT_FORMATS: tuple[str, ...] = ("iso", "epoch-ms", "json")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RuntimeConfig:
    """Materialized runtime configuration."""

    config_path: Path | None
    default_zone: str
    output_format: str
    log_level: str


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in overlay.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = _deep_merge(existing, value)
        else:
            out[key] = value
    return out


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"failed reading runtime config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise RuntimeError(f"invalid runtime config TOML: {path}") from exc
    if not isinstance(payload, dict):
        raise RuntimeError(f"runtime config root must be a table: {path}")
    return payload


def _as_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"runtime config section [{key}] must be a table")
    return value


def _as_str(value: Any, *, default: str) -> str:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def _as_choice(value: Any, *, choices: tuple[str, ...], default: str) -> str:
    raw = _as_str(value, default="")
    if not raw:
        return default
    if raw not in choices:
        raise RuntimeError(f"unsupported value {raw!r}; expected one of {', '.join(choices)}")
    return raw


def default_runtime_config() -> RuntimeConfig:
    return RuntimeConfig(
        config_path=None,
        default_zone="",
        output_format="iso",
        log_level="WARNING",
    )


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfig:
    """Load runtime config from `config/runtime.toml` plus optional local override.

    An explicit path must exist; a missing default file yields built-in defaults.
    """
    source = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve()
    if not source.exists():
        if config_path is None:
            return default_runtime_config()
        raise RuntimeError(f"runtime config file not found: {source}")

    payload = _read_toml(source)
    if source == DEFAULT_CONFIG_PATH and DEFAULT_LOCAL_OVERRIDE_PATH.exists():
        payload = _deep_merge(payload, _read_toml(DEFAULT_LOCAL_OVERRIDE_PATH))

    resolver = _as_table(payload, "resolver")
    output = _as_table(payload, "output")
    logging_table = _as_table(payload, "logging")
    defaults = default_runtime_config()

    return RuntimeConfig(
        config_path=source,
        default_zone=_as_str(resolver.get("default_zone"), default=defaults.default_zone),
        output_format=_as_choice(
            output.get("format"),
            choices=OUTPUT_FORMATS,
            default=defaults.output_format,
        ),
        log_level=_as_choice(
            _as_str(logging_table.get("level"), default="").upper(),
            choices=LOG_LEVELS,
            default=defaults.log_level,
        ),
    )
