from __future__ import annotations

import os
from pathlib import Path
import tomllib

DEFAULT_PAGE_FIXTURES = ("page",)
DEFAULT_NODE_LIMIT = 3

_CONFIG_CACHE: dict | None = None


def config_path() -> Path:
    override = os.environ.get("AXE_BDD_CONFIG_PATH")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base).expanduser() if base else (Path.home() / ".config")
    return root / "axe-bdd" / "config.toml"


def load_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ValueError(f"Invalid config file: {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file structure: {path}")
    return data


def get_config() -> dict:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE


def reset_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def get_config_value(*keys: str, default: object | None = None) -> object | None:
    current: object = get_config()
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def page_fixture_names() -> tuple[str, ...]:
    value = get_config_value("steps", "page_fixtures")
    if value is None:
        return DEFAULT_PAGE_FIXTURES
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ValueError(f"steps.page_fixtures must be a list of fixture names, got {value!r}")
    return tuple(value)


def report_node_limit() -> int:
    value = get_config_value("report", "node_limit", default=DEFAULT_NODE_LIMIT)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"report.node_limit must be a positive integer, got {value!r}")
    return value
