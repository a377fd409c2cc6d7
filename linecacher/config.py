"""Global configuration management for linecacher."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from contextlib import contextmanager
from contextvars import ContextVar
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict

from .text import Messages

DEFAULT_CONFIG_DIR = Path(os.path.expanduser("~")) / ".linecacher"
CONFIG_DIR = DEFAULT_CONFIG_DIR
CONFIG_FILE = CONFIG_DIR / "config.json"
_CONFIG_DIR_OVERRIDE: ContextVar[Path | None] = ContextVar(
    "linecacher_config_dir_override",
    default=None,
)
DEFAULT_THEME = "dark"
DEFAULT_TEMP_PREFIX = "eval-"
SUPPORTED_THEMES: tuple[str, ...] = (DEFAULT_THEME, "light")
ENV_SEARCH_PATH = "LINECACHER_PATH"
ENV_THEME = "LINECACHER_THEME"


@dataclass
class Config:
    search_path: list[str] = field(default_factory=list)
    use_sys_path: bool = True
    reload_on_change: bool = True
    use_script_lines: bool = True
    theme: str = DEFAULT_THEME
    temp_prefix: str = DEFAULT_TEMP_PREFIX


def _resolve_config_dir() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    return override if override is not None else CONFIG_DIR


def _resolve_config_file() -> Path:
    override = _CONFIG_DIR_OVERRIDE.get()
    if override is not None:
        return override / "config.json"
    return CONFIG_FILE


@contextmanager
def config_dir_context(path: Path | str | None):
    """Temporarily override the config directory for the current context."""

    if path is None:
        yield
        return
    dir_path = Path(path).expanduser().resolve()
    if dir_path.exists() and not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    token = _CONFIG_DIR_OVERRIDE.set(dir_path)
    try:
        yield
    finally:
        _CONFIG_DIR_OVERRIDE.reset(token)


def load_config() -> Config:
    config_file = _resolve_config_file()
    if not config_file.exists():
        return Config()
    raw = json.loads(config_file.read_text(encoding="utf-8"))
    theme = (raw.get("theme") or DEFAULT_THEME).strip().lower()
    if theme not in SUPPORTED_THEMES:
        theme = DEFAULT_THEME
    return Config(
        search_path=_coerce_search_path(raw.get("search_path"), lenient=True),
        use_sys_path=bool(raw.get("use_sys_path", True)),
        reload_on_change=bool(raw.get("reload_on_change", True)),
        use_script_lines=bool(raw.get("use_script_lines", True)),
        theme=theme,
        temp_prefix=raw.get("temp_prefix") or DEFAULT_TEMP_PREFIX,
    )


def save_config(config: Config) -> None:
    config_dir = _resolve_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = {}
    if config.search_path:
        data["search_path"] = list(config.search_path)
    data["use_sys_path"] = bool(config.use_sys_path)
    data["reload_on_change"] = bool(config.reload_on_change)
    data["use_script_lines"] = bool(config.use_script_lines)
    data["theme"] = config.theme
    if config.temp_prefix != DEFAULT_TEMP_PREFIX:
        data["temp_prefix"] = config.temp_prefix
    config_file = _resolve_config_file()
    config_file.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def set_config_dir(path: Path | str | None) -> None:
    global CONFIG_DIR, CONFIG_FILE
    if path is None:
        CONFIG_DIR = DEFAULT_CONFIG_DIR
    else:
        dir_path = Path(path).expanduser().resolve()
        if dir_path.exists() and not dir_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {dir_path}")
        CONFIG_DIR = dir_path
    CONFIG_FILE = CONFIG_DIR / "config.json"


def apply_environment(config: Config) -> Config:
    """Return a copy of *config* with environment overrides applied."""

    effective = _clone_config(config)
    extra = os.getenv(ENV_SEARCH_PATH)
    if extra:
        for entry in extra.split(os.pathsep):
            if entry and entry not in effective.search_path:
                effective.search_path.append(entry)
    theme = (os.getenv(ENV_THEME) or "").strip().lower()
    if theme in SUPPORTED_THEMES:
        effective.theme = theme
    return effective


def config_from_json(
    payload: str | Mapping[str, object], *, base: Config | None = None
) -> Config:
    """Return a Config from a JSON string or mapping without saving it."""
    data = _coerce_config_payload(payload)
    config = Config() if base is None else _clone_config(base)
    _apply_config_payload(config, data)
    return config


def update_config_from_json(
    payload: str | Mapping[str, object], *, replace: bool = False
) -> Config:
    """Update config from a JSON string or mapping and persist it."""
    base = None if replace else load_config()
    config = config_from_json(payload, base=base)
    save_config(config)
    return config


def add_search_path(value: str) -> None:
    config = load_config()
    entry = _normalize_directory(value)
    if entry not in config.search_path:
        config.search_path.append(entry)
    save_config(config)


def remove_search_path(value: str) -> bool:
    config = load_config()
    entry = _normalize_directory(value)
    if entry not in config.search_path:
        return False
    config.search_path.remove(entry)
    save_config(config)
    return True


def clear_search_path() -> None:
    config = load_config()
    config.search_path = []
    save_config(config)


def set_use_sys_path(value: bool) -> None:
    config = load_config()
    config.use_sys_path = bool(value)
    save_config(config)


def set_reload_on_change(value: bool) -> None:
    config = load_config()
    config.reload_on_change = bool(value)
    save_config(config)


def set_use_script_lines(value: bool) -> None:
    config = load_config()
    config.use_script_lines = bool(value)
    save_config(config)


def set_theme(value: str) -> None:
    config = load_config()
    config.theme = _normalize_theme(value)
    save_config(config)


def _normalize_directory(value: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field="search_path"))
    return str(Path(cleaned).expanduser().resolve())


def _coerce_config_payload(payload: str | Mapping[str, object]) -> Mapping[str, object]:
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID) from exc
    elif isinstance(payload, Mapping):
        data = dict(payload)
    else:
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    if not isinstance(data, Mapping):
        raise ValueError(Messages.ERROR_CONFIG_JSON_INVALID)
    return data


def _clone_config(config: Config) -> Config:
    return Config(
        search_path=list(config.search_path),
        use_sys_path=config.use_sys_path,
        reload_on_change=config.reload_on_change,
        use_script_lines=config.use_script_lines,
        theme=config.theme,
        temp_prefix=config.temp_prefix,
    )


def _apply_config_payload(config: Config, payload: Mapping[str, object]) -> None:
    if "search_path" in payload:
        config.search_path = _coerce_search_path(payload["search_path"])
    if "use_sys_path" in payload:
        config.use_sys_path = _coerce_bool(payload["use_sys_path"], "use_sys_path")
    if "reload_on_change" in payload:
        config.reload_on_change = _coerce_bool(
            payload["reload_on_change"], "reload_on_change"
        )
    if "use_script_lines" in payload:
        config.use_script_lines = _coerce_bool(
            payload["use_script_lines"], "use_script_lines"
        )
    if "theme" in payload:
        config.theme = _normalize_theme(payload["theme"])
    if "temp_prefix" in payload:
        config.temp_prefix = _coerce_required_str(
            payload["temp_prefix"], "temp_prefix", DEFAULT_TEMP_PREFIX
        )


def _coerce_search_path(value: object, *, lenient: bool = False) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [entry for entry in value.split(os.pathsep) if entry]
    if isinstance(value, (list, tuple)):
        entries: list[str] = []
        for entry in value:
            if isinstance(entry, str) and entry.strip():
                entries.append(entry.strip())
            elif not lenient:
                raise ValueError(
                    Messages.ERROR_CONFIG_VALUE_INVALID.format(field="search_path")
                )
        return entries
    if lenient:
        return []
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field="search_path"))


def _coerce_required_str(value: object, field: str, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or default
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))


def _coerce_bool(value: object, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in {"true", "1", "yes", "on"}:
            return True
        if cleaned in {"false", "0", "no", "off"}:
            return False
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field=field))


def _normalize_theme(value: object) -> str:
    if value is None:
        return DEFAULT_THEME
    if isinstance(value, str):
        normalized = value.strip().lower() or DEFAULT_THEME
        if normalized in SUPPORTED_THEMES:
            return normalized
    raise ValueError(Messages.ERROR_CONFIG_VALUE_INVALID.format(field="theme"))
