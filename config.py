from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger("addae.config")

DEFAULT_CONFIG_PATH = Path.home() / ".addae_config.yaml"
DEFAULT_THEME = "dark-olive"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def user_config_path() -> Path:
    override = os.environ.get("ADDAE_CONFIG", "").strip()
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def _load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or user_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not a mapping", path)
        return {}
    return data


def _save_config(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or user_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _set_key(key: str, value: Optional[str], path: Optional[Path] = None) -> None:
    data = _load_config(path)
    value = (value or "").strip()
    if value:
        data[key] = value
    else:
        data.pop(key, None)
    _save_config(data, path)


def get_user_lang(path: Optional[Path] = None) -> str:
    return str(_load_config(path).get("lang", "") or "").strip()


def set_user_lang(value: str, path: Optional[Path] = None) -> None:
    _set_key("lang", value, path)


def get_user_theme(path: Optional[Path] = None) -> str:
    return str(_load_config(path).get("theme", "") or "").strip()


def set_user_theme(value: str, path: Optional[Path] = None) -> None:
    _set_key("theme", value, path)


@dataclass(frozen=True)
class AppConfig:
    """Startup configuration, resolved once and passed around explicitly."""

    db_path: Optional[Path] = None
    theme: str = DEFAULT_THEME
    lang: str = ""
    show_completed: bool = False
    follow_completed: bool = True
    log_file: Optional[Path] = None
    log_level: str = "WARNING"


def load_app_config(path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> AppConfig:
    """Merge the YAML file with ``ADDAE_DB_PATH``/``ADDAE_LANG`` overrides."""
    env = os.environ if env is None else env
    data = _load_config(path)

    db_raw = str(env.get("ADDAE_DB_PATH") or data.get("db_path") or "").strip()
    log_raw = str(data.get("log_file") or "").strip()
    level = str(data.get("log_level") or "WARNING").strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("unknown log_level %r, using WARNING", level)
        level = "WARNING"

    return AppConfig(
        db_path=Path(db_raw).expanduser() if db_raw else None,
        theme=str(data.get("theme") or DEFAULT_THEME).strip(),
        lang=str(env.get("ADDAE_LANG") or data.get("lang") or "").strip(),
        show_completed=_as_bool(data.get("show_completed"), False),
        follow_completed=_as_bool(data.get("follow_completed"), True),
        log_file=Path(log_raw).expanduser() if log_raw else None,
        log_level=level,
    )
