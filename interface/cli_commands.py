"""Non-interactive commands: each prints one structured JSON response."""

import argparse
import logging
from pathlib import Path
from typing import Optional

from config import AppConfig, get_user_lang, get_user_theme, set_user_lang, set_user_theme
from core import AddaeError, LogFormData, ProjectFormData, TaskFormData, ValidationError
from infrastructure.sqlite_repository import SqliteEntityStore, default_db_path

from .cli_io import emit_error, emit_ok
from .i18n import available_languages, translate
from .serializers import log_to_dict, project_to_dict, task_to_dict
from .tui_themes import THEMES

logger = logging.getLogger("addae.cli")


def _config(args: argparse.Namespace) -> AppConfig:
    return getattr(args, "app_config", None) or AppConfig()


def resolve_db_path(args: argparse.Namespace, config: AppConfig) -> Path:
    """``--db`` beats the configured path, which beats the default location."""
    explicit = getattr(args, "db", None)
    if explicit:
        return Path(explicit).expanduser()
    if config.db_path:
        return config.db_path
    return default_db_path()


def open_store(args: argparse.Namespace, config: AppConfig) -> SqliteEntityStore:
    return SqliteEntityStore(resolve_db_path(args, config))


def cmd_list(args: argparse.Namespace) -> int:
    """List projects with their task and log counts."""
    config = _config(args)
    try:
        with open_store(args, config) as store:
            items = []
            for project in store.list_projects():
                tasks = store.list_tasks_for(project.id)
                data = project_to_dict(project)
                data["tasks_total"] = len(tasks)
                data["tasks_pending"] = sum(1 for t in tasks if not t.completed)
                data["logs_total"] = len(store.list_logs_for(project.id))
                items.append(data)
    except AddaeError as exc:
        logger.warning("list failed: %s", exc)
        return emit_error("list", exc)
    message = translate("CLI_PROJECTS", lang=config.lang or None, count=len(items))
    return emit_ok("list", message, projects=items, total=len(items))


def cmd_create_project(args: argparse.Namespace) -> int:
    config = _config(args)
    form = ProjectFormData(
        name=args.name,
        summary=getattr(args, "summary", "") or "",
        description=getattr(args, "desc", "") or "",
        status=getattr(args, "status", "") or "",
    )
    try:
        data = form.validate()
        with open_store(args, config) as store:
            project = store.create_project(data.name, data.summary, data.description, data.status)
    except AddaeError as exc:
        logger.warning("create-project failed: %s", exc)
        return emit_error("create-project", exc)
    return emit_ok(
        "create-project",
        translate("CLI_PROJECT_CREATED", lang=config.lang or None, id=project.id),
        project=project_to_dict(project),
    )


def cmd_create_task(args: argparse.Namespace) -> int:
    config = _config(args)
    form = TaskFormData(title=args.title, description=getattr(args, "desc", "") or "")
    try:
        data = form.validate()
        with open_store(args, config) as store:
            task = store.create_task(args.project_id, data.title, data.description)
    except AddaeError as exc:
        logger.warning("create-task failed: %s", exc)
        return emit_error("create-task", exc, project_id=args.project_id)
    return emit_ok(
        "create-task",
        translate("CLI_TASK_CREATED", lang=config.lang or None, id=task.id),
        task=task_to_dict(task),
    )


def cmd_create_log(args: argparse.Namespace) -> int:
    config = _config(args)
    form = LogFormData(title=args.title, description=getattr(args, "desc", "") or "")
    try:
        data = form.validate()
        with open_store(args, config) as store:
            log = store.create_log(args.project_id, data.title, data.description)
    except AddaeError as exc:
        logger.warning("create-log failed: %s", exc)
        return emit_error("create-log", exc, project_id=args.project_id)
    return emit_ok(
        "create-log",
        translate("CLI_LOG_CREATED", lang=config.lang or None, id=log.id),
        log=log_to_dict(log),
    )


def cmd_path(args: argparse.Namespace) -> int:
    """Print the database location without opening it."""
    config = _config(args)
    path = resolve_db_path(args, config)
    return emit_ok(
        "path",
        translate("CLI_DB_PATH", lang=config.lang or None),
        db_path=str(path),
        exists=path.exists(),
    )


_SETTINGS = {
    "lang": (get_user_lang, set_user_lang, available_languages),
    "theme": (get_user_theme, set_user_theme, lambda: sorted(THEMES)),
}


def _config_file(args: argparse.Namespace) -> Optional[Path]:
    raw = getattr(args, "config", None)
    return Path(raw).expanduser() if raw else None


def cmd_config(args: argparse.Namespace) -> int:
    """Show the stored language and theme, or store/clear one of them."""
    config = _config(args)
    path = _config_file(args)
    key = getattr(args, "key", None)
    value = getattr(args, "value", None)
    unset = getattr(args, "unset", False)
    message = translate("CLI_CONFIG", lang=config.lang or None)
    if key is not None and (unset or value is not None):
        _, setter, choices = _SETTINGS[key]
        value = "" if unset else value.strip()
        if value and value not in choices():
            exc = ValidationError(key, f"unknown {key} {value!r} (choose from {', '.join(choices())})")
            return emit_error("config", exc, choices=choices())
        setter(value, path)
        logger.info("config %s set to %r", key, value)
        message = translate("CLI_CONFIG_SAVED", lang=config.lang or None, key=key)
    keys = [key] if key is not None else sorted(_SETTINGS)
    settings = {name: _SETTINGS[name][0](path) for name in keys}
    return emit_ok("config", message, settings=settings)


__all__ = [
    "resolve_db_path",
    "open_store",
    "cmd_list",
    "cmd_create_project",
    "cmd_create_task",
    "cmd_create_log",
    "cmd_path",
    "cmd_config",
]
