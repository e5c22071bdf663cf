#!/usr/bin/env python3
"""addae entry point: parse arguments, load config, configure logging, dispatch."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import AppConfig, load_app_config
from core import AddaeError

from .cli_commands import cmd_config, cmd_create_log, cmd_create_project, cmd_create_task, cmd_list, cmd_path
from .cli_parser import build_parser as build_cli_parser
from .tui_app import ProjectTrackerTUI, cmd_tui
from .tui_themes import DEFAULT_THEME, THEMES

logger = logging.getLogger("addae.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Keeps warnings off stderr when no file handler is configured.
logging.getLogger("addae").addHandler(logging.NullHandler())

_file_handler: Optional[logging.Handler] = None


def build_parser() -> argparse.ArgumentParser:
    return build_cli_parser(sys.modules[__name__], THEMES, DEFAULT_THEME)


def configure_logging(config: AppConfig) -> Optional[logging.Handler]:
    """Attach a file handler to the ``addae`` logger when a log file is configured.

    Nothing is written to stderr: the TUI owns the terminal.
    """
    global _file_handler
    root = logging.getLogger("addae")
    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
    if config.log_file is None:
        return None
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(config.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.log_level, logging.WARNING))
    _file_handler = handler
    return handler


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_app_config(Path(args.config).expanduser() if args.config else None)
    configure_logging(config)
    args.app_config = config
    func = getattr(args, "func", None) or cmd_tui
    try:
        return func(args)
    except AddaeError as exc:
        logger.error("%s failed: %s", args.command or "tui", exc)
        print(f"addae: {exc}", file=sys.stderr)
        return 1


__all__ = [
    "main",
    "build_parser",
    "configure_logging",
    "cmd_tui",
    "cmd_list",
    "cmd_create_project",
    "cmd_create_task",
    "cmd_create_log",
    "cmd_path",
    "cmd_config",
    "ProjectTrackerTUI",
]


if __name__ == "__main__":
    sys.exit(main())
