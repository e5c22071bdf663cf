"""CLI parser construction for the addae CLI/TUI."""

import argparse
from typing import Any, Mapping

from core.status import status_choices


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addae",
        description="addae — projects, tasks and logs in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--db", metavar="PATH", help="SQLite database file (default: ~/.config/addae/addae.db)")
    parser.add_argument("--config", metavar="PATH", help="YAML config file (default: ~/.addae_config.yaml)")

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Start the interactive TUI")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"palette (default: {default_theme})")
    tui_p.set_defaults(func=commands.cmd_tui)

    # list
    lp = sub.add_parser("list", help="List projects")
    lp.set_defaults(func=commands.cmd_list)

    # create-project
    cp = sub.add_parser("create-project", help="Create a project")
    cp.add_argument("name")
    cp.add_argument("--summary", default="")
    cp.add_argument("--desc", default="", help="description")
    cp.add_argument("--status", default="todo", choices=status_choices())
    cp.set_defaults(func=commands.cmd_create_project)

    # create-task
    tp = sub.add_parser("create-task", help="Add a task to a project")
    tp.add_argument("project_id", type=int)
    tp.add_argument("title")
    tp.add_argument("--desc", default="", help="description")
    tp.set_defaults(func=commands.cmd_create_task)

    # create-log
    gp = sub.add_parser("create-log", help="Add a log entry to a project")
    gp.add_argument("project_id", type=int)
    gp.add_argument("title")
    gp.add_argument("--desc", default="", help="log body (markdown)")
    gp.set_defaults(func=commands.cmd_create_log)

    # path
    pp = sub.add_parser("path", help="Show the database location")
    pp.set_defaults(func=commands.cmd_path)

    # config
    cfg = sub.add_parser("config", help="Show or store the preferred language and theme")
    cfg.add_argument("key", nargs="?", choices=("lang", "theme"))
    cfg.add_argument("value", nargs="?", help="new value (omit to show the current one)")
    cfg.add_argument("--unset", action="store_true", help="clear the stored value")
    cfg.set_defaults(func=commands.cmd_config)

    return parser


__all__ = ["build_parser"]
