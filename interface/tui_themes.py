"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "status.todo": "#97a0a9 bold",
        "status.progress": "#e5c07b bold",
        "status.completed": "#9ad974 bold",
        "status.archived": "#6d717a",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.dimmer": "#6d717a",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "tab": "#97a0a9",
        "tab.active": "bg:#4b525a #ffb347 bold",
        "task.done": "#6d717a",
        "icon.check": "#9ad974 bold",
        "field.label": "#97a0a9",
        "field.active": "#ffb347 bold",
        "dialog": "bg:#262a2e #d7dfe6",
        "dialog.button": "#97a0a9",
        "dialog.button.selected": "bg:#e06c75 #1c1f22 bold",
        "error": "#e06c75 bold",
        "hint": "#6d717a",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "status.todo": "#a7b0ba bold",
        "status.progress": "#f0c674 bold",
        "status.completed": "#b8f171 bold",
        "status.archived": "#6f757d",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.dimmer": "#6f757d",
        "selected": "bg:#3d4047 #e8eaec bold",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "tab": "#a7b0ba",
        "tab.active": "bg:#5a6169 #ffb347 bold",
        "task.done": "#6f757d",
        "icon.check": "#b8f171 bold",
        "field.label": "#a7b0ba",
        "field.active": "#ffb347 bold",
        "dialog": "bg:#2a2d33 #e8eaec",
        "dialog.button": "#a7b0ba",
        "dialog.button.selected": "bg:#ff6b6b #1c1f22 bold",
        "error": "#ff6b6b bold",
        "hint": "#6f757d",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
