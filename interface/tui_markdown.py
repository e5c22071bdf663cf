"""Log bodies are markdown: rich renders them, prompt_toolkit draws the ANSI result."""

from functools import lru_cache
from typing import List, Tuple

from prompt_toolkit.formatted_text import ANSI, to_formatted_text
from rich.console import Console
from rich.markdown import Markdown

Fragments = List[Tuple[str, str]]

CODE_THEME = "dracula"
MIN_WIDTH = 10


@lru_cache(maxsize=64)
def _render(text: str, width: int) -> Tuple[Tuple[Tuple[str, str], ...], ...]:
    console = Console(width=width, force_terminal=True, color_system="truecolor", legacy_windows=False)
    with console.capture() as capture:
        console.print(Markdown(text, code_theme=CODE_THEME, hyperlinks=False))

    lines: List[Fragments] = [[]]
    for fragment in to_formatted_text(ANSI(capture.get())):
        style, chunk = fragment[0], fragment[1]
        if chunk == "\n":
            lines.append([])
        elif lines[-1] and lines[-1][-1][0] == style:
            lines[-1][-1] = (style, lines[-1][-1][1] + chunk)
        else:
            lines[-1].append((style, chunk))
    while lines and not any(chunk.strip() for _, chunk in lines[-1]):
        lines.pop()
    return tuple(tuple(line) for line in lines)


def markdown_lines(text: str, width: int) -> List[Fragments]:
    """Render ``text`` into one fragment list per screen line, ``width`` cells wide."""
    if not text.strip():
        return []
    return [list(line) for line in _render(text, max(width, MIN_WIDTH))]


__all__ = ["markdown_lines"]
