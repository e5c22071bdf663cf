"""Rendering helpers for ProjectTrackerTUI to keep the class slim."""

from datetime import datetime
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from application.dialog import DialogCursor, DialogKind
from application.signals import DetailTab, LogDetailMode, LogFocus, TaskDetailMode, ViewState
from core import ProjectStatus, project_status_label
from util.responsive import ResponsiveLayoutManager, detail_content_width, split_widths

from .constants import TIMESTAMP_FORMAT
from .tui_display import display_width, pad_display, trim_display, wrap_display
from .tui_markdown import markdown_lines

Fragments = List[Tuple[str, str]]

_TAB_KEYS = {
    DetailTab.PROJECT: "TAB_PROJECT",
    DetailTab.TASKS: "TAB_TASKS",
    DetailTab.LOGS: "TAB_LOGS",
}

_DIALOG_KEYS = {
    DialogKind.PROJECT_DELETE: "DIALOG_DELETE_PROJECT",
    DialogKind.TASK_DELETE: "DIALOG_DELETE_TASK",
    DialogKind.LOG_DELETE: "DIALOG_DELETE_LOG",
}


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime(TIMESTAMP_FORMAT) if value else "—"


def _status_fragment(status: str) -> Tuple[str, str]:
    try:
        parsed = ProjectStatus.from_string(status)
    except ValueError:
        return ("class:text.dim", "?")
    return (f"class:{parsed.style}", parsed.icon)


def _field_lines(label: str, value: str, width: int) -> Fragments:
    out: Fragments = [("class:field.label", f"{label}: ")]
    lines = wrap_display(value or "—", max(8, width - display_width(label) - 2))
    out.append(("class:text", lines[0] + "\n"))
    indent = " " * (display_width(label) + 2)
    for line in lines[1:]:
        out.append(("class:text", indent + line + "\n"))
    return out


def render_status_text(tui) -> FormattedText:
    ctrl = tui.controller
    parts: Fragments = [("class:header", f" {tui._t('APP_TITLE')} ")]
    project = ctrl.selected_project
    if ctrl.state is ViewState.LIST or project is None:
        parts.append(("class:text.dim", f"› {tui._t('LIST_TITLE')} ({len(ctrl.projects)})"))
    else:
        parts.append(("class:text.dim", "› "))
        parts.append(("class:text", trim_display(project.name, 40, ellipsis="…")))
    if ctrl.error:
        parts.append(("class:border", "  "))
        parts.append(("class:error", tui._t("ERROR_PREFIX", message=ctrl.error)))
    return FormattedText(parts)


def render_project_list(tui, width: int) -> Fragments:
    ctrl = tui.controller
    if not ctrl.projects:
        return [
            ("class:text.dim", tui._t("LIST_EMPTY") + "\n"),
            ("class:text", tui._t("LIST_EMPTY_CTA") + "\n"),
        ]
    layout = ResponsiveLayoutManager.select_layout(width)
    widths = layout.calculate_widths(width)
    out: Fragments = []
    for idx, project in enumerate(ctrl.projects):
        selected = idx == ctrl.project_cursor
        row_style = "class:selected" if selected else "class:text"
        for col in layout.columns:
            w = widths[col]
            if col == "idx":
                out.append((row_style, pad_display(("›" if selected else " ") + str(idx + 1), w)))
            elif col == "stat":
                style, icon = _status_fragment(project.status)
                out.append((f"{row_style} {style}" if selected else style, pad_display(" " + icon, w)))
            elif col == "name":
                out.append((row_style, pad_display(project.name, w)))
            elif col == "summary":
                out.append(("class:selected" if selected else "class:text.dim", pad_display(project.summary, w)))
            elif col == "updated":
                out.append(("class:selected" if selected else "class:text.dimmer", pad_display(_fmt_time(project.updated_at), w)))
            out.append((row_style, " "))
        out.append(("", "\n"))
    return out


def render_project_preview(tui, width: int) -> Fragments:
    project = tui.controller.highlighted_project
    if project is None:
        return [("class:text.dim", tui._t("NO_PREVIEW"))]
    return _project_fields(tui, project, width)


def _project_fields(tui, project, width: int) -> Fragments:
    style, icon = _status_fragment(project.status)
    out: Fragments = [
        ("class:header", trim_display(project.name, width, ellipsis="…") + "\n"),
        (style, f"{icon} {project_status_label(project.status)}\n\n"),
    ]
    out += _field_lines(tui._t("FIELD_SUMMARY"), project.summary, width)
    out += _field_lines(tui._t("FIELD_DESCRIPTION"), project.description, width)
    out += _field_lines(tui._t("FIELD_CREATED"), _fmt_time(project.created_at), width)
    out += _field_lines(tui._t("FIELD_UPDATED"), _fmt_time(project.updated_at), width)
    return out


def render_list_view(tui) -> FormattedText:
    term_width = tui.get_terminal_width()
    left, right = split_widths(term_width)
    left_frags = render_project_list(tui, left)
    if not right:
        return FormattedText(left_frags)
    right_frags = render_project_preview(tui, right)
    return FormattedText(_side_by_side(left_frags, right_frags, left, right))


def _split_lines(fragments: Fragments) -> List[Fragments]:
    lines: List[Fragments] = [[]]
    for style, text in fragments:
        chunks = text.split("\n")
        for i, chunk in enumerate(chunks):
            if i:
                lines.append([])
            if chunk:
                lines[-1].append((style, chunk))
    return lines


def _side_by_side(left: Fragments, right: Fragments, left_w: int, right_w: int) -> Fragments:
    left_lines = _split_lines(left)
    right_lines = _split_lines(right)
    out: Fragments = []
    for i in range(max(len(left_lines), len(right_lines))):
        row = left_lines[i] if i < len(left_lines) else []
        used = sum(display_width(t) for _, t in row)
        out.extend(row)
        out.append(("", " " * max(0, left_w - used)))
        out.append(("class:border", "│"))
        for style, text in right_lines[i] if i < len(right_lines) else []:
            out.append((style, trim_display(text, right_w)))
        out.append(("", "\n"))
    return out


def render_tabs(tui) -> Fragments:
    ctrl = tui.controller
    out: Fragments = []
    for tab in DetailTab:
        style = "class:tab.active" if tab is ctrl.active_tab else "class:tab"
        out.append((style, f" {tab.value + 1} {tui._t(_TAB_KEYS[tab])} "))
        out.append(("class:border", " "))
    out.append(("", "\n"))
    out.append(("class:border", "─" * max(10, detail_content_width(tui.get_terminal_width())) + "\n"))
    return out


def render_task_tab(tui, width: int) -> Fragments:
    ctrl = tui.controller
    index = ctrl.task_index()
    if index.max_navigable_index < 0:
        out: Fragments = [("class:text.dim", tui._t("TASKS_EMPTY") + "\n")]
    else:
        out = []
        for idx, task in enumerate(index.visible_tasks()):
            if idx == len(index.pending) and task.completed:
                out.append(("class:text.dimmer", f"── {tui._t('COMPLETED_HEADER')} ──\n"))
            selected = idx == ctrl.task_cursor
            mark = "[x]" if task.completed else "[ ]"
            if selected:
                out.append(("class:selected", pad_display(f"› {mark} {task.title}", width) + "\n"))
            elif task.completed:
                out.append(("class:task.done", pad_display(f"  {mark} {task.title}", width) + "\n"))
            else:
                out.append(("class:text", pad_display(f"  {mark} {task.title}", width) + "\n"))
    hidden = len(index.completed) if not ctrl.show_completed else 0
    if hidden:
        out.append(("class:text.dimmer", tui._t("COMPLETED_HIDDEN", count=hidden) + "\n"))

    task = ctrl.selected_task
    if ctrl.task_detail_mode is TaskDetailMode.READONLY and task is not None:
        out.append(("class:border", "─" * width + "\n"))
        out.append(("class:header", trim_display(task.title, width, ellipsis="…") + "\n"))
        out += _field_lines(tui._t("FIELD_CREATED"), _fmt_time(task.created_at), width)
        out += _field_lines(tui._t("FIELD_COMPLETED"), _fmt_time(task.completed_at), width)
        out += _field_lines(tui._t("FIELD_DESCRIPTION"), task.description, width)
    return out


def render_log_tab(tui, width: int) -> Fragments:
    ctrl = tui.controller
    if not ctrl.logs:
        return [("class:text.dim", tui._t("LOGS_EMPTY") + "\n")]
    out: Fragments = []
    list_focus = ctrl.log_focus is LogFocus.LIST
    for idx, log in enumerate(ctrl.logs):
        selected = idx == ctrl.log_cursor
        title = log.title or tui._t("LOG_UNTITLED")
        line = f"{'›' if selected else ' '} {_fmt_time(log.created_at)}  {title}"
        style = "class:selected" if selected and list_focus else ("class:text" if not selected else "class:text.dim")
        out.append((style, pad_display(line, width) + "\n"))

    log = ctrl.selected_log
    if ctrl.log_detail_mode is LogDetailMode.READONLY and log is not None:
        border_style = "class:header" if ctrl.log_focus is LogFocus.PAGER else "class:border"
        out.append((border_style, "─" * width + "\n"))
        body = markdown_lines(log.description or "", width - 2)
        offset = max(0, min(tui.log_scroll, max(0, len(body) - 1)))
        visible = max(3, tui.get_terminal_height() - len(ctrl.logs) - 8)
        for line in body[offset:offset + visible]:
            out.extend(line)
            out.append(("", "\n"))
    return out


def render_detail_view(tui) -> FormattedText:
    ctrl = tui.controller
    width = detail_content_width(tui.get_terminal_width())
    out = render_tabs(tui)
    project = ctrl.selected_project
    if project is None:
        return FormattedText(out)
    if ctrl.active_tab is DetailTab.PROJECT:
        out += _project_fields(tui, project, width)
        index = ctrl.task_index()
        out.append(("class:text.dim", f"\n{tui._t('TAB_TASKS')}: {len(index.pending)}/{len(ctrl.tasks)}"))
        out.append(("class:text.dim", f"   {tui._t('TAB_LOGS')}: {len(ctrl.logs)}\n"))
    elif ctrl.active_tab is DetailTab.TASKS:
        out += render_task_tab(tui, width)
    else:
        out += render_log_tab(tui, width)
    return FormattedText(out)


def render_form_header(tui) -> FormattedText:
    """Form title plus every field; the active one is highlighted."""
    form = tui.form
    if form is None:
        return FormattedText([])
    width = detail_content_width(tui.get_terminal_width())
    out: Fragments = [("class:header", tui._t(form.title_key) + "\n\n")]
    for idx, item in enumerate(form.fields):
        active = idx == form.active
        label_style = "class:field.active" if active else "class:field.label"
        out.append((label_style, ("› " if active else "  ") + tui._t(item.label_key) + ": "))
        if item.is_choice:
            style, icon = _status_fragment(item.value)
            out.append((style, f"‹ {icon} {project_status_label(item.value)} ›"))
            if active:
                out.append(("class:hint", "  " + tui._t("FORM_STATUS_HINT")))
        elif not active:
            first = (item.value or "").split("\n", 1)[0]
            out.append(("class:text.dim", trim_display(first, max(8, width - 20), ellipsis="…")))
        out.append(("", "\n"))
    return FormattedText(out)


def render_dialog(tui) -> FormattedText:
    dialog = tui.controller.dialog
    if not dialog.is_open:
        return FormattedText([])
    message = tui._t(_DIALOG_KEYS[dialog.kind], name=dialog.subject)
    cancel_style = "class:dialog.button.selected" if dialog.cursor is DialogCursor.CANCEL else "class:dialog.button"
    confirm_style = "class:dialog.button.selected" if dialog.cursor is DialogCursor.CONFIRM else "class:dialog.button"
    return FormattedText(
        [
            ("class:dialog", f" {message} \n\n"),
            ("class:dialog", "   "),
            (cancel_style, f" {tui._t('BTN_CANCEL')} "),
            ("class:dialog", "   "),
            (confirm_style, f" {tui._t('BTN_DELETE')} "),
            ("class:dialog", "\n\n"),
            ("class:hint", tui._t("DIALOG_HINT")),
        ]
    )


def footer_hint_key(tui) -> str:
    ctrl = tui.controller
    if ctrl.dialog.is_open:
        return "DIALOG_HINT"
    if tui.form is not None:
        return "FORM_HINT"
    if ctrl.state is ViewState.LIST:
        return "HINT_LIST"
    if ctrl.active_tab is DetailTab.TASKS:
        return "HINT_TASK_READONLY" if ctrl.task_detail_mode is TaskDetailMode.READONLY else "HINT_TASKS_TAB"
    if ctrl.active_tab is DetailTab.LOGS:
        return "HINT_LOG_READONLY" if ctrl.log_detail_mode is LogDetailMode.READONLY else "HINT_LOGS_TAB"
    return "HINT_PROJECT_TAB"


def render_footer(tui) -> FormattedText:
    return FormattedText([("class:hint", " " + tui._t(footer_hint_key(tui)))])


def render_help(tui) -> FormattedText:
    return FormattedText(
        [
            ("class:header", tui._t("HELP_TITLE") + "\n\n"),
            ("class:text", tui._t("HELP_BODY")),
        ]
    )


__all__ = [
    "render_status_text",
    "render_list_view",
    "render_detail_view",
    "render_form_header",
    "render_dialog",
    "render_footer",
    "render_help",
    "footer_hint_key",
]
