"""Form sessions: field editing state that commits into typed form data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from application.session_controller import SessionController
from application.signals import Signal
from core import Log, LogFormData, Project, ProjectFormData, Task, TaskFormData
from core.status import DEFAULT_PROJECT_STATUS, status_choices

FormData = Union[ProjectFormData, TaskFormData, LogFormData]


class FormKind(Enum):
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    CREATE_TASK = "create_task"
    EDIT_TASK = "edit_task"
    CREATE_LOG = "create_log"
    UPDATE_LOG = "update_log"


_TITLE_KEYS = {
    FormKind.CREATE_PROJECT: "FORM_CREATE_PROJECT",
    FormKind.UPDATE_PROJECT: "FORM_UPDATE_PROJECT",
    FormKind.CREATE_TASK: "FORM_CREATE_TASK",
    FormKind.EDIT_TASK: "FORM_EDIT_TASK",
    FormKind.CREATE_LOG: "FORM_CREATE_LOG",
    FormKind.UPDATE_LOG: "FORM_UPDATE_LOG",
}


@dataclass
class FormField:
    key: str
    label_key: str
    value: str = ""
    multiline: bool = False
    choices: Tuple[str, ...] = ()

    @property
    def is_choice(self) -> bool:
        return bool(self.choices)


@dataclass
class FormSession:
    kind: FormKind
    fields: List[FormField]
    target_id: Optional[int] = None
    fullscreen: bool = False
    active: int = field(default=0)

    @property
    def title_key(self) -> str:
        return _TITLE_KEYS[self.kind]

    @property
    def active_field(self) -> FormField:
        return self.fields[self.active]

    def focus_next(self) -> None:
        self.active = (self.active + 1) % len(self.fields)

    def focus_previous(self) -> None:
        self.active = (self.active - 1) % len(self.fields)

    def focus(self, key: str) -> None:
        for idx, item in enumerate(self.fields):
            if item.key == key:
                self.active = idx
                return
        raise KeyError(key)

    def set_value(self, text: str) -> None:
        current = self.active_field
        if current.is_choice:
            return
        current.value = text

    def cycle_choice(self, delta: int) -> None:
        current = self.active_field
        if not current.is_choice:
            return
        try:
            idx = current.choices.index(current.value)
        except ValueError:
            idx = 0
        current.value = current.choices[(idx + delta) % len(current.choices)]

    def value(self, key: str) -> str:
        for item in self.fields:
            if item.key == key:
                return item.value
        raise KeyError(key)

    def to_form_data(self) -> FormData:
        """Typed snapshot of the fields. Validation happens in the controller."""
        if self.kind in (FormKind.CREATE_PROJECT, FormKind.UPDATE_PROJECT):
            return ProjectFormData(
                name=self.value("name"),
                summary=self.value("summary"),
                description=self.value("description"),
                status=self.value("status"),
            )
        if self.kind in (FormKind.CREATE_TASK, FormKind.EDIT_TASK):
            return TaskFormData(title=self.value("title"), description=self.value("description"))
        return LogFormData(title=self.value("title"), description=self.value("description"))


def project_form(project: Optional[Project] = None) -> FormSession:
    return FormSession(
        kind=FormKind.UPDATE_PROJECT if project else FormKind.CREATE_PROJECT,
        target_id=project.id if project else None,
        fields=[
            FormField("name", "FIELD_NAME", project.name if project else ""),
            FormField("summary", "FIELD_SUMMARY", project.summary if project else ""),
            FormField("description", "FIELD_DESCRIPTION", project.description if project else "", multiline=True),
            FormField(
                "status",
                "FIELD_STATUS",
                project.status if project else DEFAULT_PROJECT_STATUS,
                choices=tuple(status_choices()),
            ),
        ],
    )


def task_form(task: Optional[Task] = None) -> FormSession:
    return FormSession(
        kind=FormKind.EDIT_TASK if task else FormKind.CREATE_TASK,
        target_id=task.id if task else None,
        fields=[
            FormField("title", "FIELD_TITLE", task.title if task else ""),
            FormField("description", "FIELD_DESCRIPTION", task.description if task else "", multiline=True),
        ],
    )


def log_form(log: Optional[Log] = None, *, fullscreen: bool = False) -> FormSession:
    session = FormSession(
        kind=FormKind.UPDATE_LOG if log else FormKind.CREATE_LOG,
        target_id=log.id if log else None,
        fullscreen=fullscreen,
        fields=[
            FormField("title", "FIELD_TITLE", log.title if log else ""),
            FormField("description", "FIELD_DESCRIPTION", log.description if log else "", multiline=True),
        ],
    )
    if fullscreen:
        session.focus("description")
    return session


def submit_form(session: FormSession, controller: SessionController) -> Signal:
    """Hand the committed form to the matching controller command."""
    data = session.to_form_data()
    kind = session.kind
    if kind is FormKind.CREATE_PROJECT:
        return controller.create_project(data)
    if kind is FormKind.UPDATE_PROJECT:
        return controller.update_project(data)
    if kind is FormKind.CREATE_TASK:
        return controller.create_task(data)
    if kind is FormKind.EDIT_TASK:
        return controller.update_task(session.target_id, data)
    if kind is FormKind.CREATE_LOG:
        return controller.create_log(data)
    return controller.update_log(data)


__all__ = [
    "FormKind",
    "FormField",
    "FormSession",
    "project_form",
    "task_form",
    "log_form",
    "submit_form",
]
