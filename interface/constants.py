"""Interface-level constants and the message catalogue for the CLI/TUI."""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

LANG_PACK = {
    "en": {
        "APP_TITLE": "addae",
        "LIST_TITLE": "Projects",
        "TAB_PROJECT": "Project",
        "TAB_TASKS": "Tasks",
        "TAB_LOGS": "Logs",
        "LIST_EMPTY": "No projects yet.",
        "LIST_EMPTY_CTA": "Press n to create your first project.",
        "TASKS_EMPTY": "No tasks. Press n to add one.",
        "LOGS_EMPTY": "No logs. Press n to write one.",
        "COMPLETED_HEADER": "Completed",
        "COMPLETED_HIDDEN": "{count} completed hidden (c to show)",
        "NO_PREVIEW": "Select a project to preview it.",
        "FIELD_NAME": "Name",
        "FIELD_SUMMARY": "Summary",
        "FIELD_DESCRIPTION": "Description",
        "FIELD_STATUS": "Status",
        "FIELD_TITLE": "Title",
        "FIELD_CREATED": "Created",
        "FIELD_UPDATED": "Updated",
        "FIELD_COMPLETED": "Completed",
        "FORM_CREATE_PROJECT": "New project",
        "FORM_UPDATE_PROJECT": "Edit project",
        "FORM_CREATE_TASK": "New task",
        "FORM_EDIT_TASK": "Edit task",
        "FORM_CREATE_LOG": "New log",
        "FORM_UPDATE_LOG": "Edit log",
        "FORM_HINT": "Tab/Shift+Tab field · Ctrl+S save · Esc cancel",
        "FORM_STATUS_HINT": "←/→ change status",
        "LOG_UNTITLED": "(untitled)",
        "DIALOG_DELETE_PROJECT": "Delete project \"{name}\" with all its tasks and logs?",
        "DIALOG_DELETE_TASK": "Delete task \"{name}\"?",
        "DIALOG_DELETE_LOG": "Delete log \"{name}\"?",
        "BTN_CANCEL": "Cancel",
        "BTN_DELETE": "Delete",
        "DIALOG_HINT": "←/→ choose · Enter accept · y delete · Esc cancel",
        "HINT_LIST": "↑↓ move · Enter open · n new · d delete · ? help · q quit",
        "HINT_PROJECT_TAB": "1/2/3 tabs · u edit · Esc back · ? help",
        "HINT_TASKS_TAB": "↑↓ move · Space done · Enter open · n new · d delete · c completed · Esc back",
        "HINT_TASK_READONLY": "↑↓ next/prev · e edit · Space done · d delete · Esc close",
        "HINT_LOGS_TAB": "↑↓ move · Enter open · n new · N fullscreen · d delete · Esc back",
        "HINT_LOG_READONLY": "Tab focus · e edit · d delete · Esc close",
        "ERROR_PREFIX": "Error: {message}",
        "HELP_TITLE": "Keys",
        "HELP_BODY": (
            "List: ↑/k ↓/j move · Enter open · n new project · d delete · q quit\n"
            "Detail: 1/2/3 or ←/→ switch tab · Esc/b back · u edit project\n"
            "Tasks: Space toggle done · c show/hide completed · Enter details · e edit · n new · d delete\n"
            "Logs: Enter view · Tab focus pager · e edit · n new · N fullscreen editor · d delete\n"
            "Dialog: ←/→ choose · Enter accept · y confirm · n/Esc cancel"
        ),
        "CLI_PROJECTS": "Projects: {count}",
        "CLI_PROJECT_CREATED": "Project {id} created",
        "CLI_TASK_CREATED": "Task {id} created",
        "CLI_LOG_CREATED": "Log {id} created",
        "CLI_DB_PATH": "Database path",
        "CLI_CONFIG": "Stored settings",
        "CLI_CONFIG_SAVED": "{key} saved",
    },
    "ru": {
        "APP_TITLE": "addae",
        "LIST_TITLE": "Проекты",
        "TAB_PROJECT": "Проект",
        "TAB_TASKS": "Задачи",
        "TAB_LOGS": "Журнал",
        "LIST_EMPTY": "Проектов пока нет.",
        "LIST_EMPTY_CTA": "Нажмите n, чтобы создать первый проект.",
        "TASKS_EMPTY": "Задач нет. Нажмите n, чтобы добавить.",
        "LOGS_EMPTY": "Записей нет. Нажмите n, чтобы написать.",
        "COMPLETED_HEADER": "Выполнено",
        "COMPLETED_HIDDEN": "Скрыто выполненных: {count} (c — показать)",
        "NO_PREVIEW": "Выберите проект для просмотра.",
        "FIELD_NAME": "Название",
        "FIELD_SUMMARY": "Кратко",
        "FIELD_DESCRIPTION": "Описание",
        "FIELD_STATUS": "Статус",
        "FIELD_TITLE": "Заголовок",
        "FIELD_CREATED": "Создан",
        "FIELD_UPDATED": "Обновлён",
        "FIELD_COMPLETED": "Выполнено",
        "FORM_CREATE_PROJECT": "Новый проект",
        "FORM_UPDATE_PROJECT": "Редактирование проекта",
        "FORM_CREATE_TASK": "Новая задача",
        "FORM_EDIT_TASK": "Редактирование задачи",
        "FORM_CREATE_LOG": "Новая запись",
        "FORM_UPDATE_LOG": "Редактирование записи",
        "FORM_HINT": "Tab/Shift+Tab поле · Ctrl+S сохранить · Esc отмена",
        "FORM_STATUS_HINT": "←/→ сменить статус",
        "LOG_UNTITLED": "(без названия)",
        "DIALOG_DELETE_PROJECT": "Удалить проект «{name}» вместе с задачами и журналом?",
        "DIALOG_DELETE_TASK": "Удалить задачу «{name}»?",
        "DIALOG_DELETE_LOG": "Удалить запись «{name}»?",
        "BTN_CANCEL": "Отмена",
        "BTN_DELETE": "Удалить",
        "DIALOG_HINT": "←/→ выбор · Enter подтвердить · y удалить · Esc отмена",
        "ERROR_PREFIX": "Ошибка: {message}",
        "HELP_TITLE": "Клавиши",
        "CLI_PROJECTS": "Проектов: {count}",
        "CLI_PROJECT_CREATED": "Проект {id} создан",
        "CLI_TASK_CREATED": "Задача {id} создана",
        "CLI_LOG_CREATED": "Запись {id} создана",
        "CLI_DB_PATH": "Путь к базе",
        "CLI_CONFIG": "Сохранённые настройки",
        "CLI_CONFIG_SAVED": "Параметр {key} сохранён",
    },
}
