"""JSON envelope shared by the non-interactive commands.

Every command prints exactly one object::

    {"command": ..., "status": "OK" | "ERROR", "message": ..., "timestamp": ..., "payload": {...}}

Failures add an ``error`` object naming the kind of failure and, for form
validation, the offending field.
"""

import json
from datetime import datetime
from typing import Any, Dict

from core import AddaeError, NotFoundError, PreconditionError, StoreError, ValidationError

# Most specific first: ValidationError is a PreconditionError.
_ERROR_KINDS = (
    (ValidationError, "validation"),
    (NotFoundError, "not_found"),
    (PreconditionError, "precondition"),
    (StoreError, "store"),
)


def error_kind(exc: AddaeError) -> str:
    for cls, kind in _ERROR_KINDS:
        if isinstance(exc, cls):
            return kind
    return "error"


def _emit(command: str, status: str, message: str, payload: Dict[str, Any], **extra: Any) -> None:
    body: Dict[str, Any] = {
        "command": command,
        "status": status,
        "message": message,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "payload": payload,
    }
    body.update(extra)
    print(json.dumps(body, ensure_ascii=False, indent=2))


def emit_ok(command: str, message: str = "", **payload: Any) -> int:
    _emit(command, "OK", message, payload)
    return 0


def emit_error(command: str, exc: AddaeError, **payload: Any) -> int:
    """Report ``exc`` and return the process exit code (1)."""
    error: Dict[str, Any] = {"kind": error_kind(exc)}
    if isinstance(exc, ValidationError):
        error["field"] = exc.field
    _emit(command, "ERROR", str(exc), payload, error=error)
    return 1


__all__ = ["error_kind", "emit_ok", "emit_error"]
