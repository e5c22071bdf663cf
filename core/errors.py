"""Error taxonomy shared by the store, the session controller and the CLI."""


class AddaeError(Exception):
    """Base class for every failure the session controller reports."""


class NotFoundError(AddaeError):
    """An index or id does not reference an existing selection or record."""


class PreconditionError(AddaeError):
    """A command needs state that is absent (e.g. no project selected)."""


class ValidationError(PreconditionError):
    """Form data violates a field constraint."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class StoreError(AddaeError):
    """The persistence collaborator reported a failure."""


__all__ = ["AddaeError", "NotFoundError", "PreconditionError", "ValidationError", "StoreError"]
