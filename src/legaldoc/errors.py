class LegalDocError(RuntimeError):
    """Base error for legaldoc.

    `kind` names the failure category so callers can branch without
    matching on message text.
    """

    kind = "internal"


class InputError(LegalDocError, ValueError):
    """A missing or invalid identifier or parameter. Never retried."""

    kind = "input"


class NotFoundError(LegalDocError):
    """Requested artifact or file was not found."""

    kind = "not_found"


class StorageError(LegalDocError):
    """A storage backend operation failed."""

    kind = "storage"
