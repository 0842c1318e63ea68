"""Errors for the translations module.

Every domain failure derives from ``TranslationServiceError`` so the HTTP
layer can map the whole taxonomy with one handler per class. ``StorageError``
is deliberately outside the taxonomy: it reports infrastructure faults, not
caller mistakes.
"""

from typing import Any, Optional, Sequence


class TranslationServiceError(Exception):
    """Base class for domain failures.

    Attributes:
        message: human-friendly message
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TranslationServiceError):
    """Raised when a translation or tag does not exist."""


class DuplicateKeyError(TranslationServiceError):
    """Raised when a (key, locale) pair or a tag name is already taken."""


class TagConflictError(DuplicateKeyError):
    """Raised when a new tag name was claimed by another writer first.

    Attributes:
        names: the contested tag names
    """

    def __init__(self, names: Sequence[str]):
        super().__init__(f"Tag already exists with name: {', '.join(names)}")
        self.names = tuple(names)


class ConcurrentModificationError(TranslationServiceError):
    """Raised when a record changed between read and write.

    Attributes:
        expected_version: version the caller based the write on
        actual_version: version found in storage, when known
    """

    def __init__(
        self,
        message: str,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
    ):
        super().__init__(message)
        self.expected_version = expected_version
        self.actual_version = actual_version


class ValidationError(TranslationServiceError):
    """Raised when an input violates a field bound.

    Attributes:
        field: name of the offending field, when known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PermissionDeniedError(TranslationServiceError):
    """Raised when the principal's role does not allow the operation."""


class StorageError(Exception):
    """Raised when the storage backend fails for reasons unrelated to the data.

    Attributes:
        message: human-friendly message
        error_code: provider error code, when known
        response: the original OperationResult, when available
    """

    def __init__(
        self, message: str, error_code: Optional[str] = None, response: Any = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.response = response
