"""Translations domain: immutable models and the error taxonomy."""

from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    TagConflictError,
    TranslationServiceError,
    ValidationError,
)
from modules.translations.domain.models import (
    ExportSnapshot,
    Page,
    Principal,
    Role,
    Tag,
    Translation,
)

__all__ = [
    "ConcurrentModificationError",
    "DuplicateKeyError",
    "NotFoundError",
    "PermissionDeniedError",
    "StorageError",
    "TagConflictError",
    "TranslationServiceError",
    "ValidationError",
    "ExportSnapshot",
    "Page",
    "Principal",
    "Role",
    "Tag",
    "Translation",
]
