"""Storage backends for translations and tags."""

from modules.translations.persistence.base import TranslationBackend, TranslationRow
from modules.translations.persistence.factory import create_backend
from modules.translations.persistence.memory import InMemoryTranslationBackend

__all__ = [
    "TranslationBackend",
    "TranslationRow",
    "create_backend",
    "InMemoryTranslationBackend",
]
