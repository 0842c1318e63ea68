"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.translations import (
    SeederSettings,
    TranslationSettings,
)

__all__ = ["TranslationSettings", "SeederSettings"]
