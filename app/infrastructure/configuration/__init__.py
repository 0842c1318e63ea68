"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the translation
service using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    TranslationSettings: Translation store/cache/export settings class
    SeederSettings: Data seeder settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    backend = settings.translations.TRANSLATIONS_STORE_BACKEND
    aws_region = settings.aws.AWS_REGION

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import SeederSettings, TranslationSettings

__all__ = ["Settings", "TranslationSettings", "SeederSettings"]
