"""Translation feature settings."""

from typing import Literal

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class TranslationSettings(FeatureSettings):
    """Translation store, cache and export configuration.

    Environment Variables:
        TRANSLATIONS_STORE_BACKEND: Storage backend, "memory" or "dynamodb" (default: memory)
        TRANSLATIONS_TABLE: DynamoDB table name (default: translations)
        MAX_EXPORT_SIZE: Record count above which exports log a warning (default: 100000)
        EXPORT_CACHE_TTL_SECONDS: Cache TTL hint attached to export snapshots (default: 300)
        CDN_ENABLED: Whether exports advertise a CDN mirror URL (default: false)
        CDN_BASE_URL: Base URL of the CDN mirror
        CACHE_MAX_ENTRIES: Maximum entries kept per cache region (default: 10000)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.translations.cdn_configured:
            base = settings.translations.CDN_BASE_URL
        ```
    """

    TRANSLATIONS_STORE_BACKEND: Literal["memory", "dynamodb"] = Field(
        default="memory", alias="TRANSLATIONS_STORE_BACKEND"
    )
    TRANSLATIONS_TABLE: str = Field(default="translations", alias="TRANSLATIONS_TABLE")
    MAX_EXPORT_SIZE: int = Field(default=100000, alias="MAX_EXPORT_SIZE")
    EXPORT_CACHE_TTL_SECONDS: int = Field(default=300, alias="EXPORT_CACHE_TTL_SECONDS")
    CDN_ENABLED: bool = Field(default=False, alias="CDN_ENABLED")
    CDN_BASE_URL: str = Field(default="", alias="CDN_BASE_URL")
    CACHE_MAX_ENTRIES: int = Field(default=10000, alias="CACHE_MAX_ENTRIES")

    @field_validator("CDN_BASE_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: object) -> object:
        """Normalize the CDN base URL so paths can be appended directly."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @property
    def cdn_configured(self) -> bool:
        """True when a CDN mirror is enabled and has a base URL."""
        return self.CDN_ENABLED and bool(self.CDN_BASE_URL)


class SeederSettings(FeatureSettings):
    """Synthetic data seeder configuration.

    Environment Variables:
        DATA_SEEDER_ENABLED: Run the seeder once at startup (default: false)
        DATA_SEEDER_TOTAL: Number of translations to generate (default: 100000)
        DATA_SEEDER_BATCH_SIZE: Translations per batch (default: 1000)
    """

    DATA_SEEDER_ENABLED: bool = Field(default=False, alias="DATA_SEEDER_ENABLED")
    DATA_SEEDER_TOTAL: int = Field(default=100000, alias="DATA_SEEDER_TOTAL")
    DATA_SEEDER_BATCH_SIZE: int = Field(default=1000, alias="DATA_SEEDER_BATCH_SIZE")
