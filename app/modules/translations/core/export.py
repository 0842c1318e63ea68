"""Export aggregation into a locale -> key -> content snapshot."""

from types import MappingProxyType
from typing import Callable, Dict, Optional

from infrastructure.configuration import TranslationSettings
from infrastructure.logging import get_module_logger
from modules.translations.core.store import TranslationStore
from modules.translations.domain.models import ExportSnapshot, utc_now

logger = get_module_logger()

EXPORT_FORMAT_VERSION = "1.0"


class ExportAggregator:
    """Builds ExportSnapshot objects from the translation store.

    Args:
        store: TranslationStore to read from
        settings: Translation settings (export size limit, TTL, CDN)
        clock: Returns the current UTC time
    """

    def __init__(
        self,
        store: TranslationStore,
        settings: TranslationSettings,
        clock: Callable = utc_now,
    ):
        self.store = store
        self.settings = settings
        self.clock = clock

    def export(self, locale: Optional[str] = None) -> ExportSnapshot:
        """Group translations as locale -> key -> content.

        ``total_keys`` is the size of the widest locale, not the number of
        distinct keys. A blank ``locale`` exports every locale.

        Args:
            locale: Optional locale to restrict the export to

        Returns:
            ExportSnapshot with counters and an optional CDN URL
        """
        if locale is not None and not locale.strip():
            locale = None

        rows = self.store.find_for_export(locale)
        if len(rows) > self.settings.MAX_EXPORT_SIZE:
            logger.warning(
                "export_size_exceeded",
                locale=locale,
                record_count=len(rows),
                max_export_size=self.settings.MAX_EXPORT_SIZE,
            )

        translations: Dict[str, Dict[str, str]] = {}
        for row in rows:
            translations.setdefault(row.locale, {})[row.key] = row.content

        sizes = [len(entries) for entries in translations.values()]
        snapshot = ExportSnapshot(
            translations=MappingProxyType(
                {loc: MappingProxyType(keys) for loc, keys in translations.items()}
            ),
            locales=tuple(sorted(translations)),
            total_keys=max(sizes, default=0),
            total_translations=sum(sizes),
            generated_at=self.clock(),
            version=EXPORT_FORMAT_VERSION,
            cdn_url=self.cdn_url(locale),
            cache_ttl=self.settings.EXPORT_CACHE_TTL_SECONDS,
        )

        logger.info(
            "translations_exported",
            locale=locale,
            locales=len(snapshot.locales),
            total_translations=snapshot.total_translations,
        )
        return snapshot

    def cdn_url(self, locale: Optional[str] = None) -> Optional[str]:
        """CDN location of an export, or None when no CDN is configured."""
        if not self.settings.cdn_configured:
            return None
        base = self.settings.CDN_BASE_URL
        if locale:
            return f"{base}/translations/export_{locale}.json"
        return f"{base}/translations/export.json"
