"""Translation service facade.

Enforces roles, sequences every committed write before a full cache
eviction, and routes reads through the cache. Failed writes never evict.
"""

from typing import FrozenSet, Iterable, List, Optional

from infrastructure.logging import get_module_logger
from modules.translations.core import cache as regions
from modules.translations.core import validation
from modules.translations.core.cache import TranslationCache
from modules.translations.core.export import ExportAggregator
from modules.translations.core.search import SearchCriteria, SearchEngine
from modules.translations.core.store import TranslationStore
from modules.translations.core.tags import TagResolver
from modules.translations.domain.errors import PermissionDeniedError
from modules.translations.domain.models import (
    ExportSnapshot,
    Page,
    Principal,
    Role,
    Tag,
    Translation,
)

logger = get_module_logger()

WRITERS: FrozenSet[Role] = frozenset({Role.ADMIN, Role.EDITOR})
DELETERS: FrozenSet[Role] = frozenset({Role.ADMIN})
READERS: FrozenSet[Role] = frozenset({Role.ADMIN, Role.EDITOR, Role.VIEWER})


class TranslationService:
    """Role-checked, cached entry point for translation operations.

    Args:
        store: TranslationStore for persistence
        tag_resolver: TagResolver for tag queries
        search_engine: SearchEngine for filtered searches
        exporter: ExportAggregator for export snapshots
        cache: TranslationCache shared by every read path
    """

    def __init__(
        self,
        store: TranslationStore,
        tag_resolver: TagResolver,
        search_engine: SearchEngine,
        exporter: ExportAggregator,
        cache: TranslationCache,
    ):
        self.store = store
        self.tag_resolver = tag_resolver
        self.search_engine = search_engine
        self.exporter = exporter
        self.cache = cache

    # Writes

    def create_translation(
        self,
        principal: Optional[Principal],
        key: str,
        locale: str,
        content: str,
        tag_names: Optional[Iterable[str]] = None,
    ) -> Translation:
        self._authorize(principal, WRITERS, "create_translation")
        translation = self.store.create(key, locale, content, tag_names)
        self.cache.evict_all()
        return translation

    def update_translation(
        self,
        principal: Optional[Principal],
        translation_id: str,
        key: Optional[str] = None,
        locale: Optional[str] = None,
        content: Optional[str] = None,
        tag_names: Optional[Iterable[str]] = None,
        expected_version: Optional[int] = None,
    ) -> Translation:
        self._authorize(principal, WRITERS, "update_translation")
        translation = self.store.update(
            translation_id,
            key=key,
            locale=locale,
            content=content,
            tag_names=tag_names,
            expected_version=expected_version,
        )
        self.cache.evict_all()
        return translation

    def delete_translation(
        self, principal: Optional[Principal], translation_id: str
    ) -> None:
        self._authorize(principal, DELETERS, "delete_translation")
        self.store.delete(translation_id)
        self.cache.evict_all()

    # Reads

    def get_translation(
        self, principal: Optional[Principal], translation_id: str
    ) -> Translation:
        self._authorize(principal, READERS, "get_translation")
        return self.cache.get_or_load(
            regions.BY_ID,
            translation_id,
            lambda: self.store.get_by_id(translation_id),
        )

    def get_translation_by_key_and_locale(
        self, principal: Optional[Principal], key: str, locale: str
    ) -> Translation:
        self._authorize(principal, READERS, "get_translation_by_key_and_locale")
        return self.cache.get_or_load(
            regions.BY_KEY_LOCALE,
            (key, locale),
            lambda: self.store.get_by_key_and_locale(key, locale),
        )

    def exists_by_key_and_locale(
        self, principal: Optional[Principal], key: str, locale: str
    ) -> bool:
        self._authorize(principal, READERS, "exists_by_key_and_locale")
        return self.store.exists_by_key_and_locale(key, locale)

    def search_translations(
        self, principal: Optional[Principal], criteria: SearchCriteria
    ) -> Page[Translation]:
        self._authorize(principal, READERS, "search_translations")
        return self.search_engine.search(criteria)

    def list_by_locale(
        self,
        principal: Optional[Principal],
        locale: str,
        page: int = 0,
        size: int = 20,
    ) -> Page[Translation]:
        self._authorize(principal, READERS, "list_by_locale")
        return self.store.list_by_locale(locale, page, size)

    def get_locales(self, principal: Optional[Principal]) -> List[str]:
        self._authorize(principal, READERS, "get_locales")
        locales = self.cache.get_or_load(
            regions.DISTINCT_LOCALES,
            "all",
            lambda: tuple(self.store.distinct_locales()),
        )
        return list(locales)

    def count_by_locale(self, principal: Optional[Principal], locale: str) -> int:
        self._authorize(principal, READERS, "count_by_locale")
        return self.store.count_by_locale(locale)

    def export_translations(self, locale: Optional[str] = None) -> ExportSnapshot:
        """Export snapshot for client applications; no role required."""
        locale = validation.validate_optional(
            locale, "Locale", validation.MAX_LOCALE_LENGTH
        )
        return self.cache.get_or_load(
            regions.EXPORT,
            locale,
            lambda: self.exporter.export(locale),
        )

    # Tags

    def list_tags(
        self,
        principal: Optional[Principal],
        page: int = 0,
        size: int = 20,
        sort_by: str = "name",
        sort_direction: str = "asc",
    ) -> Page[Tag]:
        self._authorize(principal, READERS, "list_tags")
        return self.tag_resolver.list_tags(page, size, sort_by, sort_direction)

    def search_tags(
        self,
        principal: Optional[Principal],
        name_pattern: Optional[str],
        page: int = 0,
        size: int = 20,
    ) -> Page[Tag]:
        self._authorize(principal, READERS, "search_tags")
        return self.tag_resolver.search_tags(name_pattern, page, size)

    def tags_for_translation_key(
        self, principal: Optional[Principal], key: str
    ) -> List[Tag]:
        self._authorize(principal, READERS, "tags_for_translation_key")
        return self.tag_resolver.tags_for_translation_key(key)

    def _authorize(
        self,
        principal: Optional[Principal],
        allowed: FrozenSet[Role],
        operation: str,
    ) -> None:
        if principal is None or principal.role not in allowed:
            logger.warning(
                "permission_denied",
                operation=operation,
                subject=principal.subject if principal else None,
                role=principal.role.value if principal else None,
            )
            raise PermissionDeniedError(
                f"Operation '{operation}' is not permitted for this principal"
            )
