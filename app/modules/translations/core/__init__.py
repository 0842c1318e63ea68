"""Core translation engine: store, tags, search, cache, export and service."""

from infrastructure.configuration import TranslationSettings
from modules.translations.core.cache import TranslationCache
from modules.translations.core.export import ExportAggregator
from modules.translations.core.search import SearchCriteria, SearchEngine
from modules.translations.core.service import TranslationService
from modules.translations.core.store import TranslationStore
from modules.translations.core.tags import TagResolver
from modules.translations.persistence.base import TranslationBackend


def build_translation_service(
    backend: TranslationBackend, settings: TranslationSettings
) -> TranslationService:
    """Wire the core components around one backend."""
    tag_resolver = TagResolver(backend)
    store = TranslationStore(backend, tag_resolver=tag_resolver)
    return TranslationService(
        store=store,
        tag_resolver=tag_resolver,
        search_engine=SearchEngine(store),
        exporter=ExportAggregator(store, settings),
        cache=TranslationCache(max_entries=settings.CACHE_MAX_ENTRIES),
    )


__all__ = [
    "build_translation_service",
    "ExportAggregator",
    "SearchCriteria",
    "SearchEngine",
    "TagResolver",
    "TranslationCache",
    "TranslationService",
    "TranslationStore",
]
