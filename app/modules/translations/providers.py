"""
Factory functions for translation dependency injection.

Provides the application-scoped translation service singleton.
"""

from functools import lru_cache

from infrastructure.services.providers import get_settings
from modules.translations.core import TranslationService, build_translation_service
from modules.translations.persistence import create_backend


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get application-scoped translation service singleton.

    The backend, cache and every core component are built once per process
    from settings, so all requests share one cache and one store.

    Application code should use the DI type alias for testability:
        from modules.translations.api.dependencies import TranslationServiceDep
        @router.get("/translations/locales")
        def locales(service: TranslationServiceDep, principal: PrincipalDep):
            return service.get_locales(principal)

    Returns:
        TranslationService: Cached service instance
    """
    settings = get_settings()
    backend = create_backend(settings.translations)
    return build_translation_service(backend, settings.translations)
