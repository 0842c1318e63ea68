"""Backend selection from settings."""

from infrastructure.configuration import TranslationSettings
from infrastructure.logging import get_module_logger
from modules.translations.persistence.base import TranslationBackend
from modules.translations.persistence.memory import InMemoryTranslationBackend

logger = get_module_logger()


def create_backend(settings: TranslationSettings) -> TranslationBackend:
    """Build the storage backend named by TRANSLATIONS_STORE_BACKEND.

    The AWS clients are only constructed for the DynamoDB backend.

    Args:
        settings: Translation feature settings

    Returns:
        A TranslationBackend implementation
    """
    backend = settings.TRANSLATIONS_STORE_BACKEND
    logger.info("creating_translation_backend", backend=backend)

    if backend == "dynamodb":
        from infrastructure.services.providers import get_aws_clients
        from modules.translations.persistence.dynamodb import (
            DynamoDBTranslationBackend,
        )

        return DynamoDBTranslationBackend(
            client=get_aws_clients().dynamodb,
            table_name=settings.TRANSLATIONS_TABLE,
        )

    return InMemoryTranslationBackend()
