from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging.setup import configure_logging
from infrastructure.services import get_settings
from modules.translations.providers import get_translation_service
from modules.translations.seeder import DataSeeder

if TYPE_CHECKING:
    from infrastructure.configuration import Settings
    from modules.translations.core import TranslationService


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _run_seeder(
    service: "TranslationService", settings: "Settings", logger: BoundLogger
) -> None:
    if not settings.seeder.DATA_SEEDER_ENABLED:
        logger.info("data_seeding_skipped", reason="disabled")
        return

    seeder = DataSeeder(
        store=service.store,
        cache=service.cache,
        total=settings.seeder.DATA_SEEDER_TOTAL,
        batch_size=settings.seeder.DATA_SEEDER_BATCH_SIZE,
    )
    seeder.run()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    app.state.settings = settings
    app.state.logger = logger

    logger.info("application_startup")
    _list_configs(settings, logger)

    service = get_translation_service()
    app.state.translation_service = service
    logger.info(
        "translation_service_ready",
        backend=settings.translations.TRANSLATIONS_STORE_BACKEND,
        cdn_configured=settings.translations.cdn_configured,
    )

    _run_seeder(service, settings, logger)

    yield

    logger.info("application_shutdown", cache=service.cache.stats().__dict__)
