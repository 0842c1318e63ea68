"""Fixtures for server module unit tests."""

import pytest

from infrastructure.services.providers import get_settings
from modules.translations.providers import get_translation_service


@pytest.fixture(autouse=True)
def fresh_translation_service():
    """Each test starts from fresh settings and an empty store and cache."""
    get_settings.cache_clear()
    get_translation_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_translation_service.cache_clear()


@pytest.fixture
def memory_env(monkeypatch):
    """Environment selecting the in-memory backend with seeding disabled."""
    monkeypatch.setenv("TRANSLATIONS_STORE_BACKEND", "memory")
    monkeypatch.setenv("DATA_SEEDER_ENABLED", "false")
    monkeypatch.setenv("PREFIX", "test")
