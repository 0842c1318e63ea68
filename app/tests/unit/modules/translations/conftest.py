"""Fixtures for translations module tests."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.configuration import TranslationSettings
from modules.translations.core import build_translation_service
from modules.translations.core.store import TranslationStore
from modules.translations.core.tags import TagResolver
from modules.translations.domain.models import Principal, Role
from modules.translations.persistence.memory import InMemoryTranslationBackend


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def id_factory():
    """Sequential ids so ordering assertions stay readable."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):04d}"


@pytest.fixture
def memory_backend():
    return InMemoryTranslationBackend()


@pytest.fixture
def tag_resolver(memory_backend, clock):
    counter = itertools.count(1)
    return TagResolver(
        memory_backend, clock=clock, id_factory=lambda: f"tag-{next(counter):04d}"
    )


@pytest.fixture
def store(memory_backend, tag_resolver, clock, id_factory):
    return TranslationStore(
        memory_backend, tag_resolver=tag_resolver, clock=clock, id_factory=id_factory
    )


@pytest.fixture
def translation_settings_factory():
    """Factory for TranslationSettings isolated from the environment."""

    def _factory(**overrides):
        values = {
            "TRANSLATIONS_STORE_BACKEND": "memory",
            "MAX_EXPORT_SIZE": 100000,
            "EXPORT_CACHE_TTL_SECONDS": 300,
            "CDN_ENABLED": False,
            "CDN_BASE_URL": "",
            "CACHE_MAX_ENTRIES": 10000,
        }
        values.update(overrides)
        return TranslationSettings(_env_file=None, **values)

    return _factory


@pytest.fixture
def service_factory(translation_settings_factory):
    """Factory building a TranslationService over a fresh in-memory backend."""

    def _factory(**overrides):
        settings = translation_settings_factory(**overrides)
        return build_translation_service(InMemoryTranslationBackend(), settings)

    return _factory


@pytest.fixture
def service(service_factory):
    return service_factory()


@pytest.fixture
def admin():
    return Principal(subject="admin", role=Role.ADMIN)


@pytest.fixture
def editor():
    return Principal(subject="editor", role=Role.EDITOR)


@pytest.fixture
def viewer():
    return Principal(subject="viewer", role=Role.VIEWER)
