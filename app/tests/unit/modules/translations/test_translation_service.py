"""Unit tests for TranslationService role checks and cache coherence."""

from unittest.mock import MagicMock

import pytest

from modules.translations.core.search import SearchCriteria
from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    PermissionDeniedError,
)
from modules.translations.domain.models import Principal, Role


class TestRoles:
    @pytest.mark.parametrize("principal_name", ["admin", "editor"])
    def test_writers_can_create_and_update(self, service, request, principal_name):
        principal = request.getfixturevalue(principal_name)

        created = service.create_translation(principal, "app.title", "en", "Title")
        updated = service.update_translation(principal, created.id, content="New")

        assert updated.version == 1

    def test_viewer_cannot_write(self, service, admin, viewer):
        created = service.create_translation(admin, "app.title", "en", "Title")

        with pytest.raises(PermissionDeniedError):
            service.create_translation(viewer, "app.other", "en", "Other")
        with pytest.raises(PermissionDeniedError):
            service.update_translation(viewer, created.id, content="x")
        with pytest.raises(PermissionDeniedError):
            service.delete_translation(viewer, created.id)

    def test_only_admin_deletes(self, service, admin, editor):
        created = service.create_translation(editor, "app.title", "en", "Title")

        with pytest.raises(PermissionDeniedError):
            service.delete_translation(editor, created.id)
        service.delete_translation(admin, created.id)

        assert not service.exists_by_key_and_locale(admin, "app.title", "en")

    def test_viewer_can_read(self, service, admin, viewer):
        created = service.create_translation(admin, "app.title", "en", "Title", ["web"])

        assert service.get_translation(viewer, created.id).content == "Title"
        assert service.get_locales(viewer) == ["en"]
        assert service.count_by_locale(viewer, "en") == 1
        assert service.list_by_locale(viewer, "en").total_elements == 1
        assert service.search_translations(viewer, SearchCriteria()).total_elements == 1
        assert service.list_tags(viewer).total_elements == 1
        assert service.search_tags(viewer, "we").total_elements == 1
        tags = service.tags_for_translation_key(viewer, "app.title")
        assert [t.name for t in tags] == ["web"]

    def test_missing_principal_denied(self, service):
        with pytest.raises(PermissionDeniedError):
            service.get_locales(None)

    def test_export_needs_no_principal(self, service, admin):
        service.create_translation(admin, "app.title", "en", "Title")

        assert service.export_translations().total_translations == 1


class TestCacheCoherence:
    def test_reads_see_writes_immediately(self, service, admin):
        created = service.create_translation(admin, "app.title", "en", "Title")
        assert service.get_translation(admin, created.id).content == "Title"
        assert service.export_translations().translations == {
            "en": {"app.title": "Title"}
        }
        assert service.get_locales(admin) == ["en"]

        service.update_translation(admin, created.id, locale="fr", content="Titre")

        assert service.get_translation(admin, created.id).content == "Titre"
        assert service.export_translations().translations == {
            "fr": {"app.title": "Titre"}
        }
        assert service.get_locales(admin) == ["fr"]

    def test_delete_evicts(self, service, admin):
        created = service.create_translation(admin, "app.title", "en", "Title")
        service.get_translation_by_key_and_locale(admin, "app.title", "en")

        service.delete_translation(admin, created.id)

        assert service.export_translations().total_translations == 0
        assert service.get_locales(admin) == []

    def test_failed_writes_do_not_evict(self, service, admin, viewer):
        created = service.create_translation(admin, "app.title", "en", "Title")
        service.update_translation(admin, created.id, content="v1")
        service.export_translations()
        evictions = service.cache.stats().evictions

        with pytest.raises(DuplicateKeyError):
            service.create_translation(admin, "app.title", "en", "Again")
        with pytest.raises(ConcurrentModificationError):
            service.update_translation(
                admin, created.id, content="x", expected_version=0
            )
        with pytest.raises(PermissionDeniedError):
            service.delete_translation(viewer, created.id)

        assert service.cache.stats().evictions == evictions
        assert service.cache.stats().region_sizes["export"] == 1

    def test_cached_export_served_without_store(self, service, admin):
        service.create_translation(admin, "app.title", "en", "Title")
        first = service.export_translations("en")
        service.exporter = MagicMock()

        assert service.export_translations("en") is first
        service.exporter.export.assert_not_called()

    def test_locale_named_all_cached_apart_from_full_export(self, service, admin):
        service.create_translation(admin, "app.title", "all", "Everywhere")
        service.create_translation(admin, "app.title", "en", "Title")

        full = service.export_translations()
        only_all = service.export_translations("all")

        assert full.locales == ("all", "en")
        assert only_all.locales == ("all",)
        assert only_all.translations == {"all": {"app.title": "Everywhere"}}


def test_unknown_role_value_rejected():
    with pytest.raises(ValueError):
        Principal(subject="x", role=Role("OWNER"))
