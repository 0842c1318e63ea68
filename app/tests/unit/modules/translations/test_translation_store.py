"""Unit tests for TranslationStore."""

import pytest

from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from modules.translations.core.tags import TagResolver


class TestCreate:
    def test_create_assigns_id_and_version_zero(self, store):
        created = store.create("app.title", "en", "Title", ["web", "mobile"])

        assert created.id == "id-0001"
        assert created.version == 0
        assert created.created_at == created.updated_at
        assert created.tag_names == ["mobile", "web"]

    def test_create_duplicate_pair(self, store, memory_backend):
        store.create("app.title", "en", "Title")

        with pytest.raises(DuplicateKeyError):
            store.create("app.title", "en", "Other", ["new-tag"])

        assert len(memory_backend.scan_translations()) == 1
        assert memory_backend.find_tag_by_name("new-tag") is None

    def test_create_same_key_other_locale(self, store):
        store.create("app.title", "en", "Title")
        store.create("app.title", "fr", "Titre")

        assert store.distinct_locales() == ["en", "fr"]

    @pytest.mark.parametrize(
        "key,locale,content,field",
        [
            ("", "en", "x", "key"),
            ("k", "   ", "x", "locale"),
            ("k", "en", None, "content"),
            ("k" * 501, "en", "x", "key"),
            ("k", "en-US-long1", "x", "locale"),
            ("k", "en", "x" * 5001, "content"),
        ],
    )
    def test_create_rejects_invalid_fields(self, store, key, locale, content, field):
        with pytest.raises(ValidationError) as exc:
            store.create(key, locale, content)

        assert exc.value.field == field

    def test_create_accepts_boundary_lengths(self, store):
        created = store.create("k" * 500, "l" * 10, "c" * 5000)

        assert created.version == 0

    def test_create_with_repeated_tag_names(self, store):
        created = store.create("app.title", "en", "Title", ["web", "web"])

        assert created.tag_names == ["web"]


class TestUpdate:
    def test_update_bumps_version_and_timestamp(self, store):
        created = store.create("app.title", "en", "Title")

        updated = store.update(created.id, content="New title", expected_version=0)

        assert updated.version == 1
        assert updated.content == "New title"
        assert updated.key == "app.title"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_update_stale_version(self, store):
        created = store.create("app.title", "en", "Title")
        store.update(created.id, content="v1", expected_version=0)

        with pytest.raises(ConcurrentModificationError) as exc:
            store.update(created.id, content="stale", expected_version=0)

        assert exc.value.expected_version == 0
        assert exc.value.actual_version == 1
        assert store.get_by_id(created.id).content == "v1"

    def test_update_missing(self, store):
        with pytest.raises(NotFoundError):
            store.update("missing", content="x")

    def test_update_into_taken_pair(self, store):
        store.create("app.title", "en", "Title")
        other = store.create("app.heading", "en", "Heading")

        with pytest.raises(DuplicateKeyError):
            store.update(other.id, key="app.title")

        assert store.get_by_id(other.id).version == 0

    def test_update_moves_pair(self, store):
        created = store.create("app.title", "en", "Title")

        store.update(created.id, locale="fr")

        assert not store.exists_by_key_and_locale("app.title", "en")
        assert store.get_by_key_and_locale("app.title", "fr").id == created.id

    def test_update_replaces_tag_set(self, store):
        created = store.create("app.title", "en", "Title", ["web", "mobile"])

        updated = store.update(created.id, tag_names=["desktop"])
        cleared = store.update(updated.id)

        assert updated.tag_names == ["desktop"]
        assert cleared.tag_names == []

    def test_update_rejects_negative_version(self, store):
        created = store.create("app.title", "en", "Title")

        with pytest.raises(ValidationError):
            store.update(created.id, expected_version=-1)


class TestReadsAndDelete:
    def test_get_by_id_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get_by_id("missing")

    def test_get_by_key_and_locale_missing(self, store):
        with pytest.raises(NotFoundError):
            store.get_by_key_and_locale("app.title", "en")

    def test_delete_removes_record_keeps_tags(self, store, memory_backend):
        created = store.create("app.title", "en", "Title", ["web"])

        store.delete(created.id)

        with pytest.raises(NotFoundError):
            store.get_by_id(created.id)
        assert memory_backend.find_tag_by_name("web") is not None
        with pytest.raises(NotFoundError):
            store.delete(created.id)

    def test_delete_retries_when_updated_after_read(
        self, store, memory_backend, monkeypatch
    ):
        created = store.create("app.title", "en", "Title")
        stale = memory_backend.get_translation(created.id)
        store.update(created.id, content="Dashboard", expected_version=0)

        reads = []
        latest = memory_backend.get_translation

        def read_stale_first(translation_id):
            reads.append(translation_id)
            return stale if len(reads) == 1 else latest(translation_id)

        monkeypatch.setattr(memory_backend, "get_translation", read_stale_first)

        store.delete(created.id)

        assert len(reads) == 2
        assert latest(created.id) is None
        assert not store.exists_by_key_and_locale("app.title", "en")

    def test_delete_raced_by_another_delete(self, store, memory_backend, monkeypatch):
        created = store.create("app.title", "en", "Title")
        stale = memory_backend.get_translation(created.id)
        memory_backend.delete_translation(stale)
        monkeypatch.setattr(memory_backend, "get_translation", lambda _id: stale)

        with pytest.raises(NotFoundError):
            store.delete(created.id)

    def test_count_and_list_by_locale(self, store):
        for key in ["b.key", "a.key", "c.key"]:
            store.create(key, "en", key.upper(), ["web"])
        store.create("a.key", "fr", "A")

        page = store.list_by_locale("en", page=0, size=2)

        assert store.count_by_locale("en") == 3
        assert store.count_by_locale("de") == 0
        assert [t.key for t in page.content] == ["a.key", "b.key"]
        assert page.content[0].tag_names == ["web"]
        assert page.total_elements == 3
        assert page.total_pages == 2

    def test_find_for_export_orders_rows(self, store):
        store.create("b", "fr", "B")
        store.create("a", "fr", "A")
        store.create("z", "en", "Z")

        rows = store.find_for_export()

        assert [(r.locale, r.key) for r in rows] == [
            ("en", "z"),
            ("fr", "a"),
            ("fr", "b"),
        ]


def test_create_update_delete_lifecycle(store):
    created = store.create("app.title", "en", "Title", ["web"])
    assert created.version == 0

    with pytest.raises(DuplicateKeyError):
        store.create("app.title", "en", "Again")

    updated = store.update(created.id, content="Title v1", expected_version=0)
    assert updated.version == 1

    with pytest.raises(ConcurrentModificationError):
        store.update(created.id, content="Title stale", expected_version=0)

    store.delete(created.id)

    with pytest.raises(NotFoundError):
        store.get_by_id(created.id)
    assert not store.exists_by_key_and_locale("app.title", "en")


class TestTagsWrittenWithRecord:
    def test_rejected_insert_leaves_no_new_tag(
        self, store, memory_backend, monkeypatch
    ):
        store.create("app.title", "en", "Title")
        # Another writer claims the pair after the uniqueness pre-check
        monkeypatch.setattr(memory_backend, "find_translation", lambda *args: None)

        with pytest.raises(DuplicateKeyError):
            store.create("app.title", "en", "Other", ["fresh"])

        assert memory_backend.find_tag_by_name("fresh") is None
        assert len(memory_backend.scan_translations()) == 1

    def test_conflicting_update_leaves_no_new_tag(
        self, store, memory_backend, tag_resolver, monkeypatch
    ):
        created = store.create("app.title", "en", "Title", ["web"])
        prepare = tag_resolver.prepare

        def prepare_then_commit_other_update(names):
            prepared = prepare(names)
            monkeypatch.setattr(tag_resolver, "prepare", prepare)
            store.update(created.id, content="Other writer", tag_names=["web"])
            return prepared

        monkeypatch.setattr(tag_resolver, "prepare", prepare_then_commit_other_update)

        with pytest.raises(ConcurrentModificationError):
            store.update(created.id, tag_names=["fresh"], expected_version=0)

        assert memory_backend.find_tag_by_name("fresh") is None
        assert store.get_by_id(created.id).tag_names == ["web"]

    def test_lost_tag_race_reuses_winner(
        self, store, memory_backend, tag_resolver, monkeypatch
    ):
        prepare = tag_resolver.prepare
        calls = []

        def prepare_then_lose_race(names):
            calls.append(list(names))
            prepared = prepare(names)
            if len(calls) == 1:
                winner = TagResolver(memory_backend, id_factory=lambda: "winner")
                winner.resolve_or_create(["web"])
            return prepared

        monkeypatch.setattr(tag_resolver, "prepare", prepare_then_lose_race)

        created = store.create("app.title", "en", "Title", ["web", "mobile"])

        assert len(calls) == 2
        assert created.tag_names == ["mobile", "web"]
        assert [t.id for t in created.tags if t.name == "web"] == ["winner"]
        assert sorted(t.name for t in memory_backend.scan_tags()) == ["mobile", "web"]
