"""In-memory translation backend for single-instance deployments and tests.

Records live in an arena keyed by id. Secondary indexes map (key, locale)
and tag names to ids. The association table holds the tag ids linked to
each translation id; rows in the arena never carry tag ids themselves.
A single re-entrant lock guards every read and write.
"""

import threading
from dataclasses import replace
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from infrastructure.logging import get_module_logger
from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    TagConflictError,
)
from modules.translations.domain.models import Tag
from modules.translations.persistence.base import TranslationRow

logger = get_module_logger()


class InMemoryTranslationBackend:
    """Thread-safe in-memory implementation of TranslationBackend.

    Suitable for development, tests and single-process deployments. Data is
    lost when the process exits.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._translations: Dict[str, TranslationRow] = {}
        self._key_locale_index: Dict[Tuple[str, str], str] = {}
        self._tags: Dict[str, Tag] = {}
        self._tag_name_index: Dict[str, str] = {}
        self._associations: Dict[str, FrozenSet[str]] = {}

        logger.info("in_memory_translation_backend_initialized")

    def insert_translation(
        self, row: TranslationRow, new_tags: Sequence[Tag] = ()
    ) -> None:
        with self._lock:
            pair = (row.key, row.locale)
            if pair in self._key_locale_index:
                raise DuplicateKeyError(
                    f"Translation already exists for key '{row.key}' "
                    f"and locale '{row.locale}'"
                )
            self._check_tag_names(new_tags)
            self._store_tags(new_tags)
            self._translations[row.id] = replace(row, tag_ids=frozenset())
            self._key_locale_index[pair] = row.id
            self._associations[row.id] = frozenset(row.tag_ids)

    def replace_translation(
        self,
        current: TranslationRow,
        updated: TranslationRow,
        new_tags: Sequence[Tag] = (),
    ) -> None:
        with self._lock:
            stored = self._check_unchanged(current)

            old_pair = (stored.key, stored.locale)
            new_pair = (updated.key, updated.locale)
            if new_pair != old_pair:
                holder = self._key_locale_index.get(new_pair)
                if holder is not None and holder != current.id:
                    raise DuplicateKeyError(
                        f"Translation already exists for key '{updated.key}' "
                        f"and locale '{updated.locale}'"
                    )
            self._check_tag_names(new_tags)

            if new_pair != old_pair:
                del self._key_locale_index[old_pair]
                self._key_locale_index[new_pair] = current.id
            self._store_tags(new_tags)

            self._translations[current.id] = replace(updated, tag_ids=frozenset())
            self._associations[current.id] = frozenset(updated.tag_ids)

    def delete_translation(self, current: TranslationRow) -> None:
        with self._lock:
            stored = self._check_unchanged(current)
            del self._translations[current.id]
            del self._key_locale_index[(stored.key, stored.locale)]
            self._associations.pop(current.id, None)

    def get_translation(self, translation_id: str) -> Optional[TranslationRow]:
        with self._lock:
            stored = self._translations.get(translation_id)
            return self._hydrate(stored) if stored else None

    def find_translation(self, key: str, locale: str) -> Optional[TranslationRow]:
        with self._lock:
            translation_id = self._key_locale_index.get((key, locale))
            if translation_id is None:
                return None
            return self._hydrate(self._translations[translation_id])

    def scan_translations(self, locale: Optional[str] = None) -> List[TranslationRow]:
        with self._lock:
            return [
                self._hydrate(row)
                for row in self._translations.values()
                if locale is None or row.locale == locale
            ]

    def insert_tag(self, tag: Tag) -> None:
        with self._lock:
            if tag.name in self._tag_name_index:
                raise DuplicateKeyError(f"Tag already exists with name: {tag.name}")
            self._store_tags([tag])

    def find_tag_by_name(self, name: str) -> Optional[Tag]:
        with self._lock:
            tag_id = self._tag_name_index.get(name)
            return self._tags[tag_id] if tag_id else None

    def get_tags(self, tag_ids: FrozenSet[str]) -> List[Tag]:
        with self._lock:
            return [self._tags[tag_id] for tag_id in tag_ids if tag_id in self._tags]

    def scan_tags(self) -> List[Tag]:
        with self._lock:
            return list(self._tags.values())

    def _check_unchanged(self, current: TranslationRow) -> TranslationRow:
        stored = self._translations.get(current.id)
        if stored is None:
            raise NotFoundError(f"Translation not found with id: {current.id}")
        if stored.version != current.version:
            raise ConcurrentModificationError(
                f"Translation {current.id} was modified concurrently",
                expected_version=current.version,
                actual_version=stored.version,
            )
        return stored

    def _check_tag_names(self, tags: Sequence[Tag]) -> None:
        taken = [tag.name for tag in tags if tag.name in self._tag_name_index]
        if taken:
            raise TagConflictError(taken)

    def _store_tags(self, tags: Sequence[Tag]) -> None:
        for tag in tags:
            self._tags[tag.id] = tag
            self._tag_name_index[tag.name] = tag.id

    def _hydrate(self, row: TranslationRow) -> TranslationRow:
        return replace(row, tag_ids=self._associations.get(row.id, frozenset()))
