"""Translation store: uniqueness and optimistic concurrency over a backend.

The store validates inputs, resolves tags through the TagResolver and turns
backend rows into immutable Translation records. Storage atomicity is the
backend's job; the store decides what to write and in which order.
"""

from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from infrastructure.logging import get_module_logger
from modules.translations.core import validation
from modules.translations.core.tags import TagResolver
from modules.translations.domain.errors import (
    ConcurrentModificationError,
    DuplicateKeyError,
    NotFoundError,
    TagConflictError,
)
from modules.translations.domain.models import (
    Page,
    Tag,
    Translation,
    new_id,
    utc_now,
)
from modules.translations.persistence.base import TranslationBackend, TranslationRow

logger = get_module_logger()


class TranslationStore:
    """Persistence facade for translation records.

    Args:
        backend: Storage backend
        tag_resolver: Resolver sharing the same backend
        clock: Returns the current UTC time
        id_factory: Returns a fresh translation identifier
    """

    def __init__(
        self,
        backend: TranslationBackend,
        tag_resolver: Optional[TagResolver] = None,
        clock: Callable = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.backend = backend
        self.tag_resolver = tag_resolver or TagResolver(backend, clock=clock)
        self.clock = clock
        self.id_factory = id_factory

    def create(
        self,
        key: str,
        locale: str,
        content: str,
        tag_names: Optional[Iterable[str]] = None,
    ) -> Translation:
        """Persist a new translation at version 0.

        The uniqueness check runs before any tag is resolved, so a rejected
        create leaves storage untouched.

        Raises:
            ValidationError: a field is blank or out of bounds
            DuplicateKeyError: (key, locale) already exists
        """
        validation.validate_translation_fields(key, locale, content)
        names = validation.validate_tag_names(tag_names)

        if self.backend.find_translation(key, locale) is not None:
            raise DuplicateKeyError(
                f"Translation already exists for key '{key}' and locale '{locale}'"
            )

        translation_id = self.id_factory()
        now = self.clock()

        def insert(tags: Tuple[Tag, ...], new_tags: Tuple[Tag, ...]) -> TranslationRow:
            row = TranslationRow(
                id=translation_id,
                key=key,
                locale=locale,
                content=content,
                tag_ids=frozenset(tag.id for tag in tags),
                created_at=now,
                updated_at=now,
                version=0,
            )
            self.backend.insert_translation(row, new_tags)
            return row

        row, tags = self._write_with_tags(names, insert)

        logger.info(
            "translation_created",
            translation_id=row.id,
            key=key,
            locale=locale,
            tag_count=len(tags),
        )
        return self._to_translation(row, tags)

    def update(
        self,
        translation_id: str,
        key: Optional[str] = None,
        locale: Optional[str] = None,
        content: Optional[str] = None,
        tag_names: Optional[Iterable[str]] = None,
        expected_version: Optional[int] = None,
    ) -> Translation:
        """Update a translation, bumping its version by exactly one.

        Omitted ``key``, ``locale`` and ``content`` keep their stored values.
        ``tag_names`` replaces the whole tag set; None clears it.
        ``expected_version`` defaults to the version read here.

        Raises:
            NotFoundError: no translation with this id
            DuplicateKeyError: the new (key, locale) belongs to another record
            ConcurrentModificationError: the stored version differs from the
                expected one at write time
        """
        validation.validate_expected_version(expected_version)
        current = self.backend.get_translation(translation_id)
        if current is None:
            raise NotFoundError(f"Translation not found with id: {translation_id}")

        key = current.key if key is None else key
        locale = current.locale if locale is None else locale
        content = current.content if content is None else content
        validation.validate_translation_fields(key, locale, content)
        names = validation.validate_tag_names(tag_names)

        if expected_version is not None and expected_version != current.version:
            raise ConcurrentModificationError(
                f"Translation {translation_id} was modified concurrently",
                expected_version=expected_version,
                actual_version=current.version,
            )

        if (key, locale) != (current.key, current.locale):
            holder = self.backend.find_translation(key, locale)
            if holder is not None and holder.id != translation_id:
                raise DuplicateKeyError(
                    f"Translation already exists for key '{key}' and locale '{locale}'"
                )

        def write(tags: Tuple[Tag, ...], new_tags: Tuple[Tag, ...]) -> TranslationRow:
            updated = replace(
                current,
                key=key,
                locale=locale,
                content=content,
                tag_ids=frozenset(tag.id for tag in tags),
                updated_at=self.clock(),
                version=current.version + 1,
            )
            self.backend.replace_translation(current, updated, new_tags)
            return updated

        updated, tags = self._write_with_tags(names, write)

        logger.info(
            "translation_updated",
            translation_id=translation_id,
            version=updated.version,
        )
        return self._to_translation(updated, tags)

    def get_by_id(self, translation_id: str) -> Translation:
        row = self.backend.get_translation(translation_id)
        if row is None:
            raise NotFoundError(f"Translation not found with id: {translation_id}")
        return self._hydrate(row)

    def get_by_key_and_locale(self, key: str, locale: str) -> Translation:
        row = self.backend.find_translation(key, locale)
        if row is None:
            raise NotFoundError(
                f"Translation not found for key '{key}' and locale '{locale}'"
            )
        return self._hydrate(row)

    def exists_by_key_and_locale(self, key: str, locale: str) -> bool:
        return self.backend.find_translation(key, locale) is not None

    def delete(self, translation_id: str) -> None:
        """Delete a translation and its tag associations; tags are kept.

        A record updated between the read and the delete is read again and
        the delete retried against its latest version.

        Raises:
            NotFoundError: no translation with this id
        """
        current = self.backend.get_translation(translation_id)
        while True:
            if current is None:
                raise NotFoundError(f"Translation not found with id: {translation_id}")
            try:
                self.backend.delete_translation(current)
                break
            except ConcurrentModificationError:
                logger.info(
                    "translation_delete_retried",
                    translation_id=translation_id,
                    stale_version=current.version,
                )
                current = self.backend.get_translation(translation_id)

        logger.info(
            "translation_deleted",
            translation_id=translation_id,
            key=current.key,
            locale=current.locale,
        )

    def count_by_locale(self, locale: str) -> int:
        return len(self.backend.scan_translations(locale))

    def distinct_locales(self) -> List[str]:
        return sorted({row.locale for row in self.backend.scan_translations()})

    def list_by_locale(
        self, locale: str, page: int = 0, size: int = 20
    ) -> Page[Translation]:
        """Page through one locale's translations sorted by key."""
        validation.validate_required(locale, "locale", validation.MAX_LOCALE_LENGTH)
        validation.validate_paging(page, size)

        rows = sorted(
            self.backend.scan_translations(locale), key=lambda row: (row.key, row.id)
        )
        window = Page.of(rows, page, size)
        return replace(window, content=tuple(self._hydrate_many(list(window.content))))

    def find_all(self, locale: Optional[str] = None) -> List[Translation]:
        """Every translation, or one locale's, hydrated with tags, unordered."""
        return self._hydrate_many(self.backend.scan_translations(locale))

    def find_for_export(self, locale: Optional[str] = None) -> List[TranslationRow]:
        """Rows for export, ordered by (locale, key); tags are not resolved."""
        rows = self.backend.scan_translations(locale)
        return sorted(rows, key=lambda row: (row.locale, row.key))

    def _write_with_tags(
        self,
        names: List[str],
        write: Callable[[Tuple[Tag, ...], Tuple[Tag, ...]], TranslationRow],
    ) -> Tuple[TranslationRow, Tuple[Tag, ...]]:
        """Run ``write(tags, new_tags)`` until no new tag name is contested.

        Tags are never deleted, so every conflict turns at least one missing
        name into an existing one and the loop ends within len(names) + 1
        rounds.
        """
        while True:
            tags, new_tags = self.tag_resolver.prepare(names)
            try:
                row = write(tags, new_tags)
            except TagConflictError as e:
                logger.info("tag_race_lost", tag_names=list(e.names))
                continue
            for tag in new_tags:
                logger.info("tag_created", tag_name=tag.name, tag_id=tag.id)
            return row, tags

    def _hydrate(self, row: TranslationRow) -> Translation:
        tags = self.backend.get_tags(row.tag_ids) if row.tag_ids else []
        return self._to_translation(row, tags)

    def _hydrate_many(self, rows: List[TranslationRow]) -> List[Translation]:
        if not rows:
            return []
        # One tag scan instead of a lookup per row
        tags_by_id = {tag.id: tag for tag in self.backend.scan_tags()}
        return [
            self._to_translation(
                row, [tags_by_id[t] for t in row.tag_ids if t in tags_by_id]
            )
            for row in rows
        ]

    def _to_translation(self, row: TranslationRow, tags: Iterable) -> Translation:
        return Translation(
            id=row.id,
            key=row.key,
            locale=row.locale,
            content=row.content,
            tags=tuple(sorted(tags, key=lambda tag: (tag.name, tag.id))),
            created_at=row.created_at,
            updated_at=row.updated_at,
            version=row.version,
        )
