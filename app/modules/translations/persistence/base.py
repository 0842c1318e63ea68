"""Storage interface for translation and tag records.

The protocol-based design allows for multiple storage backends (in-memory,
DynamoDB). Every mutating method is atomic: it either applies completely,
covering the translation row, its version check and its tag associations,
or raises and leaves storage unchanged.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, List, Optional, Protocol, Sequence

from modules.translations.domain.models import Tag


@dataclass(frozen=True)
class TranslationRow:
    """Stored shape of a translation, with tags referenced by id.

    Attributes:
        id: Opaque identifier
        key: Translation key
        locale: Locale code
        content: Translated text
        tag_ids: Ids of associated tags
        created_at: Creation timestamp (UTC)
        updated_at: Last update timestamp (UTC)
        version: Optimistic concurrency counter
    """

    id: str
    key: str
    locale: str
    content: str
    tag_ids: FrozenSet[str]
    created_at: datetime
    updated_at: datetime
    version: int


class TranslationBackend(Protocol):
    """Storage interface for translations, tags and their associations.

    Implementations enforce two uniqueness constraints: (key, locale) across
    translations and name across tags. Violations raise DuplicateKeyError. Tags
    introduced by a translation write are passed as ``new_tags`` and stored
    in the same atomic unit as the row, so a failed write leaves no tag behind.

    Methods:
        insert_translation: Persist a new translation row
        replace_translation: Overwrite a row if its stored version still matches
        delete_translation: Remove a row and its associations if unchanged
        get_translation: Fetch a row by id
        find_translation: Fetch a row by (key, locale)
        scan_translations: Return every row, optionally for one locale
        insert_tag: Persist a new tag
        find_tag_by_name: Fetch a tag by exact name
        get_tags: Fetch tags by id
        scan_tags: Return every tag
    """

    def insert_translation(
        self, row: TranslationRow, new_tags: Sequence[Tag] = ()
    ) -> None:
        """Persist a new translation row together with any tags it introduces.

        Raises:
            DuplicateKeyError: (key, locale) is already taken
            TagConflictError: a name in ``new_tags`` was claimed meanwhile
        """
        ...

    def replace_translation(
        self,
        current: TranslationRow,
        updated: TranslationRow,
        new_tags: Sequence[Tag] = (),
    ) -> None:
        """Overwrite ``current`` with ``updated`` as one atomic unit.

        The write only applies while the stored version equals
        ``current.version``. When the (key, locale) pair changes, the old pair
        is released and the new one claimed in the same unit. ``new_tags``
        are inserted in the same unit too.

        Raises:
            NotFoundError: the row no longer exists
            ConcurrentModificationError: the stored version moved on
            DuplicateKeyError: the new (key, locale) belongs to another row
            TagConflictError: a name in ``new_tags`` was claimed meanwhile
        """
        ...

    def delete_translation(self, current: TranslationRow) -> None:
        """Remove a row and its associations if it still matches ``current``.

        Raises:
            NotFoundError: the row no longer exists
            ConcurrentModificationError: the row changed since it was read
        """
        ...

    def get_translation(self, translation_id: str) -> Optional[TranslationRow]:
        ...

    def find_translation(self, key: str, locale: str) -> Optional[TranslationRow]:
        ...

    def scan_translations(self, locale: Optional[str] = None) -> List[TranslationRow]:
        ...

    def insert_tag(self, tag: Tag) -> None:
        """Persist a new tag.

        Raises:
            DuplicateKeyError: a tag with the same name already exists
        """
        ...

    def find_tag_by_name(self, name: str) -> Optional[Tag]:
        ...

    def get_tags(self, tag_ids: FrozenSet[str]) -> List[Tag]:
        """Fetch tags by id; unknown ids are skipped."""
        ...

    def scan_tags(self) -> List[Tag]:
        ...
