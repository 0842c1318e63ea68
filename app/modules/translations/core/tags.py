"""Tag resolution and read-only tag queries.

``TagResolver.resolve_or_create`` turns a list of tag names into tag
records, creating unseen names on first use. Creation races between
concurrent writers are absorbed here: the loser re-fetches the winner's
record, so at most one tag per name ever exists and callers never see the
race.

``TagResolver.prepare`` serves translation writes: it builds the missing
tags without saving them, and the backend stores them in the same atomic
unit as the translation row.
"""

from collections import Counter
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from infrastructure.logging import get_module_logger
from modules.translations.core import validation
from modules.translations.domain.errors import DuplicateKeyError, StorageError
from modules.translations.domain.models import Page, Tag, new_id, utc_now
from modules.translations.persistence.base import TranslationBackend

logger = get_module_logger()

TAG_SORT_FIELDS: Dict[str, Callable[[Tag], object]] = {
    "id": lambda tag: tag.id,
    "name": lambda tag: tag.name,
    "description": lambda tag: tag.description or "",
    "createdAt": lambda tag: tag.created_at,
    "created_at": lambda tag: tag.created_at,
    "updatedAt": lambda tag: tag.updated_at,
    "updated_at": lambda tag: tag.updated_at,
}


class TagResolver:
    """Maps tag names to tag records and answers tag queries.

    Args:
        backend: Storage backend shared with the translation store
        clock: Returns the current UTC time
        id_factory: Returns a fresh tag identifier
    """

    def __init__(
        self,
        backend: TranslationBackend,
        clock: Callable = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.backend = backend
        self.clock = clock
        self.id_factory = id_factory

    def resolve_or_create(self, names: Iterable[str]) -> Tuple[Tag, ...]:
        """Resolve each distinct name to a tag, creating missing ones.

        Args:
            names: Tag names; duplicates are ignored

        Returns:
            Resolved tags ordered by name
        """
        resolved: Dict[str, Tag] = {}
        for name in validation.validate_tag_names(names):
            resolved[name] = self._resolve_one(name)
        return tuple(sorted(resolved.values(), key=lambda tag: tag.name))

    def prepare(self, names: Iterable[str]) -> Tuple[Tuple[Tag, ...], Tuple[Tag, ...]]:
        """Resolve existing names and build unsaved tags for the missing ones.

        Args:
            names: Tag names; duplicates are ignored

        Returns:
            All tags ordered by name, and the subset that still has to be
            inserted
        """
        tags: List[Tag] = []
        new_tags: List[Tag] = []
        now = None
        for name in validation.validate_tag_names(names):
            tag = self.backend.find_tag_by_name(name)
            if tag is None:
                now = now or self.clock()
                tag = Tag(
                    id=self.id_factory(),
                    name=name,
                    description=None,
                    created_at=now,
                    updated_at=now,
                )
                new_tags.append(tag)
            tags.append(tag)
        return tuple(sorted(tags, key=lambda tag: tag.name)), tuple(new_tags)

    def _resolve_one(self, name: str) -> Tag:
        existing = self.backend.find_tag_by_name(name)
        if existing is not None:
            return existing

        now = self.clock()
        tag = Tag(
            id=self.id_factory(),
            name=name,
            description=None,
            created_at=now,
            updated_at=now,
        )
        try:
            self.backend.insert_tag(tag)
        except DuplicateKeyError:
            winner = self.backend.find_tag_by_name(name)
            if winner is None:
                raise StorageError(
                    f"Tag '{name}' reported as duplicate but could not be read back"
                )
            logger.info("tag_race_lost", tag_name=name, tag_id=winner.id)
            return winner

        logger.info("tag_created", tag_name=name, tag_id=tag.id)
        return tag

    def list_tags(
        self,
        page: int = 0,
        size: int = 20,
        sort_by: str = "name",
        sort_direction: str = "asc",
    ) -> Page[Tag]:
        """Page through all tags with their translation counts."""
        validation.validate_paging(page, size)
        direction = validation.validate_sort_direction(sort_direction)
        validation.validate_sort_field(sort_by, TAG_SORT_FIELDS)

        tags = self._with_counts(self.backend.scan_tags())
        ordered = _sort_tags(tags, sort_by, descending=direction == "desc")
        return Page.of(ordered, page, size)

    def search_tags(
        self, name_pattern: Optional[str], page: int = 0, size: int = 20
    ) -> Page[Tag]:
        """Case-insensitive substring search on tag names, sorted by name.

        A blank pattern matches every tag.
        """
        pattern = validation.validate_optional(
            name_pattern, "Tag name pattern", validation.MAX_TAG_NAME_LENGTH
        )
        validation.validate_paging(page, size)

        tags = self.backend.scan_tags()
        if pattern is not None:
            needle = pattern.lower()
            tags = [tag for tag in tags if needle in tag.name.lower()]

        ordered = _sort_tags(self._with_counts(tags), "name", descending=False)
        return Page.of(ordered, page, size)

    def tags_for_translation_key(self, key: str) -> List[Tag]:
        """Distinct tags used by any translation with ``key``, across locales."""
        validation.validate_required(key, "key", validation.MAX_KEY_LENGTH)

        tag_ids = set()
        for row in self.backend.scan_translations():
            if row.key == key:
                tag_ids.update(row.tag_ids)

        tags = self.backend.get_tags(frozenset(tag_ids))
        return sorted(tags, key=lambda tag: (tag.name, tag.id))

    def _with_counts(self, tags: List[Tag]) -> List[Tag]:
        usage: Counter = Counter()
        for row in self.backend.scan_translations():
            usage.update(row.tag_ids)
        return [replace(tag, translation_count=usage.get(tag.id, 0)) for tag in tags]


def _sort_tags(tags: List[Tag], sort_by: str, descending: bool) -> List[Tag]:
    # Stable sort: tie-break by id first, then by the requested field
    ordered = sorted(tags, key=lambda tag: tag.id)
    return sorted(ordered, key=TAG_SORT_FIELDS[sort_by], reverse=descending)
