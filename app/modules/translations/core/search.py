"""Dynamic multi-filter search over translations.

Each supplied filter becomes one predicate; only supplied predicates are
AND-combined and evaluated as a filter chain over the candidate records.
Blank filters count as absent. Results are de-duplicated by id, sorted,
and sliced into a zero-based page.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from infrastructure.logging import get_module_logger
from modules.translations.core import validation
from modules.translations.core.store import TranslationStore
from modules.translations.domain.models import Page, Translation

logger = get_module_logger()

Predicate = Callable[[Translation], bool]

SORT_FIELDS: Dict[str, Callable[[Translation], object]] = {
    "id": lambda t: t.id,
    "key": lambda t: t.key,
    "locale": lambda t: t.locale,
    "content": lambda t: t.content,
    "createdAt": lambda t: t.created_at,
    "created_at": lambda t: t.created_at,
    "updatedAt": lambda t: t.updated_at,
    "updated_at": lambda t: t.updated_at,
    "version": lambda t: t.version,
}


@dataclass(frozen=True)
class SearchCriteria:
    """Search filters plus sort and paging options.

    Attributes:
        key_pattern: Case-sensitive substring of the key
        locale: Exact locale
        content_pattern: Case-insensitive substring of the content
        tag_name: Exact name of at least one associated tag
        sort_by: One of SORT_FIELDS
        sort_direction: "asc" or "desc", case-insensitive
        page: Zero-based page index
        size: Page size
    """

    key_pattern: Optional[str] = None
    locale: Optional[str] = None
    content_pattern: Optional[str] = None
    tag_name: Optional[str] = None
    sort_by: str = "updatedAt"
    sort_direction: str = "desc"
    page: int = 0
    size: int = 20


def key_contains(pattern: str) -> Predicate:
    return lambda t: pattern in t.key


def locale_equals(locale: str) -> Predicate:
    return lambda t: t.locale == locale


def content_contains(pattern: str) -> Predicate:
    needle = pattern.lower()
    return lambda t: needle in t.content.lower()


def has_tag(name: str) -> Predicate:
    return lambda t: any(tag.name == name for tag in t.tags)


def build_predicates(criteria: SearchCriteria) -> List[Predicate]:
    """Build one predicate per non-blank filter after validating bounds."""
    predicates: List[Predicate] = []

    key_pattern = validation.validate_optional(
        criteria.key_pattern, "Key pattern", validation.MAX_KEY_LENGTH
    )
    if key_pattern is not None:
        predicates.append(key_contains(key_pattern))

    locale = validation.validate_optional(
        criteria.locale, "Locale", validation.MAX_LOCALE_LENGTH
    )
    if locale is not None:
        predicates.append(locale_equals(locale))

    content_pattern = validation.validate_optional(
        criteria.content_pattern,
        "Content search term",
        validation.MAX_CONTENT_PATTERN_LENGTH,
    )
    if content_pattern is not None:
        predicates.append(content_contains(content_pattern))

    tag_name = validation.validate_optional(
        criteria.tag_name, "Tag name", validation.MAX_TAG_NAME_LENGTH
    )
    if tag_name is not None:
        predicates.append(has_tag(tag_name))

    return predicates


class SearchEngine:
    """Runs SearchCriteria against the translation store.

    Args:
        store: TranslationStore providing hydrated candidates
    """

    def __init__(self, store: TranslationStore):
        self.store = store

    def search(self, criteria: SearchCriteria) -> Page[Translation]:
        """Filter, sort and paginate translations.

        Raises:
            ValidationError: a filter, sort option or paging value is invalid
        """
        predicates = build_predicates(criteria)
        validation.validate_paging(criteria.page, criteria.size)
        direction = validation.validate_sort_direction(criteria.sort_direction)
        sort_by = validation.validate_sort_field(criteria.sort_by, SORT_FIELDS)

        locale = validation.validate_optional(
            criteria.locale, "Locale", validation.MAX_LOCALE_LENGTH
        )
        candidates = self.store.find_all(locale)

        matches: Dict[str, Translation] = {}
        for translation in candidates:
            if all(predicate(translation) for predicate in predicates):
                matches.setdefault(translation.id, translation)

        ordered = sorted(matches.values(), key=lambda t: t.id)
        ordered.sort(key=SORT_FIELDS[sort_by], reverse=direction == "desc")

        logger.debug(
            "translations_searched",
            filters=len(predicates),
            total_elements=len(ordered),
            page=criteria.page,
            size=criteria.size,
        )
        return Page.of(ordered, criteria.page, criteria.size)
