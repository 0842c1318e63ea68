"""Validation functions for translation operations.

Provides validation for:
- Translation fields (key, locale, content) and tag names
- Search filters and paging parameters
- Sort fields and directions
- Expected versions for optimistic updates

All validation raises ValidationError with descriptive messages for API
responses, before any storage access. Functions return the normalized value
on success.
"""

from typing import Iterable, List, Optional

from modules.translations.domain.errors import ValidationError

MAX_KEY_LENGTH = 500
MAX_LOCALE_LENGTH = 10
MAX_CONTENT_LENGTH = 5000
MAX_TAG_NAME_LENGTH = 100
MAX_TAG_DESCRIPTION_LENGTH = 500
MAX_CONTENT_PATTERN_LENGTH = 1000

SORT_DIRECTIONS = {"asc", "desc"}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_required(value: Optional[str], field: str, max_length: int) -> str:
    """Validate a required text field.

    Args:
        value: Field value
        field: Field name used in the error message
        max_length: Maximum number of characters

    Returns:
        The value unchanged

    Raises:
        ValidationError: If the value is blank or too long

    Examples:
        >>> validate_required("app.title", "key", 500)
        'app.title'

        >>> validate_required("  ", "key", 500)
        Traceback (most recent call last):
            ...
        ValidationError: Translation key is required
    """
    if _is_blank(value):
        raise ValidationError(f"Translation {field} is required", field=field)
    if len(value) > max_length:
        raise ValidationError(
            f"Translation {field} must not exceed {max_length} characters",
            field=field,
        )
    return value


def validate_optional(
    value: Optional[str], field: str, max_length: int
) -> Optional[str]:
    """Validate an optional filter; blank values are normalized to None."""
    if _is_blank(value):
        return None
    if len(value) > max_length:
        raise ValidationError(
            f"{field} must not exceed {max_length} characters", field=field
        )
    return value


def validate_translation_fields(key: str, locale: str, content: str) -> None:
    validate_required(key, "key", MAX_KEY_LENGTH)
    validate_required(locale, "locale", MAX_LOCALE_LENGTH)
    validate_required(content, "content", MAX_CONTENT_LENGTH)


def validate_tag_names(names: Optional[Iterable[str]]) -> List[str]:
    """Validate tag names and return them deduplicated in first-seen order.

    Raises:
        ValidationError: If a name is blank or longer than 100 characters
    """
    if names is None:
        return []
    distinct: List[str] = []
    for name in names:
        if _is_blank(name):
            raise ValidationError("Tag name is required", field="tags")
        if len(name) > MAX_TAG_NAME_LENGTH:
            raise ValidationError(
                f"Tag name must not exceed {MAX_TAG_NAME_LENGTH} characters",
                field="tags",
            )
        if name not in distinct:
            distinct.append(name)
    return distinct


def validate_paging(page: int, size: int) -> None:
    if page < 0:
        raise ValidationError("Page must be non-negative", field="page")
    if size < 1:
        raise ValidationError("Size must be positive", field="size")


def validate_sort_direction(direction: Optional[str]) -> str:
    """Return the lower-cased direction.

    Raises:
        ValidationError: If the direction is not asc or desc
    """
    normalized = (direction or "").strip().lower()
    if normalized not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Sort direction must be one of: asc, desc (got '{direction}')",
            field="sortDirection",
        )
    return normalized


def validate_sort_field(sort_by: Optional[str], allowed: Iterable[str]) -> str:
    allowed = set(allowed)
    if sort_by not in allowed:
        raise ValidationError(
            f"Unknown sort field '{sort_by}'. Allowed: {', '.join(sorted(allowed))}",
            field="sortBy",
        )
    return sort_by


def validate_expected_version(expected_version: Optional[int]) -> Optional[int]:
    if expected_version is not None and expected_version < 0:
        raise ValidationError("Version must be non-negative", field="version")
    return expected_version
