"""Domain models for the translations module.

Immutable dataclasses shared by the store, the cache and the export
aggregator. These are NOT Pydantic models and do NOT validate; validation
happens in ``core.validation`` before a model is built, and API contracts
live in ``api.schemas``.

Key distinctions:
  - models.py: internal immutable records (frozen dataclasses)
  - api/schemas.py: HTTP contracts with Pydantic (camelCase aliases)
"""

import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, List, Mapping, Optional, Tuple, TypeVar

T = TypeVar("T")


class Role(str, Enum):
    """Role claim carried by an authenticated principal."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


@dataclass(frozen=True)
class Principal:
    """Identity handed to the service by the upstream identity collaborator.

    Attributes:
        subject: Stable identifier of the caller (username, client id)
        role: Role claim, already verified upstream
    """

    subject: str
    role: Role


@dataclass(frozen=True)
class Tag:
    """A reusable label attached to translations.

    Attributes:
        id: Opaque identifier assigned on creation
        name: Unique tag name
        description: Optional free text
        created_at: Creation timestamp (UTC)
        updated_at: Last update timestamp (UTC)
        translation_count: Number of translations using the tag; only set on
            tag listings
    """

    id: str
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    translation_count: Optional[int] = None


@dataclass(frozen=True)
class Translation:
    """A text snippet identified by its (key, locale) pair.

    Attributes:
        id: Opaque identifier assigned on creation
        key: Translation key (e.g. "app.login.title")
        locale: Locale code (e.g. "en")
        content: Translated text
        tags: Associated tags, unique by id, ordered by name
        created_at: Creation timestamp (UTC)
        updated_at: Last update timestamp (UTC)
        version: Optimistic concurrency counter, starts at 0
    """

    id: str
    key: str
    locale: str
    content: str
    tags: Tuple[Tag, ...]
    created_at: datetime
    updated_at: datetime
    version: int = 0

    @property
    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags]


@dataclass(frozen=True)
class Page(Generic[T]):
    """One zero-based page of a sorted result set."""

    content: Tuple[T, ...]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @classmethod
    def of(cls, items: List[T], page: int, size: int) -> "Page[T]":
        """Slice an already-sorted list into the requested page."""
        start = page * size
        return cls(
            content=tuple(items[start : start + size]),
            page=page,
            size=size,
            total_elements=len(items),
        )


@dataclass(frozen=True)
class ExportSnapshot:
    """Locale-keyed export of translation content.

    Attributes:
        translations: locale -> key -> content, read-only at both levels
        locales: Sorted locales present in the export
        total_keys: Size of the widest locale (largest inner map)
        total_translations: Number of (locale, key) entries
        generated_at: Generation timestamp (UTC)
        version: Export format version
        cdn_url: CDN mirror of this export, when a CDN is configured
        cache_ttl: Cache TTL hint in seconds
    """

    translations: Mapping[str, Mapping[str, str]]
    locales: Tuple[str, ...]
    total_keys: int
    total_translations: int
    generated_at: datetime
    version: str = "1.0"
    cdn_url: Optional[str] = None
    cache_ttl: Optional[int] = None


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Opaque record identifier."""
    return uuid.uuid4().hex
