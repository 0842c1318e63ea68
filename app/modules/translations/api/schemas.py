"""API request and response schemas using Pydantic.

All payloads use camelCase field names on the wire. Field bounds are
checked by the core validation functions so that the same rules apply to
every caller; these models only describe shape.

Key distinction from domain/models.py:
  - schemas.py: API contracts with Pydantic (camelCase aliases)
  - models.py: internal immutable records (frozen dataclasses)
"""

from datetime import datetime
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.translations.domain.models import ExportSnapshot, Page, Tag, Translation

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TagInput(CamelModel):
    """Tag reference inside a translation request; resolved by name."""

    name: str = Field(..., description="Tag name", examples=["mobile"])


class TranslationCreateRequest(CamelModel):
    key: str = Field(..., description="Translation key", examples=["app.login.title"])
    locale: str = Field(..., description="Locale code", examples=["en"])
    content: str = Field(..., description="Translation content", examples=["Login"])
    tags: Optional[List[TagInput]] = Field(default=None, description="Associated tags")

    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags or []]


class TranslationUpdateRequest(CamelModel):
    """Update payload; omitted fields keep their stored values.

    ``tags`` replaces the whole tag set and an omitted list clears it.
    ``version`` is the version the client read; omitted means "current".
    """

    key: Optional[str] = None
    locale: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[TagInput]] = None
    version: Optional[int] = Field(
        default=None, description="Version for optimistic locking", examples=[0]
    )

    def tag_names(self) -> List[str]:
        return [tag.name for tag in self.tags or []]


class TagResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    translation_count: Optional[int] = None

    @classmethod
    def from_domain(cls, tag: Tag) -> "TagResponse":
        return cls(
            id=tag.id,
            name=tag.name,
            description=tag.description,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
            translation_count=tag.translation_count,
        )


class TranslationResponse(CamelModel):
    id: str
    key: str
    locale: str
    content: str
    tags: List[TagResponse]
    created_at: datetime
    updated_at: datetime
    version: int

    @classmethod
    def from_domain(cls, translation: Translation) -> "TranslationResponse":
        return cls(
            id=translation.id,
            key=translation.key,
            locale=translation.locale,
            content=translation.content,
            tags=[TagResponse.from_domain(tag) for tag in translation.tags],
            created_at=translation.created_at,
            updated_at=translation.updated_at,
            version=translation.version,
        )


class PagedResponse(CamelModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int


def paged_translations(page: Page[Translation]) -> PagedResponse[TranslationResponse]:
    return PagedResponse[TranslationResponse](
        content=[TranslationResponse.from_domain(t) for t in page.content],
        page=page.page,
        size=page.size,
        total_elements=page.total_elements,
        total_pages=page.total_pages,
    )


def paged_tags(page: Page[Tag]) -> PagedResponse[TagResponse]:
    return PagedResponse[TagResponse](
        content=[TagResponse.from_domain(tag) for tag in page.content],
        page=page.page,
        size=page.size,
        total_elements=page.total_elements,
        total_pages=page.total_pages,
    )


class ExportResponse(CamelModel):
    """Export snapshot for client applications."""

    translations: Dict[str, Dict[str, str]]
    locales: List[str]
    total_keys: int
    total_translations: int
    generated_at: datetime
    version: str
    cdn_url: Optional[str] = None
    cache_ttl: Optional[int] = None

    @classmethod
    def from_domain(cls, snapshot: ExportSnapshot) -> "ExportResponse":
        return cls(
            translations={
                locale: dict(entries)
                for locale, entries in snapshot.translations.items()
            },
            locales=list(snapshot.locales),
            total_keys=snapshot.total_keys,
            total_translations=snapshot.total_translations,
            generated_at=snapshot.generated_at,
            version=snapshot.version,
            cdn_url=snapshot.cdn_url,
            cache_ttl=snapshot.cache_ttl,
        )


class ErrorResponse(CamelModel):
    error: str
    message: str
