"""Translation and tag HTTP routes.

Routes are thin adapters: they read path, query and body parameters, call
the TranslationService with the caller's principal and convert domain
records into response schemas. Errors propagate to the handlers in
``api.errors``.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, Request, Response

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from modules.translations.api import schemas
from modules.translations.api.dependencies import PrincipalDep, TranslationServiceDep
from modules.translations.core import SearchCriteria

logger = get_module_logger()

router = APIRouter(prefix="/translations", tags=["Translations"])
tags_router = APIRouter(prefix="/tags", tags=["Tags"])
limiter = get_limiter()


@router.post("", status_code=201, response_model=schemas.TranslationResponse)
def create_translation(
    body: schemas.TranslationCreateRequest,
    service: TranslationServiceDep,
    principal: PrincipalDep,
):
    """Create a translation. Requires ADMIN or EDITOR."""
    translation = service.create_translation(
        principal, body.key, body.locale, body.content, body.tag_names()
    )
    return schemas.TranslationResponse.from_domain(translation)


# Static paths are declared before "/{translation_id}"
@router.get(
    "/search", response_model=schemas.PagedResponse[schemas.TranslationResponse]
)
def search_translations(
    service: TranslationServiceDep,
    principal: PrincipalDep,
    key: Optional[str] = None,
    locale: Optional[str] = None,
    content: Optional[str] = None,
    tag_name: Annotated[Optional[str], Query(alias="tagName")] = None,
    page: int = 0,
    size: int = 20,
    sort_by: Annotated[str, Query(alias="sortBy")] = "updatedAt",
    sort_direction: Annotated[str, Query(alias="sortDirection")] = "desc",
):
    """Search translations by key, locale, content and tag."""
    criteria = SearchCriteria(
        key_pattern=key,
        locale=locale,
        content_pattern=content,
        tag_name=tag_name,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        size=size,
    )
    return schemas.paged_translations(service.search_translations(principal, criteria))


@router.get(
    "/export",
    response_model=schemas.ExportResponse,
    response_model_exclude_none=True,
)
@limiter.limit("100/minute")
def export_translations(
    request: Request,  # pylint: disable=unused-argument
    service: TranslationServiceDep,
    locale: Optional[str] = None,
):
    """Export translations as locale -> key -> content. Public."""
    return schemas.ExportResponse.from_domain(service.export_translations(locale))


@router.get("/locales", response_model=List[str])
def get_locales(service: TranslationServiceDep, principal: PrincipalDep):
    """Sorted list of locales with at least one translation."""
    return service.get_locales(principal)


@router.get(
    "/locale/{locale}",
    response_model=schemas.PagedResponse[schemas.TranslationResponse],
)
def list_by_locale(
    locale: str,
    service: TranslationServiceDep,
    principal: PrincipalDep,
    page: int = 0,
    size: int = 20,
):
    return schemas.paged_translations(
        service.list_by_locale(principal, locale, page, size)
    )


@router.get("/locale/{locale}/count", response_model=int)
def count_by_locale(
    locale: str, service: TranslationServiceDep, principal: PrincipalDep
):
    return service.count_by_locale(principal, locale)


@router.get(
    "/key/{key}/locale/{locale}", response_model=schemas.TranslationResponse
)
def get_by_key_and_locale(
    key: str, locale: str, service: TranslationServiceDep, principal: PrincipalDep
):
    translation = service.get_translation_by_key_and_locale(principal, key, locale)
    return schemas.TranslationResponse.from_domain(translation)


@router.get("/{translation_id}", response_model=schemas.TranslationResponse)
def get_translation(
    translation_id: str, service: TranslationServiceDep, principal: PrincipalDep
):
    translation = service.get_translation(principal, translation_id)
    return schemas.TranslationResponse.from_domain(translation)


@router.put("/{translation_id}", response_model=schemas.TranslationResponse)
def update_translation(
    translation_id: str,
    body: schemas.TranslationUpdateRequest,
    service: TranslationServiceDep,
    principal: PrincipalDep,
):
    """Update a translation. Requires ADMIN or EDITOR.

    Send the ``version`` you read; a stale version is rejected with 409.
    """
    translation = service.update_translation(
        principal,
        translation_id,
        key=body.key,
        locale=body.locale,
        content=body.content,
        tag_names=body.tag_names(),
        expected_version=body.version,
    )
    return schemas.TranslationResponse.from_domain(translation)


@router.delete("/{translation_id}", status_code=204)
def delete_translation(
    translation_id: str, service: TranslationServiceDep, principal: PrincipalDep
):
    """Delete a translation. Requires ADMIN."""
    service.delete_translation(principal, translation_id)
    return Response(status_code=204)


@tags_router.get("", response_model=schemas.PagedResponse[schemas.TagResponse])
def list_tags(
    service: TranslationServiceDep,
    principal: PrincipalDep,
    page: int = 0,
    size: int = 20,
    sort_by: Annotated[str, Query(alias="sortBy")] = "name",
    sort_direction: Annotated[str, Query(alias="sortDirection")] = "asc",
):
    """All tags with their translation counts."""
    return schemas.paged_tags(
        service.list_tags(principal, page, size, sort_by, sort_direction)
    )


@tags_router.get("/search", response_model=schemas.PagedResponse[schemas.TagResponse])
def search_tags(
    service: TranslationServiceDep,
    principal: PrincipalDep,
    name_pattern: Annotated[Optional[str], Query(alias="namePattern")] = None,
    page: int = 0,
    size: int = 20,
):
    """Case-insensitive tag name search for autocomplete."""
    return schemas.paged_tags(service.search_tags(principal, name_pattern, page, size))


@tags_router.get("/translation-key/{key}", response_model=List[schemas.TagResponse])
def tags_for_translation_key(
    key: str, service: TranslationServiceDep, principal: PrincipalDep
):
    return [
        schemas.TagResponse.from_domain(tag)
        for tag in service.tags_for_translation_key(principal, key)
    ]
