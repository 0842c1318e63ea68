"""
Type aliases for FastAPI dependency injection.

The principal is read from headers set by the upstream identity
collaborator after it validated the caller's token. Deployments with a
different identity source override ``get_principal``.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from infrastructure.logging import get_module_logger
from modules.translations.core import TranslationService
from modules.translations.domain.models import Principal, Role
from modules.translations.providers import get_translation_service

logger = get_module_logger()


def get_principal(
    x_principal_id: Annotated[Optional[str], Header()] = None,
    x_principal_role: Annotated[Optional[str], Header()] = None,
) -> Optional[Principal]:
    """Build the principal from identity headers.

    Returns None when either header is missing or the role is unknown; the
    service then rejects any role-protected operation.
    """
    if not x_principal_id or not x_principal_role:
        return None
    try:
        role = Role(x_principal_role.strip().upper())
    except ValueError:
        logger.warning(
            "unknown_principal_role", subject=x_principal_id, role=x_principal_role
        )
        return None
    return Principal(subject=x_principal_id, role=role)


# Translation service dependency
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]

# Authenticated principal dependency (None when unauthenticated)
PrincipalDep = Annotated[Optional[Principal], Depends(get_principal)]

__all__ = [
    "get_principal",
    "TranslationServiceDep",
    "PrincipalDep",
]
