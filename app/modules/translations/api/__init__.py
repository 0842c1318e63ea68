"""HTTP adapter for the translations module."""

from modules.translations.api.errors import register_exception_handlers
from modules.translations.api.routes import router, tags_router

__all__ = ["register_exception_handlers", "router", "tags_router"]
