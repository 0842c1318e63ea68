from fastapi import APIRouter
from modules.translations.api import router as translations_router
from modules.translations.api import tags_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(translations_router)
router.include_router(tags_router)
