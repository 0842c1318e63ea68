import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.services import get_settings
from modules.translations.api import register_exception_handlers
from server.lifespan import lifespan

logger = get_module_logger()
settings = get_settings()

CORRELATION_HEADER = "X-Correlation-ID"


handler = FastAPI(title="Translation Service", lifespan=lifespan)
setup_rate_limiter(handler)
register_exception_handlers(handler)


allow_origins = (
    ["*"]
    if settings.is_production
    else [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]
)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@handler.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a correlation id and request details to every log in the request."""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    with bind_request_context(
        correlation_id=correlation_id,
        principal=request.headers.get("X-Principal-Id"),
        request_path=request.url.path,
        request_method=request.method,
    ):
        response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


handler.include_router(api_router)
