from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from infrastructure.logging import get_module_logger
from infrastructure.services import AWSClientsDep, SettingsDep
from api.dependencies.rate_limits import get_limiter

router = APIRouter(tags=["System"])
limiter = get_limiter()
logger = get_module_logger()


# Load balancer healthchecks hit these often, hence the generous limit
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(
    request: Request,  # pylint: disable=unused-argument
    settings: SettingsDep,
    aws: AWSClientsDep,
):
    """Healthcheck endpoint.

    With the DynamoDB backend selected, an unreachable table yields 503.
    """
    if settings.translations.TRANSLATIONS_STORE_BACKEND == "dynamodb":
        result = aws.dynamodb.healthcheck()
        if not result.is_success:
            logger.warning(
                "healthcheck_failed",
                dependency="dynamodb",
                error_code=result.error_code,
                message=result.message,
            )
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "dependency": "dynamodb"},
            )
    return {"status": "ok"}
