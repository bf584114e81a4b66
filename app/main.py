import logging

from fastapi import FastAPI, Request

from app.api.routes import health_router
from app.api.v1 import v1_router
from app.api.v1.envelope import error_response
from app.config.settings import settings
from app.core.logging_config import setup_logging
from app.domain.services.paginator import InvalidPaginationConfig

setup_logging(settings.LOG_LEVEL)

logger = logging.getLogger("main")

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)


@app.exception_handler(InvalidPaginationConfig)
async def invalid_pagination_config_handler(request: Request, exc: InvalidPaginationConfig):
    logger.warning("Rejected pagination config on %s: %s", request.url.path, exc)
    return error_response(
        422,
        str(exc),
        error_type="invalid_pagination_config",
    )


app.include_router(health_router)
app.include_router(v1_router)
