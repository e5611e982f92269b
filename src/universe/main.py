from fastapi import (
    FastAPI,
    Request
)
from fastapi.responses import JSONResponse
from loguru import logger

from universe.config.logging import setup_logging
from universe.config.settings import ConfigurationError
from universe.infra.routes import (
    auth,
    health
)
from universe.utils.provider import get_settings

setup_logging(get_settings().LOG_LEVEL)

app = FastAPI(title="Universe Client")

app.include_router(health.router)
app.include_router(auth.router)


@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError):
    logger.error("{} {} unavailable: {}", request.method, request.url.path, exc)

    return JSONResponse(status_code=503, content={"detail": "Universe client is not configured", "error": str(exc)})
