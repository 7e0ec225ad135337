import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.routers.render import limiter, router as render_router

# One JSON object per log line on stderr
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
        },
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "json"},
    },
    "root": {"level": "INFO", "handlers": ["console"]},
}

logger = logging.getLogger(__name__)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception while rendering %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


def create_app() -> FastAPI:
    """Build the renderer application: logging, rate limiting, routes."""
    logging.config.dictConfig(LOGGING_CONFIG)

    application = FastAPI(
        title="Modular Document Renderer",
        description="Renders modular document JSON into a presentation tree, HTML or Markdown.",
        version="1.0.0",
    )
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_exception_handler(Exception, _unhandled_error)
    application.include_router(render_router)

    @application.get("/", summary="Health check")
    async def health() -> dict:
        return {"status": "ok"}

    return application


app = create_app()
