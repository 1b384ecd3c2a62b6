"""FastAPI application entrypoint for the user directory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import Depends
from fastapi import FastAPI

from app.api.users import router as users_router
from app.core.config import get_app_settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.core.logging import shutdown_logging
from app.db import models as _models  # noqa: F401
from app.response.constants import get_status_registry
from app.response.service import ResponseService
from app.response.service import get_response_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_app_settings()
    configure_logging(settings.log_level)
    get_status_registry()
    get_response_service()
    logger.info("Starting user directory with settings=%s", settings.safe_for_logging())
    try:
        yield
    finally:
        shutdown_logging()


app = FastAPI(title="User Directory", lifespan=lifespan)
register_error_handlers(app)
app.include_router(users_router)


@app.get("/health")
def health(responses: ResponseService = Depends(get_response_service)) -> dict[str, str]:
    """Health check stub endpoint for service readiness."""
    return responses.raw({"status": "ok"})
