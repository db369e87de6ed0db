"""Stockroom

FastAPI application serving inventory CRUD endpoints and a function-calling
assistant that answers questions by calling the same services as tools.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .api.deps import get_database
from .api.routers import (
    categories_router,
    chatbot_router,
    health_router,
    inventory_router,
    locations_router,
    products_router,
)
from .config import settings
from .domain.errors import (
    Conflict,
    InvalidToolArguments,
    NoAnswerProduced,
    NotFound,
    RoundTripTimeout,
    ToolCallLoopExceeded,
    UnknownTool,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[Exception], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    UnknownTool: status.HTTP_502_BAD_GATEWAY,
    ToolCallLoopExceeded: status.HTTP_502_BAD_GATEWAY,
    NoAnswerProduced: status.HTTP_502_BAD_GATEWAY,
    RoundTripTimeout: status.HTTP_504_GATEWAY_TIMEOUT,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown logic"""
    configure_logging(settings.log_level)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    db = get_database()
    if settings.database_create_schema:
        await db.create_schema()
    yield
    logger.info("Shutting down...")
    await db.disconnect()


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    code = next(code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type))
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def tool_arguments_error_handler(request: Request, exc: InvalidToolArguments) -> JSONResponse:
    """Invalid arguments produced by the model for a tool call."""
    logger.warning("Rejected arguments for %s on %s: %s", exc.name, request.url.path, exc.errors)
    return JSONResponse(status_code=422, content={"detail": exc.errors})


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.environment == "development",
    lifespan=lifespan,
)

# Add CORS middleware
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods.split(","),
        allow_headers=settings.cors_headers.split(","),
    )

for error_type in ERROR_STATUS:
    app.add_exception_handler(error_type, domain_error_handler)
app.add_exception_handler(InvalidToolArguments, tool_arguments_error_handler)

app.include_router(health_router)
app.include_router(chatbot_router)
app.include_router(categories_router)
app.include_router(locations_router)
app.include_router(products_router)
app.include_router(inventory_router)


@app.get("/")
async def root() -> RedirectResponse:
    """Redirect root to API docs"""
    return RedirectResponse(url="/docs")
