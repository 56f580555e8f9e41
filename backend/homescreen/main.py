"""FastAPI application entry point."""

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from homescreen import __version__
from homescreen.api.v1.router import api_v1_router
from homescreen.core.config import settings
from homescreen.core.exceptions import (
    ProblemDetailError,
    http_exception_handler,
    problem_detail_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from homescreen.core.logging_config import configure_logging
from homescreen.core.middleware.cors import get_cors_config
from homescreen.core.middleware.request_id import RequestIdMiddleware

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Home Screen Config API",
    version=__version__,
    docs_url="/docs",
    openapi_url="/openapi.json",
    debug=settings.DEBUG,
)

# Middleware (last added = first executed)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(CORSMiddleware, **get_cors_config())

# Exception handlers (RFC 7807)
app.add_exception_handler(ProblemDetailError, problem_detail_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Routes
app.include_router(api_v1_router, prefix="/api/v1")


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "homescreen.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development" and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
