import logging
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .compute import router as compute_router
from .compute.schemas import ComputeResponse, HealthResponse
from .config import Settings, get_settings, require_official_email
from .exceptions import BfhlError, RouteNotFoundError
from .middleware import MaxBodySizeMiddleware

settings = get_settings()


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


configure_logging(settings.LOG_LEVEL)
logger = structlog.get_logger("bfhl")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # timeouts=None removes global default timeout, allowing per-request timeouts
    app.state.http_client = httpx.AsyncClient(timeout=None)

    yield

    await app.state.http_client.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    debug=settings.DEBUG
)

app.add_middleware(MaxBodySizeMiddleware, max_body_size=settings.MAX_BODY_BYTES)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ComputeResponse.failure(message).to_content()
    )


# Global exception handlers
@app.exception_handler(BfhlError)
async def bfhl_exception_handler(request: Request, exc: BfhlError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error_code=exc.code)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods look the same to clients
    if exc.status_code in (404, 405):
        not_found = RouteNotFoundError(request.url.path)
        return error_response(not_found.status_code, not_found.message)
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return error_response(500, "Internal server error")


@app.get("/health", response_model=HealthResponse)
async def health_check(settings: Annotated[Settings, Depends(get_settings)]):
    return HealthResponse(official_email=require_official_email(settings))


# Include routers
app.include_router(compute_router)
