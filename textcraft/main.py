from __future__ import annotations

from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from textcraft.api.v1.router import router as v1_router
from textcraft.core.config import get_settings
from textcraft.core.logging import configure_logging, get_logger
from textcraft.core.redis import close_redis
from textcraft.schemas.common import ErrorResponse, HealthResponse
from textcraft.services.gateway import close_generator
from textcraft.utils.trace import get_trace_id, trace_context_middleware

settings = get_settings()
configure_logging()
logger = get_logger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment)


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info(
        "startup_complete",
        environment=settings.environment,
        generator_configured=settings.generator_configured,
        rate_limiting=bool(settings.redis_url),
    )
    yield
    await close_generator()
    await close_redis()


app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse, lifespan=lifespan)
app.middleware("http")(trace_context_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return ORJSONResponse(
        status_code=422,
        content=ErrorResponse(detail=str(exc), trace_id=get_trace_id()).model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
    logger.exception("unhandled_exception", error=str(exc), trace_id=get_trace_id())
    return ORJSONResponse(
        status_code=500,
        content=ErrorResponse(detail="Internal server error", trace_id=get_trace_id()).model_dump(),
    )


Instrumentator().instrument(app).expose(app)


@app.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(status="ok")


app.include_router(v1_router, prefix=settings.api_prefix)


def run() -> None:
    uvicorn.run("textcraft.main:app", host=settings.host, port=settings.port, log_config=None)
