import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from bikeplanner.api.router import api_router
from bikeplanner.core.config import settings
from bikeplanner.core.logging import (
    TRACE_HEADER,
    bind_trace_id,
    configure_logging,
    current_trace_id,
    trace_id_from_header,
    unbind_trace_id,
)

logger = configure_logging("bikeplanner", settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s", settings.PROJECT_NAME)
    logger.info("Environment: %s", settings.ENVIRONMENT)
    logger.info(
        "Geocoding via %s (countries=%s, min interval %.1fs)",
        settings.NOMINATIM_URL,
        settings.GEOCODING_COUNTRY_CODES or "any",
        settings.RATE_LIMIT_INTERVAL_SECONDS,
    )
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Geocoding and cycling route candidate generation",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        "%s %s - status=%s duration=%.3fs",
        request.method,
        request.url.path,
        response.status_code,
        duration,
    )

    return response


@app.middleware("http")
async def trace_middleware(request: Request, call_next):
    trace_id = trace_id_from_header(request.headers.get(TRACE_HEADER))
    token = bind_trace_id(trace_id)
    try:
        response = await call_next(request)
    finally:
        unbind_trace_id(token)
    response.headers[TRACE_HEADER] = trace_id
    return response


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/healthz")
async def health_check() -> dict:
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "ok",
        "trace_id": current_trace_id(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bikeplanner.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
    )
