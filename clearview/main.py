"""FastAPI app entry point for the ClearView Wipers service API."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from clearview.api.deps import get_shop, limiter
from clearview import __version__
from clearview.api.routes import router
from clearview.config import get_settings, validate_settings
from clearview.core.logging import log_error, log_request, log_response, logger, setup_logging
from clearview.services.geocoding import close_geocoder
from clearview.services.shop import NotFoundError
from clearview.services.store import StoreError

# Validate settings on startup
try:
    validate_settings()
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: load the shop snapshot, close HTTP clients."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting ClearView Wipers API...")
    get_shop()
    yield
    logger.info("Shutting down...")
    await close_geocoder()


app = FastAPI(
    title="ClearView Wipers API",
    description="Customers, wiper-blade jobs, inventory and profit tracking",
    version=__version__,
    lifespan=lifespan,
)

# State for limiter
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    log_error("Rate limit exceeded", client=get_remote_address(request))
    return _rate_limit_exceeded_handler(request, exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    log_error("Store unavailable", exc, path=request.url.path)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Admin-Pin", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


# Request logging middleware
REQUEST_ID_HEADER = "X-Request-ID"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    log_request(request.method, request.url.path, request_id=request_id)

    response = await call_next(request)

    duration_ms = (time.time() - start) * 1000
    log_response(
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        request_id=request_id,
    )
    response.headers[REQUEST_ID_HEADER] = request_id

    return response


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "clearview-wipers"}
