"""FastAPI application for the CIDR plan API.

Runs directly on Uvicorn (ASGI server).

Environment Variables:
    AUTH_METHOD: Authentication method (none, api_key)

    CORS Configuration:
        CORS_ORIGINS: Comma-separated list of allowed CORS origins
                     If not set or empty, localhost development origins are allowed
                     Example: http://localhost:3000,http://localhost:5173

    API Key Authentication (AUTH_METHOD=api_key):
        API_KEYS: Comma-separated list of valid API keys

    Logging:
        LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR, CRITICAL
        LOG_FORMAT: text (default) or json
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .auth import validate_api_key
from .config import AuthMethod, get_api_keys, get_auth_method, get_cors_origins, validate_configuration
from .errors import CidrPlanError
from .logging_config import configure_logging
from .routers import health, kubernetes, subnets

configure_logging()
logger = logging.getLogger(__name__)

# Paths reachable without authentication
PUBLIC_PATHS = [
    "/api/v1/health",
    "/api/v1/health/ready",
    "/api/v1/health/live",
    "/api/v1/docs",
    "/api/v1/redoc",
    "/api/v1/openapi.json",
    "/",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_configuration()
    logger.info(
        "CIDR Plan API starting",
        extra={"auth_method": get_auth_method().value, "version": __version__},
    )
    yield


app = FastAPI(
    title="CIDR Plan API",
    description="IPv4 subnet calculator and Kubernetes network planner",
    version=__version__,
    docs_url="/api/v1/docs",  # Swagger UI
    redoc_url="/api/v1/redoc",  # ReDoc
    openapi_url="/api/v1/openapi.json",
    lifespan=lifespan,
)

cors_origins = get_cors_origins()
if not cors_origins:
    # Default to localhost origins for development
    cors_origins = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite dev server
        "http://localhost:8001",
    ]
    logger.warning("CORS: Using default localhost origins for development")
else:
    logger.info(f"CORS: Allowed origins: {', '.join(cors_origins)}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(subnets.router)
app.include_router(kubernetes.router)


@app.exception_handler(CidrPlanError)
async def cidr_plan_error_handler(request: Request, exc: CidrPlanError):
    """Translate calculation and planning errors into JSON responses."""
    context = {"path": request.url.path, "code": exc.code}

    if exc.status_code >= 500:
        logger.error("Internal planning error: %s", exc.message, exc_info=exc, extra=context)
    else:
        logger.warning("Request rejected: %s", exc.message, extra=context)

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "code": exc.code})


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    """Handle authentication based on AUTH_METHOD."""
    if request.url.path in PUBLIC_PATHS:
        return await call_next(request)

    if get_auth_method() == AuthMethod.API_KEY:
        api_key = request.headers.get("X-API-Key")
        if not validate_api_key(api_key, get_api_keys()):
            logger.warning("Rejected request with invalid API key", extra={"path": request.url.path})
            return JSONResponse(status_code=401, content={"detail": "Invalid or missing API key"})

    return await call_next(request)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "CIDR Plan API",
        "version": __version__,
        "docs": "/api/v1/docs",
        "openapi": "/api/v1/openapi.json",
        "health": "/api/v1/health",
    }
