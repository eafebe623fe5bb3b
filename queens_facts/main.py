import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from queens_facts.routers.health import router as health_router
from queens_facts.routers.facts import router as facts_router
from queens_facts.routers.audit import router as audit_router
from queens_facts.routers.viewer import router as viewer_router

from queens_facts.core.config import Settings, settings as default_settings
from queens_facts.core.errors import QueensFactsError
from queens_facts.core.logging import setup_logging
from queens_facts.core.middleware import (
    EndpointAuditMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from queens_facts.core.rate_limit import build_limiter, enforce_rate_limit

# Supabase (owned by the app)
from queens_facts.infra.supabase_client import get_supabase

logger = logging.getLogger("queens_facts.app")


def create_app(sb=None, config: Settings | None = None) -> FastAPI:
    config = config or default_settings
    setup_logging(config.LOG_LEVEL)

    # -------------------------------------------------
    # Startup
    # -------------------------------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not hasattr(app.state, "sb"):
            # fail fast on missing credentials
            app.state.sb = get_supabase(config)
            logger.info("[BOOT] Supabase client initialized")
        logger.info(
            "[BOOT] env=%s random_strategy=%s endpoint_audit=%s rate_limit=%s",
            config.APP_ENV,
            config.RANDOM_STRATEGY,
            config.ENDPOINT_AUDIT_ENABLED,
            config.RATE_LIMIT if config.RATE_LIMIT_ENABLED else "off",
        )
        yield

    app = FastAPI(title="Queens Facts API", lifespan=lifespan)
    app.state.settings = config
    if sb is not None:
        app.state.sb = sb

    # -------------------------------------------------
    # Rate limit (fixed window per client address)
    # -------------------------------------------------
    # applied to the /api routers below; page and health stay unlimited
    app.state.limiter = build_limiter(config)

    # -------------------------------------------------
    # Middleware (last added runs first)
    # -------------------------------------------------
    @app.middleware("http")
    async def inject_request_context(request: Request, call_next):
        if not hasattr(request.app.state, "sb"):
            raise RuntimeError("Supabase client (app.state.sb) is not initialized")
        request.state.sb = request.app.state.sb
        return await call_next(request)

    if config.ENDPOINT_AUDIT_ENABLED:
        app.add_middleware(EndpointAuditMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Errors
    # -------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": err["loc"][-1] if err.get("loc") else None,
                "location": err["loc"][0] if err.get("loc") else None,
                "message": err.get("msg"),
                "value": err.get("input"),
            }
            for err in exc.errors()
        ]
        return JSONResponse({"errors": jsonable_encoder(errors)}, status_code=400)

    @app.exception_handler(QueensFactsError)
    async def app_error_handler(request: Request, exc: QueensFactsError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", exc.__class__.__name__, request.url.path, exc.message)
        return JSONResponse(
            {"error": exc.message},
            status_code=exc.status_code,
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("API error on %s", request.url.path)
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    # -------------------------------------------------
    # Routers
    # -------------------------------------------------
    app.include_router(health_router, prefix="/api/health", tags=["health"])
    api_limits = [Depends(enforce_rate_limit)]
    app.include_router(facts_router, prefix="/api", tags=["facts"], dependencies=api_limits)
    app.include_router(audit_router, prefix="/api", tags=["audit"], dependencies=api_limits)
    app.include_router(viewer_router, tags=["viewer"])

    return app


app = create_app()
