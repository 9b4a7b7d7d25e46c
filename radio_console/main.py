"""
Point d'entree FastAPI / FastAPI entry point.
Radio Console - inventaire de la flotte radio / radio fleet inventory.
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from radio_console.api import api_router
from radio_console.api.ws_radio_form import router as ws_router
from radio_console.config import settings
from radio_console.rate_limit import limiter
from radio_console.services.cache import create_cache
from radio_console.services.catalog import CascadeDeleteError
from radio_console.services.import_service import CsvImportError
from radio_console.services.validation import ValidationConflict
from radio_console.store import TransportError, create_store

logger = logging.getLogger("radio_console")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    if not settings.DEBUG and settings.STORE_API_KEY == "change-me":
        raise RuntimeError("CRITICAL: STORE_API_KEY must be set in production!")

    # Client du store + cache partage / Store client + shared cache
    app.state.store = create_store()
    app.state.cache = create_cache()
    logger.info("Store client ready for %s", settings.STORE_URL)
    yield
    await app.state.store.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Inventaire radio, accessoires et catalogue / Radio, accessory and catalog inventory",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Erreurs du domaine -> HTTP / Domain errors -> HTTP
@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    """Message brut du store, sans interpretation / Raw store message, not interpreted."""
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "status_code": exc.status_code, "body": exc.body},
    )


@app.exception_handler(ValidationConflict)
async def validation_conflict_handler(request: Request, exc: ValidationConflict):
    return JSONResponse(
        status_code=409,
        content={"detail": exc.message, "field": exc.field, "value": exc.value},
    )


@app.exception_handler(CascadeDeleteError)
async def cascade_delete_handler(request: Request, exc: CascadeDeleteError):
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "completed": [step.model_dump() for step in exc.completed],
            "failed": exc.failed.model_dump(),
        },
    )


@app.exception_handler(CsvImportError)
async def csv_import_handler(request: Request, exc: CsvImportError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "imported": exc.imported, "row": exc.row_number},
    )


# CORS durci / Hardened CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With", "X-Request-ID"],
)


# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Ajoute les headers de securite / Add security headers."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


# Request ID tracking middleware
class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un X-Request-ID unique a chaque requete / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


# Routes API
app.include_router(api_router)

# WebSocket (monte a la racine, pas sous /api) / WebSocket (mounted at root, not under /api)
app.include_router(ws_router)


# Sante de l'API / API health check
@app.get("/api/")
async def api_health():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


@app.get("/")
async def root():
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Logging JSON structure en production / Structured JSON logging in production
if not settings.DEBUG:
    import json

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
