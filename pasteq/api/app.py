"""FastAPI server for pasteq"""

from __future__ import annotations

import sqlite3

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pasteq.api.dependencies import get_ingestion_service
from pasteq.api.middleware.security_headers import SecurityHeadersMiddleware
from pasteq.api.responses import rejection_response
from pasteq.api.routes.edit import router as edit_router
from pasteq.api.routes.health import router as health_router
from pasteq.api.routes.new import router as new_router
from pasteq.api.routes.pastes import router as pastes_router
from pasteq.config import API_HOST, API_PORT, APP_VERSION
from pasteq.infrastructure.database import init_database, validate_schema
from pasteq.observability.logging import get_logger
from pasteq.observability.telemetry import counter, log_event
from pasteq.pastes.errors import MalformedInputError, PasteNotFoundError, StorageUnavailableError
from pasteq.utils.redaction import redact

# Load environment variables from .env file
load_dotenv()

app = FastAPI(title="pasteq", version=APP_VERSION)

logger = get_logger(__name__)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Sanitized validation errors; the URL is redacted before logging."""
    logger.warning("Validation error on %s: %s", redact(str(request.url)), len(exc.errors()))
    counter("api.validation_errors")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(exc.errors()),
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


@app.exception_handler(MalformedInputError)
async def malformed_input_handler(request: Request, exc: MalformedInputError):
    # Message only names the field; submitted values are never logged
    logger.info("Malformed submission on %s: %s", request.url.path, exc)
    counter("paste.rejected")
    counter("paste.rejected.malformed")
    return rejection_response()


@app.exception_handler(PasteNotFoundError)
async def not_found_handler(request: Request, exc: PasteNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Paste not found"})


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError
) -> JSONResponse:
    logger.error("Storage unavailable on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Paste storage is temporarily unavailable"},
    )


# Security headers
app.add_middleware(SecurityHeadersMiddleware)

# Initialize database schema
try:
    logger.info("Initializing database schema...")
    init_database()
    validate_schema()
    logger.info("Database initialization complete")
except FileNotFoundError as e:
    logger.critical("Database file not found: %s", e)
    raise RuntimeError(f"Database initialization failed: {e}") from e
except sqlite3.OperationalError as e:
    logger.critical("Database schema error: %s", e)
    raise RuntimeError(f"Database initialization failed: {e}") from e
except ValueError as e:
    logger.critical("Database schema invalid: %s", e)
    raise RuntimeError(f"Database initialization failed: {e}") from e

# Include routers
app.include_router(health_router)
app.include_router(new_router)
app.include_router(edit_router)
app.include_router(pastes_router)

log_event("api.startup", service="pasteq", version=APP_VERSION)


@app.on_event("shutdown")
def shutdown() -> None:
    if get_ingestion_service.cache_info().currsize:
        get_ingestion_service().close()


def main() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("pasteq.api.app:app", host=API_HOST, port=API_PORT)
