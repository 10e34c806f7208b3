"""
Module 08 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, encoding, hashing, verify
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    shield_error_handler,
)
from core.config.runtime import load_runtime_config
from core.schemas.errors import ConfigurationException, ShieldException


def _resolve_log_level() -> int:
    """Resolve log level from SHIELD_LOG_LEVEL or shield.json, defaulting to INFO."""
    try:
        raw = load_runtime_config().log_level
    except (ConfigurationException, OSError, ValueError):
        raw = "INFO"
    return getattr(logging, raw.upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Shield Commitment API",
        description="""
HTTP API for field-element encoding and commitment checks.

## Endpoints

- **POST /convert** - Convert a digit string between bin, dec and hex
- **POST /encode** - Pack a magnitude into decimal field elements
- **POST /decode** - Reassemble a magnitude from field elements
- **POST /hash** - Chained SHA-256 commitment hash of hex items
- **GET /leaf-index/{count}** - Leaf index of the count-th commitment
- **POST /verify** - Digest and on-chain check of a commitment
- **GET /health** - Health check

## Errors

Library errors are returned as `{"ok": false, "error": {...}}` with the
stable error code. An unreachable ledger during /verify is reported in the
response body rather than as an HTTP error.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ShieldException, shield_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(encoding.router)
    app.include_router(hashing.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
