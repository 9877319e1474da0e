# solardevis/main.py

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from solardevis.core.config import settings

# API routers
from solardevis.api import (
    analysis,
    audits,
    quotes,
    solar,
)

from solardevis.services.gemini_analysis import get_analysis_service
from solardevis.services.solar_potential import get_solar_service

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="SolarDevis Pro API",
    version="2.0.0",
    description="Audit import, solar sizing and quote pricing",
    docs_url="/docs" if getattr(settings, "DEBUG", False) else None,
    redoc_url="/redoc" if getattr(settings, "DEBUG", False) else None,
)

# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    content_type = request.headers.get("content-type", "")
    logger.warning(
        f"422 ValidationError on {request.method} {request.url.path} "
        f"(content-type={content_type}) errors={exc.errors()}"
    )
    return JSONResponse(
        status_code=422,
        content={
            "detail": exc.errors(),
            "path": str(request.url.path),
            "method": request.method,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "path": str(request.url.path),
            "method": request.method,
            "error": str(exc) if getattr(settings, "DEBUG", False) else None,
        },
    )

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
def _build_cors_origins() -> List[str]:
    origins = [
        # Local dev
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if getattr(settings, "FRONTEND_URL", None):
        origins.append(str(settings.FRONTEND_URL).strip().rstrip("/"))

    for o in settings.get_cors_origins():
        if o == "*":
            logger.warning("CORS_ORIGINS contains '*'. Ignoring '*' and using explicit allow-list.")
            continue
        origins.append(o)

    # de-dup
    merged: List[str] = []
    for o in origins:
        o = (o or "").strip().rstrip("/")
        if o and o not in merged:
            merged.append(o)
    return merged


cors_origins = _build_cors_origins()
logger.info(f"CORS origins configured: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(audits.router)
app.include_router(quotes.router)
app.include_router(analysis.router)
app.include_router(solar.router)

# ---------------------------------------------------------------------------
# Startup
# ---------------------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    logger.info("Starting SolarDevis Pro API...")

    # build both services now so missing keys show up in the startup log
    analysis_service = get_analysis_service()
    solar_service = get_solar_service()
    if not analysis_service.enabled:
        logger.warning("AI analysis disabled: quotes will carry the fallback message")
    if not solar_service.enabled:
        logger.info("Solar API disabled: sizing uses regional HSP defaults")

    logger.info(f"Startup complete. ENV={getattr(settings, 'ENVIRONMENT', 'unknown')}")

# ---------------------------------------------------------------------------
# Root / Health
# ---------------------------------------------------------------------------
@app.get("/")
async def root():
    return {
        "message": "SolarDevis Pro API is running",
        "version": "2.0.0",
        "environment": getattr(settings, "ENVIRONMENT", "unknown"),
        "docs": "/docs" if getattr(settings, "DEBUG", False) else None,
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": getattr(settings, "ENVIRONMENT", "unknown"),
        "services": {
            "analysis": "enabled" if get_analysis_service().enabled else "disabled",
            "solar_api": "enabled" if get_solar_service().enabled else "disabled",
        },
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
