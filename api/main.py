#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for the resume builder.

App creation, middleware, router includes and startup events.

Usage:
    uvicorn api.main:app --host 0.0.0.0 --port 8000
"""

from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from config.logging_config import get_logger, setup_logging
from config.settings import settings

setup_logging(
    level=settings.log_level,
    log_file=settings.logs_dir / "resume_builder.log",
    json_format=settings.log_json,
)
logger = get_logger(__name__)

from api.auth_router import router as auth_router
from api.layouts_router import router as layouts_router
from api.rate_limiter import limiter, rate_limit_exceeded_handler
from api.resume_router import router as resume_router
from api.routes.health import router as health_router
from api.skills_router import router as skills_router


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Resume versions, six HTML layouts, vector and raster PDF export",
    version=settings.app_version
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# CORS middleware: origins from settings or dev defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(resume_router)
app.include_router(skills_router)
app.include_router(layouts_router)

# =============================================================================
# Startup Events
# =============================================================================

@app.on_event("startup")
async def startup_seed_skills():
    """Seed the skill catalog into an empty database."""
    try:
        from core.skills import get_skill_service
        added = get_skill_service().seed_if_empty()
        if added:
            logger.info(f"Startup: Seeded {added} catalog skills")
    except Exception as e:
        logger.error(f"Startup: Failed to seed skill catalog: {e}", exc_info=True)


@app.on_event("startup")
async def startup_report_storage():
    if settings.storage_configured:
        logger.info(f"Startup: PDF uploads go to bucket {settings.gcp_bucket_name}")
    else:
        logger.warning("Startup: Storage not configured, PDF uploads are disabled")


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings.print_config()
    logger.info("Starting Resume Builder API Server...")
    logger.info("API Documentation: http://localhost:8000/docs")

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
