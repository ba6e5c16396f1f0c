"""
RTO API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Database connection
- Credential encryption key check
- CORS middleware
- API routing
- Health check endpoints
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rto_api.api import api_router
from rto_api.core.config import settings
from rto_api.core.database import close_db, init_db
from rto_api.core.security import check_secret_cipher_configuration


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Credential encryption key validation (fatal in production)
    - Database connection
    """
    # Startup
    print(f"Starting RTO API in {settings.python_env} mode...")

    # A bad key must never degrade to storing credentials unencrypted
    if check_secret_cipher_configuration():
        print("[OK] Credential encryption key configured")
    else:
        print("[FAIL] Credential encryption key missing or too short")

    try:
        await init_db()
        print("[OK] Database connected")
    except Exception as e:
        print(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    print("Shutting down RTO API...")
    await close_db()
    print("[OK] Cleanup complete")


app = FastAPI(
    title="RTO API",
    description="RTO case management API - identifier integrity and credential protection",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api/v1")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to RTO API",
        "status": "running",
        "environment": settings.python_env,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {"status": "ready"}
