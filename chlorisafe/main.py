# chlorisafe/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from chlorisafe.core.config import settings
from chlorisafe.core.errors import register_exception_handlers
from chlorisafe.core.logger import setup_logging

from chlorisafe.api.v1.api import api_router


# ==============================================================================
# 1. Lifespan
# ==============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"ChloriSafe Ct API starting (env: {settings.APP_ENV})")

    yield

    logger.info("ChloriSafe Ct API shutting down")


# ==============================================================================
# 2. App
# ==============================================================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)

# ==============================================================================
# 3. Middleware (CORS)
# ==============================================================================
# all origins unless BACKEND_CORS_ORIGINS is set
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o).rstrip("/") for o in settings.BACKEND_CORS_ORIGINS] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==============================================================================
# 4. Routers
# ==============================================================================
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/", include_in_schema=False)
def root() -> Dict[str, Any]:
    return {
        "message": "Welcome to ChloriSafe Ct API",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "status": "running",
    }


@app.get("/health", include_in_schema=False)
def health_check():
    """Plain liveness check for load balancers."""
    return {"status": "ok"}
