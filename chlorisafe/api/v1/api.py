from fastapi import APIRouter

from chlorisafe.api.v1.endpoints import disinfection, health

api_router = APIRouter()

# ==============================================================================
# 1. Core Engine
# ==============================================================================
api_router.include_router(
    disinfection.router, prefix="/disinfection", tags=["Disinfection"]
)

# ==============================================================================
# 2. System
# ==============================================================================
api_router.include_router(health.router, tags=["Health"])
