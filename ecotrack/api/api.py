from fastapi import APIRouter

from ecotrack.api.endpoints import analysis, emissions, grades, health, travel, vehicles

# Create API router
api_router = APIRouter()

# Include endpoint routers with appropriate prefixes and tags
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(emissions.router, prefix="/api/emissions", tags=["emissions"])
api_router.include_router(travel.router, prefix="/travel", tags=["travel"])
api_router.include_router(vehicles.router, prefix="/vehicle", tags=["vehicles"])
api_router.include_router(grades.router, prefix="/grades", tags=["grades"])
api_router.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
