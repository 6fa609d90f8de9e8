import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecotrack.api.api import api_router
from ecotrack.core.config import settings
from ecotrack.core.exceptions import EcoTrackError

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="EcoTrack API for trip logging and CO2 emission tracking",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
)

# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(EcoTrackError)
async def ecotrack_error_handler(request: Request, exc: EcoTrackError) -> JSONResponse:
    """Render domain errors as {"message": ...} with their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

# Include API router
app.include_router(api_router)

@app.get("/")
async def root():
    """Root endpoint with basic service information."""
    return {
        "message": "Welcome to EcoTrack API",
        "version": "0.1.0",
        "docs_url": f"{settings.API_V1_STR}/docs",
    }

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting EcoTrack API...")
    # Tables are created by setup_db.py and reference data by scripts/seed_emission_factors.py

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ecotrack.main:app", host="0.0.0.0", port=8000, reload=True)
