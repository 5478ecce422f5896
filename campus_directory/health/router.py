import time
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from campus_directory.health.schemas import HealthResponse
from campus_directory.config.settings import settings
from campus_directory.database import get_store
from campus_directory.storage import DirectoryStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)

@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
def health_check(store: DirectoryStore = Depends(get_store)):
    """Health check endpoint to verify the API is running and the store is readable"""
    logger.info(f"Health check called - Environment: {settings.APP_ENV}")

    reachable = store.ping()
    response = {
        'status': 'healthy' if reachable else 'degraded',
        'environment': settings.APP_ENV,
        'storage': store.name,
        'timestamp': time.time()
    }

    if not reachable:
        logger.warning(f"Health check degraded: {store.name} store unreachable")
        return JSONResponse(content=response, status_code=503)
    return response
