"""
Application entry point.

``app`` depends on ``APP_ENV``. Outside ``development`` (the default is
``production``) it is a Mangum handler for AWS Lambda and cannot be served by
uvicorn. To run the API locally either set ``APP_ENV=development`` before
``uvicorn campus_directory.main:app``, or run ``python -m campus_directory.main``,
which always serves the plain FastAPI app.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from campus_directory.auth import router as auth_router
from campus_directory.departments import router as departments_router
from campus_directory.directory import router as directory_router
from campus_directory.health import router as health_router
from campus_directory.sections import router as sections_router
from campus_directory.students import router as students_router
from campus_directory.config.settings import settings
from campus_directory.errors import register_exception_handlers
from mangum import Mangum

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)


def _allowed_origins() -> list:
    allowed_origins = [
        "http://localhost:8100",  # Ionic dev server
        "http://localhost:4200",  # Angular dev server
        "http://localhost:7860",  # Admin console
    ]

    frontend_url = settings.FRONTEND_URL
    if frontend_url:
        allowed_origins.append(frontend_url)
        if frontend_url.endswith("/"):
            allowed_origins.append(frontend_url.rstrip("/"))

    if settings.ALLOW_ALL_ORIGINS:
        allowed_origins = ["*"]
    return allowed_origins


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}, storage: {settings.STORAGE_BACKEND}")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL
    )

    allowed_origins = _allowed_origins()
    logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(departments_router.router)
    app.include_router(sections_router.router)
    app.include_router(students_router.router)
    app.include_router(directory_router.router)
    app.include_router(auth_router.router)
    app.include_router(health_router.router)

    logger.info("FastAPI app created successfully")
    return app

_fastapi_app = create_app()

# Conditionally wrap with Mangum for serverless deployment
if settings.APP_ENV != 'development':
    logger.info("Wrapping FastAPI app with Mangum for Lambda")
    app = Mangum(_fastapi_app)
else:
    app = _fastapi_app

# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(_fastapi_app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
