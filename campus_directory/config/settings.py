import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local'
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 3000))

    # Storage settings
    STORAGE_BACKEND: str = os.getenv('STORAGE_BACKEND', 'json')  # "json" or "hosted"
    DATA_FILE: str = os.getenv('DATA_FILE', 'data/db.json')

    # Hosted document database (REST)
    HOSTED_DB_URL: str = os.getenv('HOSTED_DB_URL', '')
    HOSTED_DB_AUTH: str = os.getenv('HOSTED_DB_AUTH', '')
    HOSTED_DB_TIMEOUT: float = float(os.getenv('HOSTED_DB_TIMEOUT', 10.0))
    HOSTED_DB_MAX_RETRIES: int = int(os.getenv('HOSTED_DB_MAX_RETRIES', 3))
    HOSTED_DB_BACKOFF: float = float(os.getenv('HOSTED_DB_BACKOFF', 0.5))  # seconds, doubled per attempt

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "Campus Directory API"
    API_DESCRIPTION: str = "Departments, sections and students for the campus access apps"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    # Admin console
    ADMIN_API_URL: str = os.getenv('ADMIN_API_URL', 'http://localhost:3000')
    ADMIN_API_TIMEOUT: float = float(os.getenv('ADMIN_API_TIMEOUT', 15.0))

    class Config:
        env_file = env_file

settings = Settings()
