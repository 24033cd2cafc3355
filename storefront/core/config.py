"""
Application configuration settings
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    ALLOWED_HOSTS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Public origin of the storefront, used to build absolute sitemap URLs
    SITE_URL: str = "https://beautydiscount.ma"

    # Firestore Configuration
    FIRESTORE_PROJECT_ID: Optional[str] = None
    FIRESTORE_DATABASE: str = "(default)"

    # Sitemap
    SITEMAP_REVALIDATE_SECONDS: int = 43200  # 12 hours
    SITEMAP_RETRY_SECONDS: int = 60  # after a failed rebuild
    SITEMAP_OUTPUT_PATH: str = "public/sitemap.xml"

    # Redis Configuration (Celery broker)
    REDIS_URL: str = "redis://localhost:6379"

    # Monitoring and Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()

# Validate required settings in production
if settings.ENVIRONMENT == "production":
    required_settings = [
        "FIRESTORE_PROJECT_ID",
    ]

    missing_settings = []
    for setting in required_settings:
        if not getattr(settings, setting):
            missing_settings.append(setting)

    if missing_settings:
        raise ValueError(f"Missing required production settings: {', '.join(missing_settings)}")

# Sitemap URLs are built as f"{SITE_URL}{path}"
SITE_URL = settings.SITE_URL.rstrip("/")
