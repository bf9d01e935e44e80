"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Places API (New)
    google_places_api_key: Optional[str] = None
    google_places_base_url: str = "https://places.googleapis.com/v1"
    google_places_timeout: float = 15.0

    # Search limits (the upstream caps a text search at 20 results)
    max_results_cap: int = 20
    default_search_radius: int = 5000

    # Bulk search throttling
    bulk_query_delay_seconds: float = 0.2
    bulk_max_queries: int = 10

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    api_reload: bool = True

    # CORS Configuration
    frontend_url: str = "http://localhost:5000"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
