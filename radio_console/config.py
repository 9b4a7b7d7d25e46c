"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Radio Console"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Store distant (API REST type PostgREST) / Remote store (PostgREST-style REST API)
    STORE_URL: str = "http://localhost:54321"
    STORE_API_KEY: str = "change-me"
    REQUEST_TIMEOUT_SECONDS: float = 15.0

    # Cache des requetes / Query cache
    CACHE_STALE_SECONDS: float = 300.0
    QUERY_RETRY: int = 2
    MUTATION_RETRY: int = 1
    RETRY_DELAY_SECONDS: float = 1.0

    # Validation d'unicite (debounce) / Uniqueness validation (debounce)
    VALIDATION_DEBOUNCE_MS: int = 500

    # Tableau de bord / Dashboard
    RECENT_LIMIT: int = 5

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rate Limiting
    RATE_LIMIT_IMPORT: str = "5/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
