"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_checkout: Rate limit for the checkout endpoint.
        stock_service_url: Base URL of the stock/catalog service.
        transaction_service_url: Base URL of the transaction ledger service.
        http_timeout_seconds: Timeout for calls to external services.
        jwt_secret: Secret used to verify bearer tokens.
        jwt_algorithm: Signing algorithm of bearer tokens.
        jwt_identity_claim: Token claim holding the caller's identity.
        max_articles_per_category: Category-diversity limit of a cart.
        restock_interval_days: Days until the next stock replenishment.

    Database settings default to a local Postgres built from the
    postgres_* values unless `DATABASE_URL` is set explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Shopping Cart"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_checkout: str = "10/minute"

    # Cart persistence
    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "shopping_cart"

    # External services
    stock_service_url: str = "http://localhost:8081"
    transaction_service_url: str = "http://localhost:8082"
    http_timeout_seconds: float = 5.0

    # Authentication
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_identity_claim: str = "sub"

    # Cart rules
    max_articles_per_category: int = 3
    restock_interval_days: int = 30

    def get_database_url(self) -> str:
        """Return the effective SQLAlchemy DSN for the cart store.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


settings = Settings()
