"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "SalesGraph"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Document store
    mongo_uri: str = "mongodb://localhost:27017/salesdb"
    mongo_default_database: str = "salesdb"
    mongo_server_selection_timeout_ms: int = 5000

    # Side cache
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout_seconds: float = 5.0
    cache_ttl_seconds: int = 300  # 5 minutes

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = 4000
    graphql_path: str = "/graphql"

    # Bulk import
    import_data_dir: str = "./csv_data"

    @field_validator("mongo_uri")
    @classmethod
    def validate_mongo_uri(cls, v: str) -> str:
        """Reject an empty connection string.

        Raises:
            ValueError: If the URI is blank or not a MongoDB URI.
        """
        v = v.strip()
        if not v:
            raise ValueError("MongoDB connection string is missing. Set MONGO_URI in your .env file.")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(f"Invalid MongoDB connection string '{v}'")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        """Cache entries must expire."""
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
