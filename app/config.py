"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="SmartPantry", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings - profile, pantry and meal plan store
    database_url: str = Field(
        default="sqlite:///./smartpantry.db",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8081"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="SmartPantry API", description="API documentation title"
    )
    api_description: str = Field(
        default="Nutrition targets, meal policies and pantry-first meal planning",
        description="API documentation description",
    )

    # Cache settings
    cache_default_ttl_ms: int = Field(
        default=3_600_000, ge=0, description="Default cache entry lifetime (ms)"
    )

    # Recipe API providers
    spoonacular_api_key: Optional[str] = Field(
        default=None, description="Spoonacular API key"
    )
    spoonacular_base_url: str = Field(
        default="https://api.spoonacular.com", description="Spoonacular base URL"
    )
    themealdb_api_key: str = Field(
        default="1", description="TheMealDB API key (public test key is '1')"
    )
    themealdb_base_url: str = Field(
        default="https://www.themealdb.com/api/json/v1",
        description="TheMealDB base URL (API key is appended as a path segment)",
    )
    recipe_api_timeout_sec: float = Field(
        default=15.0, gt=0, description="HTTP timeout for recipe API calls"
    )

    # Meal policy
    breakfast_seafood_default: str = Field(
        default="contextual",
        description="Breakfast seafood mode: allow, avoid or contextual",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("breakfast_seafood_default", mode="before")
    @classmethod
    def validate_breakfast_seafood_default(cls, v):
        value = str(v or "contextual").lower()
        if value not in {"allow", "avoid", "contextual"}:
            raise ValueError(
                "breakfast_seafood_default must be one of allow, avoid, contextual"
            )
        return value

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
