"""Configuration management for the data-access layer."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str | None = Field(default=None)
    db_driver: str = Field(default="mysql+pymysql")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=3306)
    db_user: str = Field(default="root")
    db_password: str = Field(default="")
    db_name: str = Field(default="gratiday")
    db_charset: str = Field(default="utf8mb4")
    db_timezone: str = Field(default="+00:00")

    # Pool
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_timeout: int = Field(default=30)
    db_connect_timeout: int = Field(default=10)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production does not rely on development defaults."""
        if self.is_production:
            if self.database_url is None:
                if self.db_host == "localhost":
                    raise ValueError("DB_HOST should not use localhost in production")
                if not self.db_password:
                    raise ValueError("DB_PASSWORD must be set in production")
            elif "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
        return self

    @property
    def sqlalchemy_url(self) -> str | URL:
        """URL handed to SQLAlchemy: the explicit DATABASE_URL or one built from the parts."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
