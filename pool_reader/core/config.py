"""
Configuration management for the Solana Pool Reader.
Uses pydantic-settings for environment variable management.
"""

from typing import Dict
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared_models.pool_data import PoolProvider


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application metadata
    app_name: str = Field(default="Solana Pool Reader")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server bind address
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Outbound provider requests
    api_timeout_secs: int = Field(default=10)
    user_agent: str = Field(default="Solana-Pool-Reader/1.0")

    # Provider base URLs
    raydium_api_url: str = Field(default="https://api-v3.raydium.io")
    orca_api_url: str = Field(default="https://api.orca.so")
    meteora_api_url: str = Field(default="https://dlmm-api.meteora.ag")

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('port')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is a usable TCP port."""
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator('api_timeout_secs')
    @classmethod
    def validate_api_timeout(cls, v: int) -> int:
        """Validate that the provider timeout is positive."""
        if v <= 0:
            raise ValueError("api_timeout_secs must be positive")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = {'json', 'text'}
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {', '.join(valid_formats)}")
        return v.lower()

    def get_provider_urls(self) -> Dict[PoolProvider, str]:
        """Get provider base URLs keyed by provider, without trailing slashes."""
        return {
            PoolProvider.RAYDIUM: self.raydium_api_url.rstrip('/'),
            PoolProvider.ORCA: self.orca_api_url.rstrip('/'),
            PoolProvider.METEORA: self.meteora_api_url.rstrip('/'),
        }

    def get_bind_address(self) -> str:
        """Get the server bind address as host:port."""
        return f"{self.host}:{self.port}"


# Global settings instance
settings = Settings()
