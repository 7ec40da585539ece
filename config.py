"""
Configuration management for the YouTube MP3 Converter

Using pydantic-settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the YTMP3_ prefix.
Maintains backward compatibility with the plain API_KEY, API_HOST, PORT and
APP_ENV variable names.
"""

from typing import Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.convert import ApiCredentials, DEFAULT_ENDPOINT_PATH


class ConverterConfig(BaseSettings):
    """Configuration for the RapidAPI conversion service"""

    model_config = SettingsConfigDict(
        env_prefix='YTMP3_CONVERTER_',
        env_file='.env',
        env_file_encoding='utf-8',
        populate_by_name=True,
        extra='ignore'
    )

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('YTMP3_CONVERTER_API_KEY', 'API_KEY'),
        description="RapidAPI key for the conversion service"
    )

    api_host: str = Field(
        default="youtube-mp36.p.rapidapi.com",
        validation_alias=AliasChoices('YTMP3_CONVERTER_API_HOST', 'API_HOST'),
        description="RapidAPI host of the conversion service"
    )

    endpoint_path: str = Field(
        default=DEFAULT_ENDPOINT_PATH,
        description="Path of the conversion endpoint on the API host"
    )

    @field_validator('endpoint_path')
    @classmethod
    def validate_endpoint_path(cls, v):
        if not v.startswith('/'):
            raise ValueError("Endpoint path must start with '/'")
        return v

    def credentials(self) -> Optional[ApiCredentials]:
        """Credentials for the handler, or None when no API key is set"""
        if not self.api_key:
            return None
        return ApiCredentials(api_key=self.api_key, api_host=self.api_host)


class ServerConfig(BaseSettings):
    """Configuration for the web server"""

    model_config = SettingsConfigDict(
        env_prefix='YTMP3_SERVER_',
        env_file='.env',
        env_file_encoding='utf-8',
        populate_by_name=True,
        extra='ignore'
    )

    port: int = Field(
        default=3000,
        validation_alias=AliasChoices('YTMP3_SERVER_PORT', 'PORT'),
        description="Listening port",
        ge=1,
        le=65535
    )

    host: str = Field(
        default="0.0.0.0",
        description="Listening interface"
    )

    environment: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('YTMP3_SERVER_ENVIRONMENT', 'APP_ENV'),
        description="Deployment environment name, e.g. development or production"
    )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


class AppConfig(BaseSettings):
    """Main application configuration"""

    model_config = SettingsConfigDict(
        env_prefix='YTMP3_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # Ignore unknown environment variables
    )

    # Sub-configurations
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    # Global settings
    debug: bool = Field(
        default=False,
        description="Enable debug logging"
    )


def load_config() -> AppConfig:
    """Read configuration from the environment once, at startup"""
    return AppConfig()
