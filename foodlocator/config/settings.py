"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GeocoderSettings(BaseSettings):
    """Nominatim geocoding configuration"""

    base_url: str = Field(default="https://nominatim.openstreetmap.org")
    user_agent: str = Field(
        default="HealthyFoodLocator/1.0 (contact: admin@example.com)",
        description="Descriptive client identifier required by the Nominatim usage policy"
    )
    referer: Optional[str] = Field(default=None)
    timeout_seconds: float = Field(default=10.0, gt=0, le=60)

    model_config = {
        "env_prefix": "GEOCODER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class FoursquareSettings(BaseSettings):
    """Foursquare Places API configuration"""

    api_key: Optional[str] = Field(
        default=None,
        description="Foursquare Places API key sent as the Authorization header"
    )
    api_url: str = Field(default="https://api.foursquare.com/v3")
    query: str = Field(default="healthy food")
    result_limit: int = Field(default=10, ge=1, le=50)
    radius_m: Optional[int] = Field(
        default=2000,
        ge=1,
        le=100000,
        description="Search radius in meters; null uses the service default"
    )
    detail_fields: str = Field(default="photos,rating")
    timeout_seconds: float = Field(default=10.0, gt=0, le=60)

    model_config = {
        "env_prefix": "FOURSQUARE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SearchSettings(BaseSettings):
    """Search orchestration configuration"""

    default_place_name: str = Field(default="Sukabumi, Indonesia")
    search_on_startup: bool = Field(default=True)

    model_config = {
        "env_prefix": "SEARCH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class MapSettings(BaseSettings):
    """Map view configuration handed to the client-side map widget"""

    zoom: int = Field(default=13, ge=0, le=19)
    tile_url: str = Field(default="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png")
    attribution: str = Field(default="&copy; OpenStreetMap contributors")
    user_marker_label: str = Field(default="Your Location")

    model_config = {
        "env_prefix": "MAP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {
        "env_prefix": "SECURITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Healthy Food Locator")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_json: bool = Field(default=True)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)
    foursquare: FoursquareSettings = Field(default_factory=FoursquareSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    map: MapSettings = Field(default_factory=MapSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def settings_from_env_file(env_file: Optional[str] = None, **overrides: Any) -> Settings:
    """
    Build settings with every group reading the same env file.

    Nested groups are separate ``BaseSettings`` with their own prefixes, so
    the file has to be handed to each of them as well as to the top level.
    """
    if env_file is None:
        return Settings(**overrides)

    groups = {
        "geocoder": GeocoderSettings,
        "foursquare": FoursquareSettings,
        "search": SearchSettings,
        "map": MapSettings,
        "security": SecuritySettings,
    }
    for name, group in groups.items():
        overrides.setdefault(name, group(_env_file=env_file))
    return Settings(_env_file=env_file, **overrides)
