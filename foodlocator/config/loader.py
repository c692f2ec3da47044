"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment, settings_from_env_file

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            logger.info("Loading settings from %s", env_file_path)
            return settings_from_env_file(str(env_file_path), environment=env)

        logger.warning(
            "Environment file %s not found, using default settings", env_file_path
        )
        return settings_from_env_file(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            env_name = env_file.name.replace(".env.", "")
            if env_name in {e.value for e in Environment}:
                env_files.append(env_name)
        return sorted(env_files)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()
        radius = defaults.foursquare.radius_m if defaults.foursquare.radius_m is not None else ""

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_JSON={'false' if env == Environment.DEVELOPMENT else 'true'}

# Geocoder (Nominatim) Configuration
GEOCODER_BASE_URL={defaults.geocoder.base_url}
GEOCODER_USER_AGENT={defaults.geocoder.user_agent}
GEOCODER_TIMEOUT_SECONDS={defaults.geocoder.timeout_seconds}

# Foursquare Places Configuration
FOURSQUARE_API_KEY=your-foursquare-api-key
FOURSQUARE_QUERY={defaults.foursquare.query}
FOURSQUARE_RESULT_LIMIT={defaults.foursquare.result_limit}
FOURSQUARE_RADIUS_M={radius}
FOURSQUARE_TIMEOUT_SECONDS={defaults.foursquare.timeout_seconds}

# Search Configuration
SEARCH_DEFAULT_PLACE_NAME={defaults.search.default_place_name}
SEARCH_SEARCH_ON_STARTUP=true

# Map Configuration
MAP_ZOOM={defaults.map.zoom}
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
