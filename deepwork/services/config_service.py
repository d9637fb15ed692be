"""Configuration loading service.

Loads config.yaml and validates it against AppConfig.
"""

import logging
from pathlib import Path

import yaml

from deepwork.models.config import AppConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and saving application configuration.

    A missing, unreadable or invalid file never stops startup; defaults are
    used instead.
    """

    def __init__(self, config_path: str | Path = "config.yaml"):
        """Initialize the config service.

        Args:
            config_path: Path to the config file.
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load and validate configuration.

        Returns:
            Validated AppConfig instance.
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            self._config = AppConfig()
            return self._config

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except Exception as e:
            logger.warning(f"Error reading config file: {e}, using defaults")
            self._config = AppConfig()
            return self._config

        if not isinstance(raw_config, dict):
            logger.warning("Config file is not a mapping, using defaults")
            self._config = AppConfig()
            return self._config

        try:
            self._config = AppConfig(**raw_config)
        except Exception as e:
            logger.warning(f"Config validation error: {e}, using defaults")
            self._config = AppConfig()

        return self._config

    def get_config(self) -> AppConfig:
        """Get the current configuration, loading it on first use."""
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    def save(self, config: AppConfig | None = None) -> bool:
        """Save configuration to disk.

        Args:
            config: Config to save. Uses current config if not provided.

        Returns:
            True if save succeeded.
        """
        config = config or self._config
        if config is None:
            return False

        try:
            with open(self.config_path, "w") as f:
                yaml.dump(
                    config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False
                )
            self._config = config
            return True
        except Exception as e:
            logger.error(f"Error saving config: {e}")
            return False


# Module-level singleton
_config_service: ConfigService | None = None


def get_config_service(config_path: str | Path = "config.yaml") -> ConfigService:
    """Get the global config service instance.

    Args:
        config_path: Path to config file (only used on first call).
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (for testing)."""
    global _config_service
    _config_service = None
