"""
Configuration loader for the Rackspace cloud client.
Supports per-region environment files and configuration validation.
"""

import json
import os
import logging
from pathlib import Path
from typing import Any
from dotenv import load_dotenv

from ..api_client import DEFAULT_MAX_PAGES

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and validates configuration from JSON files."""

    def __init__(self, config_file: str = "configs/config.json", environment: str = None,
                 base_path: Path = None):
        """
        Initialize config loader.

        Args:
            config_file: Path to configuration file; relative paths resolve against base_path
            environment: Environment / region ("dfw", "ord", "iad", "lon", ...)
            base_path: Directory holding configs/ and envs/ (defaults to project root)
        """
        self.config_file = config_file
        self.config = {}
        self.environment = environment or "dfw"
        self.base_path = Path(base_path) if base_path else Path(__file__).parent.parent.parent
        self._load_environment_config(explicit=environment is not None)
        self._load_config()
        self._validate_config()

    def _load_environment_config(self, explicit: bool = False):
        """Load environment-specific configuration"""
        # The main .env may name the environment via RAX_ENVIRONMENT
        main_env_path = self.base_path / 'envs' / '.env'
        if main_env_path.exists():
            load_dotenv(main_env_path, override=False)
            logger.debug("[OK] Loaded main env config from %s", main_env_path)

        env_from_vars = os.getenv('RAX_ENVIRONMENT')
        if env_from_vars and not explicit:
            self.environment = env_from_vars
            logger.debug("[OK] Environment set to: %s", self.environment)

        env_file_path = self.base_path / 'envs' / f'.env.{self.environment}'
        if env_file_path.exists():
            load_dotenv(env_file_path, override=True)
            logger.debug("[OK] Loaded %s specific config from %s", self.environment, env_file_path)

    def _load_config(self):
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.is_absolute():
            config_path = self.base_path / config_path
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self.config = json.load(f)
            logger.debug("Loaded configuration from: %s", config_path)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file {config_path} not found")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")

    def _validate_config(self):
        """Validate required configuration sections."""
        required_sections = ["http", "identity", "pagination", "environment"]

        for section in required_sections:
            if section not in self.config:
                raise ValueError(f"Missing required configuration section: {section}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path (e.g., "http.connection_timeout")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key_path: str, value: Any):
        """Override a configuration value using dot notation, creating sections as needed."""
        *parents, last = key_path.split('.')
        section = self.config
        for key in parents:
            section = section.setdefault(key, {})
        section[last] = value

    def get_auth_url(self) -> str:
        return self.get("identity.auth_url", "https://identity.api.rackspacecloud.com/v2.0")

    def get_max_pages(self) -> int:
        return self.get("pagination.max_pages", DEFAULT_MAX_PAGES)

    def get_environment(self) -> str:
        """Get current environment."""
        return self.environment

    def is_debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.get("environment.debug", False)

    def get_output_directory(self) -> str:
        """Get snapshot output directory for the inventory runner."""
        return self.get("inventory.output_directory", "inventory")

    def setup_logging(self):
        """Setup logging based on configuration."""
        log_level = self.get("environment.log_level", "INFO")
        debug = self.is_debug_mode()

        level = getattr(logging, log_level.upper(), logging.INFO)
        if debug:
            level = logging.DEBUG

        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s" if debug else "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            handlers=[logging.StreamHandler()]
        )

        if debug:
            logger.debug("Debug mode enabled")
            logger.debug("Max pages per listing: %s", self.get_max_pages())
            logger.debug("Retries on 429/503: %s", self.get("http.max_retries", 0))


# Convenience function for quick config loading
def load_config(config_file: str = "configs/config.json", environment: str = None) -> ConfigLoader:
    """
    Load configuration from specified file.

    Args:
        config_file: Path to configuration file
        environment: Environment / region

    Returns:
        ConfigLoader instance
    """
    return ConfigLoader(config_file=config_file, environment=environment)
