"""
User configuration management for blockhasher.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.blockhasher/config.json)
4. Default values from config.py (lowest priority)

The hashing core never reads this module; the CLI and other front ends
resolve values here and pass them in explicitly.

Example config.json:
{
    "default_bits": 16,
    "default_method": "quick",
    "default_workers": 4,
    "max_image_pixels": 500000000,
    "verbose": false
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_BITS,
    DEFAULT_MAX_IMAGE_PIXELS,
    DEFAULT_METHOD,
    DEFAULT_WORKERS,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    The config file is loaded lazily and cached until reload().
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('BLOCKHASHER_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and booleans
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_bits(self) -> int:
        """Block grid size used when none is given."""
        return int(self.get('default_bits', default=DEFAULT_BITS, env_var='BLOCKHASHER_BITS'))

    @property
    def default_method(self) -> str:
        """Block-value method ('quick' or 'precise')."""
        return str(self.get('default_method', default=DEFAULT_METHOD, env_var='BLOCKHASHER_METHOD'))

    @property
    def default_workers(self) -> int:
        """Number of parallel workers for batch hashing."""
        return int(self.get('default_workers', default=DEFAULT_WORKERS, env_var='BLOCKHASHER_WORKERS'))

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        return int(self.get(
            'max_image_pixels',
            default=DEFAULT_MAX_IMAGE_PIXELS,
            env_var='BLOCKHASHER_MAX_PIXELS'
        ))

    @property
    def verbose(self) -> bool:
        """Emit advisory notices (e.g. skipped extension validation) as warnings."""
        value = self.get('verbose', default=False, env_var='BLOCKHASHER_VERBOSE')
        if isinstance(value, str):
            return value.strip().lower() in ('1', 'true', 'yes', 'on')
        return bool(value)

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "blockhasher user configuration",
            "default_bits": DEFAULT_BITS,
            "default_method": DEFAULT_METHOD,
            "default_workers": DEFAULT_WORKERS,
            "max_image_pixels": DEFAULT_MAX_IMAGE_PIXELS,
            "verbose": False,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
