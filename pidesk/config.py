"""
Configuration management for PiDesk.
Loads YAML configuration files.
"""

import yaml
import os
from typing import Any, Dict
import logging


class Config:
    """
    Application configuration manager
    """

    def __init__(self, config_path: str):
        """
        Load configuration from YAML file

        Args:
            config_path: Path to config.yaml
        """
        self.logger = logging.getLogger(__name__)

        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_dir = os.path.dirname(os.path.abspath(config_path))
        with open(config_path, 'r') as f:
            self._config = yaml.safe_load(f) or {}

        # Expand environment variables in paths
        self._expand_paths(self._config)

        self.logger.info(f"Configuration loaded from {config_path}")

    def _expand_paths(self, config: Dict):
        """Recursively expand environment variables in path strings"""
        for key, value in config.items():
            if isinstance(value, dict):
                self._expand_paths(value)
            elif isinstance(value, str) and ('$' in value or '~' in value):
                config[key] = os.path.expandvars(os.path.expanduser(value))

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation

        Args:
            path: Configuration path (e.g., 'timer.tick_interval')
            default: Default value if path doesn't exist

        Returns:
            Configuration value
        """
        value = self._config

        for key in path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def resolve_path(self, path: str) -> str:
        """Resolve a path relative to the directory holding the config file"""
        if os.path.isabs(path):
            return path
        return os.path.join(self.config_dir, path)
