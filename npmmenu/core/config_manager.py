"""
Configuration management for npm-menu.

Handles loading, merging, validation and discovery of configuration files
with single responsibility for config operations.
"""
import importlib.resources
import logging
import os
from typing import Optional

import yaml

from npmmenu.config_validator import ConfigValidator
from npmmenu.models import CommandConfig
from npmmenu.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "npm-menu.config.yaml"

ENV_OVERRIDES = {
    "NPM_MENU_GLOBAL_ARGS": "global_args",
    "NPM_MENU_VERB_ARGS": "verb_args",
}


class ConfigManager:
    """Manages npm-menu configuration loading and merging operations."""

    def __init__(self, validator: Optional[ConfigValidator] = None):
        self.validator = validator or ConfigValidator()

    def load_config(self, path: str) -> dict:
        """Load configuration from YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError([f"Cannot read configuration: {e}"], path=path, original_exception=e) from e

    def deep_merge(self, default: dict, user: dict) -> dict:
        """Deep merge user config into default config."""
        result = default.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def load_package_default_config(self) -> dict:
        """Load default config from package."""
        default_config_path = importlib.resources.files("npmmenu.config") / "default.yaml"
        with default_config_path.open("r") as f:
            return yaml.safe_load(f)

    def load_and_merge_config(self, user_config_path: str) -> dict:
        """Load user config and merge with package default."""
        default_config = self.load_package_default_config()
        user_config = self.load_config(user_config_path)
        if not isinstance(user_config, dict):
            raise ConfigError(["Top-level value must be a mapping"], path=user_config_path)
        return self.deep_merge(default_config, user_config)

    def discover_and_load_config(self, config_arg: Optional[str]) -> dict:
        """Discover config file with priority order."""

        # Priority 1: --config argument
        if config_arg:
            if os.path.exists(config_arg):
                logger.debug("Using config file %s", config_arg)
                return self.load_and_merge_config(config_arg)
            else:
                raise FileNotFoundError(f"Config file not found: {config_arg}")

        # Priority 2: npm-menu.config.yaml in current directory
        if os.path.exists(PROJECT_CONFIG_FILE):
            logger.debug("Using project config file %s", PROJECT_CONFIG_FILE)
            return self.load_and_merge_config(PROJECT_CONFIG_FILE)

        # Priority 3: Package default config
        return self.load_package_default_config()

    def apply_environment(self, config: dict) -> dict:
        """Apply NPM_MENU_* environment variables over the file settings."""
        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None:
                config.setdefault("npm", {})[key] = value
        return config

    def build_command_config(self, config_arg: Optional[str] = None, **overrides) -> CommandConfig:
        """Discover, merge, validate and materialise the command configuration.

        Keyword overrides (CLI options) win over files and environment; None
        values are ignored.
        """
        config = self.apply_environment(self.discover_and_load_config(config_arg))

        errors = self.validator.validate_config(config)
        if errors:
            raise ConfigError(errors, path=config_arg)

        command_config = CommandConfig.from_dict(config).with_overrides(**overrides)
        errors = self.validator.validate_shell_arguments(command_config.as_dict())
        if errors:
            raise ConfigError(errors, path=config_arg)
        return command_config
