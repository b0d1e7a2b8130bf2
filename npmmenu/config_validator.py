"""Configuration validation for npm-menu."""

import shlex
from typing import Any, Dict, List


class ConfigValidator:
    """Validates the ``npm`` section of an npm-menu configuration."""

    def __init__(self):
        self.string_settings = {
            "tool",
            "global_args",
            "verb_args",
            "install_destination",
            "manifest_name",
            "lock_file",
            "modules_dir",
        }
        self.optional_string_settings = {"log_dir"}

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """Validate complete configuration.

        Args:
            config: Configuration dictionary

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if "npm" not in config:
            errors.append("Missing 'npm' section in configuration")
            return errors

        npm_config = config["npm"]
        if not isinstance(npm_config, dict):
            errors.append("'npm' section must be a mapping")
            return errors

        errors.extend(self.validate_strings(npm_config))
        errors.extend(self.validate_shell_arguments(npm_config))
        errors.extend(self.validate_list_depth(npm_config.get("list_depth", 0)))

        if "raw_args" in npm_config and not isinstance(npm_config["raw_args"], bool):
            errors.append("'raw_args' must be boolean")

        if not npm_config.get("tool"):
            errors.append("'tool' must not be empty")

        return errors

    def validate_strings(self, npm_config: Dict[str, Any]) -> List[str]:
        """Validate the free-form string settings.

        ``install_destination`` is only type-checked here; its value is
        checked when the configuration is materialised.
        """
        errors = []

        for key in sorted(self.string_settings):
            value = npm_config.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"'{key}' must be a string, got {type(value).__name__}")

        for key in sorted(self.optional_string_settings):
            value = npm_config.get(key)
            if value is not None and not isinstance(value, str):
                errors.append(f"'{key}' must be a string or null")

        return errors

    def validate_shell_arguments(self, npm_config: Dict[str, Any]) -> List[str]:
        """Check that the free-form argument strings can be tokenised."""
        errors = []
        for key in ("global_args", "verb_args"):
            value = npm_config.get(key)
            if not isinstance(value, str):
                continue
            try:
                shlex.split(value)
            except ValueError as e:
                errors.append(f"'{key}' is not a valid argument string: {e}")
        return errors

    def validate_list_depth(self, depth: Any) -> List[str]:
        errors = []
        # bool is an int subclass
        if isinstance(depth, bool) or not isinstance(depth, int):
            errors.append("'list_depth' must be an integer")
        elif depth < 0:
            errors.append(f"'list_depth' must not be negative, got {depth}")
        return errors
