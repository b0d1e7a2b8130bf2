"""
Exception hierarchy for npm-menu.

Every error detected before the package manager is launched is raised as one
of these classes and aborts the triggering action. Failures inside the
launched ``npm`` process are never translated: its own output is the feedback.

Each exception includes:
- Clear error message
- The file or value it concerns
- Suggested user action
- Original exception preserved for debugging
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union


class NpmMenuError(Exception):
    """
    Base exception for all npm-menu errors.

    The CLI catches this class, prints the message and exits with status 1.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        suggested_action: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize NpmMenuError.

        Args:
            message: Human-readable error message
            path: File or directory the error concerns
            suggested_action: Suggested action for the user to resolve the issue
            original_exception: The original exception that was caught
        """
        self.message = message
        self.path = path
        self.suggested_action = suggested_action
        self.original_exception = original_exception

        error_parts = [message]

        if path:
            error_parts.append(f"Path: {path}")

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class ManifestNotFoundError(NpmMenuError):
    """
    Raised when no manifest exists in the start directory or any ancestor.

    This is the precondition check of every action that works on a project.
    """

    def __init__(self, start_dir: Union[str, Path], manifest_name: str = "package.json"):
        self.start_dir = start_dir
        self.manifest_name = manifest_name

        super().__init__(
            message=f"No {manifest_name} found in {start_dir} or any parent directory",
            suggested_action="Run the command inside an npm project or use 'npm-menu init'",
        )


class ManifestParseError(NpmMenuError):
    """Raised when the manifest exists but is not a valid JSON object."""

    def __init__(
        self,
        path: Union[str, Path],
        reason: str = "Manifest is not valid JSON",
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=reason,
            path=path,
            original_exception=original_exception,
        )


class UnknownConfigValueError(NpmMenuError):
    """
    Raised when an enumerated setting holds a value outside its allowed set.

    This is a programming or configuration defect; it is never defaulted.
    """

    def __init__(self, key: str, value: object, allowed: Iterable[str]):
        self.key = key
        self.value = value
        self.allowed = list(allowed)

        super().__init__(
            message=f"Unknown value {value!r} for '{key}'",
            suggested_action=f"Use one of: {', '.join(self.allowed)}",
        )


class ConfigError(NpmMenuError):
    """Raised when a configuration file fails validation."""

    def __init__(
        self,
        errors: List[str],
        path: Optional[Union[str, Path]] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.errors = errors

        super().__init__(
            message="Invalid configuration: " + "; ".join(errors),
            path=path,
            original_exception=original_exception,
        )


class PackageManagerNotFoundError(NpmMenuError):
    """Raised when the configured package manager binary cannot be executed."""

    def __init__(self, tool: str, original_exception: Optional[Exception] = None):
        self.tool = tool

        super().__init__(
            message=f"Package manager '{tool}' could not be started",
            suggested_action=f"Install {tool} or set 'tool' in npm-menu.config.yaml",
            original_exception=original_exception,
        )


__all__ = [
    "NpmMenuError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "UnknownConfigValueError",
    "ConfigError",
    "PackageManagerNotFoundError",
]
