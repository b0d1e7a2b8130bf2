"""
Utility modules for npm-menu.

This package contains shared utility classes used throughout the npm-menu
codebase, chiefly the exception hierarchy surfaced by the CLI.
"""

from npmmenu.utils.exceptions import (
    ConfigError,
    ManifestNotFoundError,
    ManifestParseError,
    NpmMenuError,
    PackageManagerNotFoundError,
    UnknownConfigValueError,
)

__all__ = [
    "NpmMenuError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "UnknownConfigValueError",
    "ConfigError",
    "PackageManagerNotFoundError",
]
