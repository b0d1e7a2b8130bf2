"""Packaged default configuration for npm-menu."""
