"""
CLI module for npm-menu.

Provides the command-line interface components with a thin CLI layer over
the action service.
"""
from npmmenu.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
