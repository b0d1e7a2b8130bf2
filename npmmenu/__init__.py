"""npm-menu: menu-driven front end for common npm actions."""

__version__ = "0.1.0"
