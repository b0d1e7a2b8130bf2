"""Package manager ecosystems supported by npm-menu."""
