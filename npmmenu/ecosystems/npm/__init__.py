"""NPM ecosystem helpers."""

from .command import NpmCommand, build_command
from .listing import parse_list_output
from .reader import find_manifest, read_manifest
from .runner import ProcessHandle, ProcessRunner

__all__ = [
    "NpmCommand",
    "build_command",
    "parse_list_output",
    "find_manifest",
    "read_manifest",
    "ProcessHandle",
    "ProcessRunner",
]
