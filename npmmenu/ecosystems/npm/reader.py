"""Utilities for locating and reading NPM ``package.json`` manifests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from npmmenu.models import DependencyGroup, Manifest
from npmmenu.utils.exceptions import ManifestNotFoundError, ManifestParseError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"

# npm accepts both spellings of the bundled group.
_BUNDLED_ALIASES = ("bundledDependencies", "bundleDependencies")

_KNOWN_KEYS = {"name", "version", "scripts", *(group.value for group in DependencyGroup), *_BUNDLED_ALIASES}


def find_manifest(
    start_dir: Optional[Union[str, Path]] = None,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Path:
    """Find the nearest manifest in ``start_dir`` or one of its ancestors.

    Parameters
    ----------
    start_dir:
        Directory to start from. Defaults to the current working directory.
    manifest_name:
        File name to look for.

    Returns
    -------
    Path
        Path of the first manifest found, searching nearest to farthest.

    Raises
    ------
    ManifestNotFoundError
        When the filesystem root is reached without a match.
    """

    start = Path(start_dir) if start_dir is not None else Path.cwd()
    start = start.resolve()

    for directory in (start, *start.parents):
        candidate = directory / manifest_name
        if candidate.is_file():
            logger.debug("Found manifest %s", candidate)
            return candidate

    raise ManifestNotFoundError(start, manifest_name)


def read_manifest_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Read and parse a manifest into a plain dictionary.

    The file is read on every call; nothing is cached.
    """

    manifest_path = Path(path)
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except ValueError as e:  # JSONDecodeError and UnicodeDecodeError
        raise ManifestParseError(manifest_path, original_exception=e) from e

    if not isinstance(data, dict):
        raise ManifestParseError(manifest_path, reason="Manifest top-level value is not a JSON object")
    return data


def get_field(data: Dict[str, Any], key: str) -> Any:
    """Return the value of a top-level manifest key, or None."""
    return data.get(key)


def flatten_field(value: Any, tag: Optional[str] = None) -> List[Tuple[str, str]]:
    """Flatten a mapping (or list of names) into ``(label, key)`` pairs.

    The label is the key itself, suffixed with `` (<tag>)`` when a tag is
    given so that same-named keys from different groups stay distinct.
    """

    if isinstance(value, dict):
        keys = list(value.keys())
    elif isinstance(value, list):
        keys = [item for item in value if isinstance(item, str)]
    else:
        return []
    return [(f"{key} ({tag})" if tag else key, key) for key in keys]


def _string_mapping(value: Any) -> Dict[str, str]:
    if isinstance(value, dict):
        return {str(key): "" if spec is None else str(spec) for key, spec in value.items()}
    if isinstance(value, list):
        # bundledDependencies is usually an array of names
        return {item: "" for item in value if isinstance(item, str)}
    return {}


def parse_manifest(data: Dict[str, Any], path: Union[str, Path]) -> Manifest:
    """Convert a parsed manifest dictionary into a :class:`Manifest`."""

    bundled = next((data[key] for key in _BUNDLED_ALIASES if key in data), None)
    return Manifest(
        path=Path(path),
        name=data.get("name") if isinstance(data.get("name"), str) else None,
        version=data.get("version") if isinstance(data.get("version"), str) else None,
        scripts=_string_mapping(data.get("scripts")),
        dependencies=_string_mapping(data.get(DependencyGroup.REGULAR.value)),
        dev_dependencies=_string_mapping(data.get(DependencyGroup.DEV.value)),
        peer_dependencies=_string_mapping(data.get(DependencyGroup.PEER.value)),
        bundled_dependencies=_string_mapping(bundled),
        optional_dependencies=_string_mapping(data.get(DependencyGroup.OPTIONAL.value)),
        extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
    )


def read_manifest(path: Union[str, Path]) -> Manifest:
    """Read a ``package.json`` file and return its typed representation."""
    return parse_manifest(read_manifest_data(path), path)


def load_project_manifest(
    start_dir: Optional[Union[str, Path]] = None,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Manifest:
    """Locate the nearest manifest and read it."""
    return read_manifest(find_manifest(start_dir, manifest_name))
