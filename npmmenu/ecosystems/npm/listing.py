"""Parsing and display of ``npm list`` output."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from packaging.version import InvalidVersion, Version
from rich.table import Table

from npmmenu.utils.exceptions import UnknownConfigValueError

# Optional "@scope/" prefix, then a name that contains no "@" or whitespace.
LIST_LINE_PATTERN = re.compile(r"(?P<name>(?:@[^\s@/]+/)?[^\s@]+)@(?P<version>[^\s@]+)")

SORT_KEYS = ("name", "version")


def parse_list_output(text: str) -> List[Tuple[str, str]]:
    """Extract ``(name, version)`` rows from ``npm list`` output.

    The first ``name@version`` occurrence on each line is used and anything
    after it is ignored. Rows keep encounter order and repeated pairs are
    dropped.
    """

    rows: List[Tuple[str, str]] = []
    seen = set()
    for line in text.splitlines():
        match = LIST_LINE_PATTERN.search(line)
        if not match:
            continue
        row = (match.group("name"), match.group("version"))
        if row not in seen:
            seen.add(row)
            rows.append(row)
    return rows


def version_key(version: str) -> Tuple:
    """Order parsable versions numerically, ahead of anything else."""
    try:
        return (0, Version(version))
    except InvalidVersion:
        return (1, version.lower())


def sort_rows(rows: Iterable[Tuple[str, str]], key: str = "name", reverse: bool = False) -> List[Tuple[str, str]]:
    if key not in SORT_KEYS:
        raise UnknownConfigValueError("sort", key, SORT_KEYS)
    if key == "version":
        return sorted(rows, key=lambda row: (version_key(row[1]), row[0].lower()), reverse=reverse)
    return sorted(rows, key=lambda row: (row[0].lower(), version_key(row[1])), reverse=reverse)


def render_table(rows: Iterable[Tuple[str, str]], title: Optional[str] = None) -> Table:
    """Build a two-column table of dependencies."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Dependency", style="white", no_wrap=False)
    table.add_column("Version", style="white", justify="right")
    for name, version in rows:
        table.add_row(name, version)
    return table
