"""
File management for npm-menu.

Handles collection and removal of the files ``npm install`` generates in a
project: the dependency directory and the lock file.
"""
import logging
import shutil
from pathlib import Path
from typing import Callable, List, Union

from npmmenu.models import CommandConfig

logger = logging.getLogger(__name__)


class FileManager:
    """Manages npm-menu file collection and cleanup operations."""

    def collect_clean_targets(self, project_dir: Union[str, Path], config: CommandConfig) -> List[Path]:
        """Collect the generated files that exist in ``project_dir``."""
        project_dir = Path(project_dir)
        candidates = [
            project_dir / config.modules_dir,
            project_dir / config.lock_file,
        ]
        return [path for path in candidates if path.exists()]

    def remove(self, path: Path) -> None:
        """Delete a directory tree or a single file."""
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        logger.info("Removed %s", path)

    def clean(self, targets: List[Path], confirm: Callable[[Path], bool]) -> List[Path]:
        """Remove each target that ``confirm`` accepts; return what was removed."""
        removed = []
        for path in targets:
            if confirm(path):
                self.remove(path)
                removed.append(path)
            else:
                logger.debug("Kept %s", path)
        return removed
