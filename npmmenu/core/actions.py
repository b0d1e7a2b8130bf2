"""
Action service implementation for npm-menu.

Every menu action is a method here. Actions that work on a project locate the
manifest first; a missing or malformed manifest aborts the action before
anything is launched.
"""
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from npmmenu.core.file_manager import FileManager
from npmmenu.ecosystems.npm import command as commands
from npmmenu.ecosystems.npm.command import NpmCommand
from npmmenu.ecosystems.npm.listing import parse_list_output
from npmmenu.ecosystems.npm.reader import find_manifest, load_project_manifest
from npmmenu.ecosystems.npm.runner import ProcessHandle, ProcessRunner, buffer_name
from npmmenu.models import CommandConfig, DependencyEntry, InstallDestination, Manifest, ScriptEntry

logger = logging.getLogger(__name__)


class ActionService:
    """Concrete implementation of the npm-menu actions."""

    def __init__(
        self,
        config: Optional[CommandConfig] = None,
        runner: Optional[ProcessRunner] = None,
        file_manager: Optional[FileManager] = None,
        cwd: Optional[Union[str, Path]] = None,
        detach: bool = False,
    ):
        self.config = config or CommandConfig()
        self.runner = runner or ProcessRunner(self.config.log_dir)
        self.file_manager = file_manager or FileManager()
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.detach = detach

    # Manifest queries

    def manifest_path(self) -> Path:
        return find_manifest(self.cwd, self.config.manifest_name)

    def manifest(self) -> Manifest:
        return load_project_manifest(self.cwd, self.config.manifest_name)

    def dependency_entries(self) -> List[DependencyEntry]:
        return self.manifest().dependency_entries()

    def script_entries(self) -> List[ScriptEntry]:
        return self.manifest().script_entries()

    # Execution

    def _launch(
        self,
        command: NpmCommand,
        manifest: Optional[Manifest] = None,
        interactive: bool = False,
    ) -> ProcessHandle:
        if manifest is not None:
            project, cwd = manifest.display_name, manifest.project_dir
        else:
            project, cwd = self.cwd.name, self.cwd
        return self.runner.start(
            command,
            cwd=cwd,
            buffer_name=buffer_name(project, command),
            interactive=interactive and not self.detach,
            detach=self.detach,
        )

    def install_dependency(
        self,
        name: Union[str, Sequence[str]],
        destination: Union[str, InstallDestination, None] = None,
    ) -> ProcessHandle:
        """Install one or more packages into the given destination."""
        manifest = self.manifest()
        return self._launch(commands.install_command(name, destination, self.config), manifest)

    def install_all(self) -> ProcessHandle:
        manifest = self.manifest()
        return self._launch(commands.install_all_command(self.config), manifest)

    def uninstall_dependency(self, name: str) -> ProcessHandle:
        manifest = self.manifest()
        return self._launch(commands.uninstall_command(name, self.config), manifest)

    def run_script(self, name: str, double_dash_args: Sequence[str] = ()) -> ProcessHandle:
        manifest = self.manifest()
        return self._launch(commands.run_command(name, double_dash_args, self.config), manifest)

    def update(self, name: Optional[str] = None) -> ProcessHandle:
        manifest = self.manifest()
        return self._launch(commands.update_command(name, self.config), manifest)

    def test(self, double_dash_args: Sequence[str] = ()) -> ProcessHandle:
        manifest = self.manifest()
        return self._launch(commands.run_tests_command(double_dash_args, self.config), manifest)

    def init_project(self, yes: bool = False) -> ProcessHandle:
        """Run ``npm init`` in the working directory.

        No manifest is required. Without ``yes`` npm asks questions, so the
        process inherits the terminal.
        """
        return self._launch(commands.init_command(yes, self.config), interactive=not yes)

    def list_dependencies(self) -> List[Tuple[str, str]]:
        """Run ``npm list`` synchronously and parse its output into rows."""
        manifest = self.manifest()
        output = self.runner.capture(commands.list_command(self.config), manifest.project_dir)
        rows = parse_list_output(output)
        logger.debug("Parsed %d dependencies from npm list", len(rows))
        return rows

    def clean_targets(self) -> List[Path]:
        return self.file_manager.collect_clean_targets(self.manifest_path().parent, self.config)

    def clean_project(self, confirm: Callable[[Path], bool]) -> List[Path]:
        """Delete the dependency directory and the lock file, each only if confirmed."""
        return self.file_manager.clean(self.clean_targets(), confirm)
