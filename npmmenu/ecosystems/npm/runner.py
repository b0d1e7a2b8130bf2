"""
Process execution for npm-menu.

Launches the package manager either detached from the caller (install, run,
init, ...) or synchronously with captured output (dependency listing). The
exit status is exposed through :class:`ProcessHandle` but never interpreted.
"""

import logging
import re
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from npmmenu.ecosystems.npm.command import NpmCommand
from npmmenu.utils.exceptions import PackageManagerNotFoundError

logger = logging.getLogger(__name__)


def buffer_name(project: str, command: Union[NpmCommand, str]) -> str:
    """Name of the display surface for ``command`` run in ``project``."""
    return f"*npm: {project} - {command}*"


def log_filename(name: str) -> str:
    """Turn a buffer name into a safe log file name."""
    slug = re.sub(r"[^A-Za-z0-9._]+", "-", name).strip("-.")
    return f"{slug or 'npm'}.log"


class ProcessHandle:
    """A launched package manager process.

    Output is available through :meth:`stream` unless the process inherited
    the terminal (interactive) or writes to a log file (detached).
    """

    def __init__(
        self,
        process: subprocess.Popen,
        command: NpmCommand,
        buffer_name: str,
        log_path: Optional[Path] = None,
    ):
        self.process = process
        self.command = command
        self.buffer_name = buffer_name
        self.log_path = log_path

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def returncode(self) -> Optional[int]:
        return self.process.returncode

    def poll(self) -> Optional[int]:
        return self.process.poll()

    def stream(self, sink: Callable[[str], None]) -> None:
        """Feed each output line, without its newline, to ``sink``."""
        if self.process.stdout is None:
            return
        with self.process.stdout:
            for line in self.process.stdout:
                sink(line.rstrip("\r\n"))

    def wait(self) -> int:
        """Block until the process exits and return its status."""
        return self.process.wait()


class ProcessRunner:
    """Starts package manager commands in a project directory."""

    def __init__(self, log_dir: Optional[Union[str, Path]] = None):
        self.log_dir = Path(log_dir) if log_dir else Path(tempfile.gettempdir()) / "npm-menu"

    def _popen_args(self, command: NpmCommand):
        return command.command_line if command.shell else command.argv

    def start(
        self,
        command: NpmCommand,
        cwd: Union[str, Path],
        buffer_name: str,
        interactive: bool = False,
        detach: bool = False,
    ) -> ProcessHandle:
        """Launch ``command`` in ``cwd`` without waiting for it."""
        logger.info("Starting %s in %s", command, cwd)

        log_path = None
        kwargs = {"cwd": str(cwd), "shell": command.shell}
        if detach:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_path = self.log_dir / log_filename(buffer_name)
            log_file = open(log_path, "w", encoding="utf-8")
            kwargs.update(
                stdin=subprocess.DEVNULL,
                stdout=log_file,
                stderr=subprocess.STDOUT,
                start_new_session=True,
            )
        elif interactive:
            log_file = None
        else:
            log_file = None
            kwargs.update(
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )

        try:
            process = subprocess.Popen(self._popen_args(command), **kwargs)
        except FileNotFoundError as e:
            raise PackageManagerNotFoundError(command.argv[0], original_exception=e) from e
        finally:
            # The child keeps its own descriptor.
            if log_file is not None:
                log_file.close()

        logger.debug("Started pid %s for %s", process.pid, buffer_name)
        return ProcessHandle(process, command, buffer_name, log_path)

    def capture(self, command: NpmCommand, cwd: Union[str, Path], timeout: Optional[int] = None) -> str:
        """Run ``command`` to completion and return its combined output."""
        logger.info("Running %s in %s", command, cwd)
        try:
            result = subprocess.run(
                self._popen_args(command),
                cwd=str(cwd),
                shell=command.shell,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise PackageManagerNotFoundError(command.argv[0], original_exception=e) from e

        if result.returncode != 0:
            # npm list exits non-zero on extraneous or missing packages but still prints the tree
            logger.debug("%s exited with status %s", command, result.returncode)
        return result.stdout or ""
