"""Assembly of ``npm`` command lines.

Commands are built as argument vectors. Names that come from the user or the
manifest (packages, scripts) are always single tokens and are quoted when the
command is rendered as a shell string, so metacharacters in them are inert.
The free-form ``global_args`` and ``verb_args`` settings are tokenised with
``shlex``; with ``raw_args`` enabled they are passed to the shell verbatim.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from npmmenu.models import CommandConfig, InstallDestination, install_flag


@dataclass(frozen=True)
class NpmCommand:
    """A fully assembled package manager invocation."""
    verb: str
    argv: List[str] = field(default_factory=list)
    command_line: str = ""
    shell: bool = False

    def __str__(self) -> str:
        return self.command_line


def _tokens(values: Union[str, Iterable[str], None]) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return [value for value in values if value]


def _collapse(text: str) -> str:
    return " ".join(text.split())


def build_command(
    verb: str,
    args: Union[str, Sequence[str], None] = (),
    extra_args: Union[str, Sequence[str], None] = (),
    double_dash_args: Union[str, Sequence[str], None] = (),
    config: Optional[CommandConfig] = None,
) -> NpmCommand:
    """Build ``<tool> <global-args> <verb> <args> <verb-args> <extra-args> [-- <double-dash-args>]``.

    ``args``, ``extra_args`` and ``double_dash_args`` accept a single string
    (one token) or a sequence of tokens. Empty tokens are dropped.
    """

    config = config or CommandConfig()
    positional = _tokens(args)
    extra = _tokens(extra_args)
    trailing = _tokens(double_dash_args)

    argv = [config.tool, *shlex.split(config.global_args), verb, *positional,
            *shlex.split(config.verb_args), *extra]
    if trailing:
        argv += ["--", *trailing]

    parts = [
        shlex.quote(config.tool),
        _collapse(config.global_args),
        shlex.quote(verb),
        *(shlex.quote(token) for token in positional),
        _collapse(config.verb_args),
        *(shlex.quote(token) for token in extra),
    ]
    if trailing:
        parts += ["--", *(shlex.quote(token) for token in trailing)]

    command_line = " ".join(part for part in parts if part)
    return NpmCommand(verb=verb, argv=argv, command_line=command_line, shell=config.raw_args)


def install_command(
    name: Union[str, Sequence[str]],
    destination: Union[str, InstallDestination, None] = None,
    config: Optional[CommandConfig] = None,
) -> NpmCommand:
    config = config or CommandConfig()
    flag = install_flag(destination if destination is not None else config.install_destination)
    return build_command("install", name, extra_args=flag, config=config)


def install_all_command(config: Optional[CommandConfig] = None) -> NpmCommand:
    return build_command("install", config=config)


def uninstall_command(name: str, config: Optional[CommandConfig] = None) -> NpmCommand:
    return build_command("uninstall", name, config=config)


def run_command(
    script: str,
    double_dash_args: Union[str, Sequence[str], None] = (),
    config: Optional[CommandConfig] = None,
) -> NpmCommand:
    return build_command("run", script, double_dash_args=double_dash_args, config=config)


def init_command(yes: bool = False, config: Optional[CommandConfig] = None) -> NpmCommand:
    return build_command("init", extra_args="--yes" if yes else None, config=config)


def list_command(config: Optional[CommandConfig] = None) -> NpmCommand:
    config = config or CommandConfig()
    return build_command("list", extra_args=f"--depth={config.list_depth}", config=config)


def update_command(name: Optional[str] = None, config: Optional[CommandConfig] = None) -> NpmCommand:
    return build_command("update", name, config=config)


def run_tests_command(
    double_dash_args: Union[str, Sequence[str], None] = (),
    config: Optional[CommandConfig] = None,
) -> NpmCommand:
    return build_command("test", double_dash_args=double_dash_args, config=config)

