from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from npmmenu.utils.exceptions import UnknownConfigValueError


class InstallDestination(str, Enum):
    """Where ``npm install`` records a new dependency."""
    REGULAR = "regular"
    DEV = "dev"
    PEER = "peer"
    BUNDLE = "bundle"
    OPTIONAL = "optional"


INSTALL_FLAGS = {
    InstallDestination.REGULAR: "",
    InstallDestination.DEV: "--save-dev",
    InstallDestination.PEER: "--save-peer",
    InstallDestination.BUNDLE: "--save-bundle",
    InstallDestination.OPTIONAL: "--save-optional",
}


def parse_destination(value: Union[str, InstallDestination]) -> InstallDestination:
    """Return the destination for an enum member or its string value."""
    if isinstance(value, InstallDestination):
        return value
    try:
        return InstallDestination(value)
    except ValueError:
        raise UnknownConfigValueError(
            "install_destination", value, [d.value for d in InstallDestination]
        ) from None


def install_flag(value: Union[str, InstallDestination]) -> str:
    """Map an install destination to its ``npm install`` flag."""
    return INSTALL_FLAGS[parse_destination(value)]


class DependencyGroup(str, Enum):
    """Manifest sections that declare dependencies, with their label tags."""
    REGULAR = "dependencies"
    DEV = "devDependencies"
    PEER = "peerDependencies"
    BUNDLED = "bundledDependencies"
    OPTIONAL = "optionalDependencies"

    @property
    def tag(self) -> Optional[str]:
        return GROUP_TAGS[self]


GROUP_TAGS = {
    DependencyGroup.REGULAR: None,
    DependencyGroup.DEV: "dev",
    DependencyGroup.PEER: "peer",
    DependencyGroup.BUNDLED: "bundled",
    DependencyGroup.OPTIONAL: "optional",
}


@dataclass(frozen=True)
class DependencyEntry:
    """A declared dependency as shown in a flattened selection list."""
    label: str
    name: str
    version: str
    group: DependencyGroup = DependencyGroup.REGULAR


@dataclass(frozen=True)
class ScriptEntry:
    """A named command from the manifest's ``scripts`` mapping."""
    name: str
    command: str

    @property
    def label(self) -> str:
        return f"{self.name}: {self.command}"


@dataclass
class Manifest:
    """Typed view of a parsed ``package.json``.

    Keys the tool does not use are kept in ``extra`` and otherwise ignored.
    """
    path: Path
    name: Optional[str] = None
    version: Optional[str] = None
    scripts: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    bundled_dependencies: Dict[str, str] = field(default_factory=dict)
    optional_dependencies: Dict[str, str] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def project_dir(self) -> Path:
        return self.path.parent

    @property
    def display_name(self) -> str:
        """Project name used to title display surfaces."""
        return self.name or self.project_dir.name

    def group(self, group: DependencyGroup) -> Dict[str, str]:
        return {
            DependencyGroup.REGULAR: self.dependencies,
            DependencyGroup.DEV: self.dev_dependencies,
            DependencyGroup.PEER: self.peer_dependencies,
            DependencyGroup.BUNDLED: self.bundled_dependencies,
            DependencyGroup.OPTIONAL: self.optional_dependencies,
        }[group]

    def dependency_entries(self) -> List[DependencyEntry]:
        """Flatten all dependency groups into one labelled list."""
        entries = []
        for group in DependencyGroup:
            for name, version in self.group(group).items():
                label = f"{name} ({group.tag})" if group.tag else name
                entries.append(DependencyEntry(label=label, name=name, version=version, group=group))
        return entries

    def script_entries(self) -> List[ScriptEntry]:
        return [ScriptEntry(name=name, command=command) for name, command in self.scripts.items()]


@dataclass(frozen=True)
class CommandConfig:
    """Settings consumed by the command builder and runner.

    Materialised once per process from the YAML configuration; per-invocation
    changes go through ``with_overrides`` which returns a new object.
    """
    tool: str = "npm"
    global_args: str = ""
    verb_args: str = ""
    install_destination: InstallDestination = InstallDestination.REGULAR
    list_depth: int = 0
    manifest_name: str = "package.json"
    lock_file: str = "package-lock.json"
    modules_dir: str = "node_modules"
    raw_args: bool = False
    log_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CommandConfig":
        """Build from the ``npm`` section of a merged configuration dict."""
        section = config.get("npm", config) or {}
        return cls(
            tool=section.get("tool", "npm"),
            global_args=section.get("global_args") or "",
            verb_args=section.get("verb_args") or "",
            install_destination=parse_destination(section.get("install_destination", "regular")),
            list_depth=int(section.get("list_depth", 0)),
            manifest_name=section.get("manifest_name", "package.json"),
            lock_file=section.get("lock_file", "package-lock.json"),
            modules_dir=section.get("modules_dir", "node_modules"),
            raw_args=bool(section.get("raw_args", False)),
            log_dir=section.get("log_dir"),
        )

    def with_overrides(self, **overrides: Any) -> "CommandConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "install_destination" in changes:
            changes["install_destination"] = parse_destination(changes["install_destination"])
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "tool": self.tool,
            "global_args": self.global_args,
            "verb_args": self.verb_args,
            "install_destination": self.install_destination.value,
            "list_depth": self.list_depth,
            "manifest_name": self.manifest_name,
            "lock_file": self.lock_file,
            "modules_dir": self.modules_dir,
            "raw_args": self.raw_args,
            "log_dir": self.log_dir,
        }
