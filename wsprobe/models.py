"""Core data models for wsprobe."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from pathlib import Path
from typing import ClassVar

import semver

from .errors import ManifestNotFoundError, WorkspaceError


class WorkspaceKind(str, Enum):
    """The ecosystem detector that produced a workspace."""

    GENERIC = "generic"
    JAVASCRIPT = "javascript"


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A package version tagged with the ecosystem it came from.

    Versions are compared as semver, so build metadata is ignored for both
    equality and ordering. Versions from different ecosystems compare
    unequal and refuse to be ordered against each other.
    """

    kind: WorkspaceKind
    value: str

    @classmethod
    def generic(cls, raw: str) -> "Version":
        """Build a generic-ecosystem version, rejecting anything that isn't semver.

        Raises:
            ValueError: if ``raw`` is not a valid semver string
        """
        semver.Version.parse(raw)
        return cls(WorkspaceKind.GENERIC, raw)

    def parsed(self) -> semver.Version | None:
        """Return the structured version, or None if it isn't valid semver."""
        try:
            return semver.Version.parse(self.value)
        except ValueError:
            return None

    def _key(self) -> tuple:
        parsed = self.parsed()
        if parsed is None:
            return (self.kind, self.value)
        # major, minor, patch, prerelease; build metadata doesn't count
        return (self.kind, parsed.to_tuple()[:4])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        if other.kind is not self.kind:
            raise TypeError(f"can't order a {self.kind.value} version against a {other.kind.value} version")
        mine, theirs = self.parsed(), other.parsed()
        if mine is None or theirs is None:
            raise TypeError(f"can't order unparseable versions {self.value!r} and {other.value!r}")
        return mine < theirs

    def __str__(self) -> str:
        return self.value


@dataclass
class PackageInfo:
    """One publishable unit, independent of the ecosystem that described it."""

    manifest_path: Path
    package_root: Path
    name: str
    version: Version | None = None
    description: str | None = None
    authors: list[str] = field(default_factory=list)
    license: str | None = None
    publish: bool = True
    keywords: list[str] | None = None
    repository_url: str | None = None
    homepage_url: str | None = None
    documentation_url: str | None = None
    readme_file: Path | None = None
    license_files: list[Path] = field(default_factory=list)
    changelog_file: Path | None = None
    binaries: list[str] = field(default_factory=list)
    cstaticlibs: list[str] = field(default_factory=list)
    cdylibs: list[str] = field(default_factory=list)
    build_command: list[str] | None = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "version": self.version.value if self.version else None,
            "version_kind": self.version.kind.value if self.version else None,
            "manifest_path": str(self.manifest_path),
            "package_root": str(self.package_root),
            "description": self.description,
            "authors": list(self.authors),
            "license": self.license,
            "publish": self.publish,
            "keywords": list(self.keywords) if self.keywords is not None else None,
            "repository_url": self.repository_url,
            "homepage_url": self.homepage_url,
            "documentation_url": self.documentation_url,
            "readme_file": str(self.readme_file) if self.readme_file else None,
            "license_files": [str(path) for path in self.license_files],
            "changelog_file": str(self.changelog_file) if self.changelog_file else None,
            "binaries": list(self.binaries),
            "cstaticlibs": list(self.cstaticlibs),
            "cdylibs": list(self.cdylibs),
            "build_command": list(self.build_command) if self.build_command is not None else None,
        }


@dataclass(frozen=True)
class WorkspaceInfo:
    """A discovered workspace and every package it contains."""

    kind: WorkspaceKind
    target_dir: Path
    workspace_dir: Path
    package_info: Mapping[str, PackageInfo]
    manifest_path: Path
    repository_url: str | None = None
    root_auto_includes: frozenset[Path] = frozenset()
    warnings: tuple[str, ...] = ()

    def find_package(self, name: str) -> PackageInfo | None:
        """Look up a member package by name."""
        return self.package_info.get(name)

    def as_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "target_dir": str(self.target_dir),
            "workspace_dir": str(self.workspace_dir),
            "manifest_path": str(self.manifest_path),
            "repository_url": self.repository_url,
            "root_auto_includes": sorted(str(path) for path in self.root_auto_includes),
            "warnings": list(self.warnings),
            "packages": [info.as_dict() for info in self.package_info.values()],
        }


@dataclass(frozen=True)
class WorkspaceSearch:
    """Outcome of probing a directory for one kind of workspace."""

    status: ClassVar[str] = ""


@dataclass(frozen=True)
class Found(WorkspaceSearch):
    """A manifest was located and fully resolved."""

    status: ClassVar[str] = "found"

    info: WorkspaceInfo


@dataclass(frozen=True)
class Missing(WorkspaceSearch):
    """No manifest of this kind exists within the search bounds."""

    status: ClassVar[str] = "missing"

    cause: ManifestNotFoundError


@dataclass(frozen=True)
class Broken(WorkspaceSearch):
    """A manifest was located but could not be turned into a workspace."""

    status: ClassVar[str] = "broken"

    manifest_path: Path
    cause: WorkspaceError

    def __str__(self) -> str:
        return f"found {self.manifest_path} but: {self.cause}"
