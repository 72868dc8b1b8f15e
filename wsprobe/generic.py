"""Generic workspaces described by a dist.toml manifest."""

import tomllib
from pathlib import Path

import semver
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import MalformedManifestError, ManifestParseError, ManifestReadError, PackageMissingError
from .logging import get_logger
from .models import PackageInfo, Version, WorkspaceInfo, WorkspaceKind, WorkspaceSearch
from .workspace import Detector, assemble_workspace

logger = get_logger("generic")

MANIFEST_NAME = "dist.toml"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class DistWorkspace(BaseModel):
    """The ``[workspace]`` table."""

    members: list[str] | None = None


class DistPackage(BaseModel):
    """The ``[package]`` table. Keys are kebab-case in the file."""

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True)

    name: str
    repository: str | None = None
    homepage: str | None = None
    documentation: str | None = None
    description: str | None = None
    readme: Path | None = None
    authors: list[str] = []
    binaries: list[str]
    license: str | None = None
    changelog: Path | None = None
    license_files: list[Path] = []
    cstaticlibs: list[str] = []
    cdylibs: list[str] = []
    build_command: list[str]
    version: str | None = None

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str | None) -> str | None:
        # semver raises ValueError, so pydantic reports it as a validation error
        if value is not None:
            semver.Version.parse(value)
        return value


class DistToml(BaseModel):
    """A parsed dist.toml."""

    workspace: DistWorkspace | None = None
    package: DistPackage | None = None

    def workspace_members(self) -> list[str] | None:
        if self.workspace is None:
            return None
        return self.workspace.members


def load_dist_toml(manifest_path: Path) -> DistToml:
    """Read and parse a dist.toml.

    Args:
        manifest_path: Path to the dist.toml file

    Returns:
        The parsed manifest

    Raises:
        ManifestReadError: if the file can't be read
        ManifestParseError: if the file isn't valid TOML or doesn't fit the schema
        MalformedManifestError: if neither [workspace] nor [package] is present
    """
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestReadError(manifest_path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ManifestReadError(manifest_path, e.strerror or str(e)) from e

    try:
        manifest = DistToml.model_validate(tomllib.loads(content))
    except tomllib.TOMLDecodeError as e:
        raise ManifestParseError(manifest_path, str(e)) from e
    except ValidationError as e:
        raise ManifestParseError(manifest_path, str(e)) from e

    if manifest.workspace is None and manifest.package is None:
        raise MalformedManifestError(manifest_path, "expected a [workspace] or [package] section")
    return manifest


def expected_member_paths(manifest: DistToml, manifest_path: Path) -> list[Path]:
    """Map a root manifest onto the directories its packages should live in.

    Workspace members are joined onto the workspace root in the order they
    are listed and are not checked for existence here. A manifest with
    only a [package] section is its own single member.

    Raises:
        MalformedManifestError: if there is neither a member list nor a package
    """
    workspace_dir = manifest_path.parent
    members = manifest.workspace_members()
    if members is not None:
        return [workspace_dir / member for member in members]
    if manifest.package is not None:
        return [workspace_dir]
    raise MalformedManifestError(manifest_path, "[workspace] has no members and there is no [package] section")


def package_info(package_root: Path) -> PackageInfo:
    """Load the dist.toml in ``package_root`` and normalize its package.

    Raises:
        ManifestReadError: if the member has no readable dist.toml
        ManifestParseError: if the member's dist.toml is invalid
        PackageMissingError: if the member's dist.toml has no [package] section
    """
    manifest_path = package_root / MANIFEST_NAME
    manifest = load_dist_toml(manifest_path)

    package = manifest.package
    if package is None:
        raise PackageMissingError(manifest_path)

    return PackageInfo(
        manifest_path=manifest_path,
        package_root=package_root,
        name=package.name,
        version=Version.generic(package.version) if package.version is not None else None,
        description=package.description,
        authors=list(package.authors),
        license=package.license,
        publish=True,
        keywords=None,
        repository_url=package.repository,
        homepage_url=package.homepage,
        documentation_url=package.documentation,
        readme_file=package_root / package.readme if package.readme else None,
        license_files=[package_root / path for path in package.license_files],
        changelog_file=package_root / package.changelog if package.changelog else None,
        binaries=list(package.binaries),
        cstaticlibs=list(package.cstaticlibs),
        cdylibs=list(package.cdylibs),
        build_command=list(package.build_command),
    )


class GenericDetector(Detector):
    """Detects workspaces that carry dist.toml build instructions."""

    kind = WorkspaceKind.GENERIC
    manifest_name = MANIFEST_NAME
    target_dir_name = "target"

    def workspace_from(self, manifest_path: Path) -> WorkspaceInfo:
        manifest = load_dist_toml(manifest_path)
        member_paths = expected_member_paths(manifest, manifest_path)

        warnings = []
        root_is_member = manifest_path.parent.resolve() in {path.resolve() for path in member_paths}
        if manifest.workspace_members() is not None and manifest.package is not None and not root_is_member:
            warnings.append(
                f"{manifest_path.name} has both [workspace] members and a [package] section; "
                "the root [package] is ignored because '.' is not listed as a member"
            )

        # Short-circuits on the first member that can't be loaded
        packages = []
        for member in member_paths:
            logger.debug("loading workspace member %s", member)
            packages.append(package_info(member))

        return assemble_workspace(
            self.kind,
            manifest_path,
            packages,
            target_dir=self.target_dir(manifest_path.parent),
            warnings=warnings,
        )


def get_workspace(start_dir: Path, clamp_dir: Path | None = None) -> WorkspaceSearch:
    """Try to find a generic workspace at or above ``start_dir``."""
    return GenericDetector().get_workspace(start_dir, clamp_dir)
