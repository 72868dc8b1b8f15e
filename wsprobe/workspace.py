"""Workspace assembly and the search-result classifier shared by every ecosystem."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar

from .autoinclude import find_auto_includes, merge_auto_includes
from .errors import (
    DuplicatePackageError,
    ManifestNotFoundError,
    MemberOutsideWorkspaceError,
    WorkspaceError,
)
from .logging import get_logger
from .models import Broken, Found, Missing, PackageInfo, WorkspaceInfo, WorkspaceKind, WorkspaceSearch
from .search import find_file

logger = get_logger("workspace")


def assemble_workspace(
    kind: WorkspaceKind,
    manifest_path: Path,
    packages: Iterable[PackageInfo],
    *,
    target_dir: Path,
    root_auto_includes: frozenset[Path] | None = None,
    warnings: Iterable[str] = (),
) -> WorkspaceInfo:
    """Combine normalized packages into an immutable WorkspaceInfo.

    Each package gets its own auto-included files merged in first, then
    the ones found at the workspace root, so a member's README wins over
    the root README. The workspace repository URL is the first one any
    member declares.

    Args:
        kind: Ecosystem that produced the packages
        manifest_path: Root manifest of the workspace
        packages: Normalized packages in member order
        target_dir: Build output directory for the workspace
        root_auto_includes: Files found at the workspace root, scanned if omitted
        warnings: Non-fatal problems noticed while normalizing

    Returns:
        The assembled workspace

    Raises:
        MemberOutsideWorkspaceError: if a package root escapes the workspace
        DuplicatePackageError: if two packages share a name
    """
    workspace_dir = manifest_path.parent
    if root_auto_includes is None:
        root_auto_includes = find_auto_includes(workspace_dir)

    resolved_root = workspace_dir.resolve()
    package_info: dict[str, PackageInfo] = {}
    for info in packages:
        if not info.package_root.resolve().is_relative_to(resolved_root):
            raise MemberOutsideWorkspaceError(info.package_root, workspace_dir)
        if info.name in package_info:
            raise DuplicatePackageError(info.name, info.manifest_path)

        if info.package_root.resolve() != resolved_root:
            merge_auto_includes(info, find_auto_includes(info.package_root))
        merge_auto_includes(info, root_auto_includes)
        package_info[info.name] = info

    repository_url = next(
        (info.repository_url for info in package_info.values() if info.repository_url),
        None,
    )

    warnings = tuple(warnings)
    for warning in warnings:
        logger.warning("%s: %s", manifest_path, warning)

    return WorkspaceInfo(
        kind=kind,
        target_dir=target_dir,
        workspace_dir=workspace_dir,
        package_info=MappingProxyType(package_info),
        manifest_path=manifest_path,
        repository_url=repository_url,
        root_auto_includes=frozenset(root_auto_includes),
        warnings=warnings,
    )


class Detector(ABC):
    """Finds and resolves one ecosystem's workspaces.

    Subclasses name their manifest file and implement ``workspace_from``;
    the search and the Found/Missing/Broken classification live here.
    """

    kind: ClassVar[WorkspaceKind]
    manifest_name: ClassVar[str]
    target_dir_name: ClassVar[str]

    def get_workspace(self, start_dir: Path, clamp_dir: Path | None = None) -> WorkspaceSearch:
        """Search upward from ``start_dir`` and resolve whatever manifest is found.

        Args:
            start_dir: Directory to start searching from
            clamp_dir: Optional ancestor the search must not climb past

        Returns:
            Found, Missing or Broken
        """
        try:
            manifest_path = find_file(self.manifest_name, start_dir, clamp_dir)
        except ManifestNotFoundError as e:
            return Missing(e)

        try:
            info = self.workspace_from(manifest_path)
        except WorkspaceError as e:
            logger.info("found %s but: %s", manifest_path, e)
            return Broken(manifest_path, e)

        logger.info(
            "found %s workspace at %s with %d package(s)",
            self.kind.value,
            info.workspace_dir,
            len(info.package_info),
        )
        return Found(info)

    def target_dir(self, workspace_dir: Path) -> Path:
        return workspace_dir / self.target_dir_name

    @abstractmethod
    def workspace_from(self, manifest_path: Path) -> WorkspaceInfo:
        """Resolve the manifest at ``manifest_path`` into a workspace."""
