"""JavaScript package.json parsing."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from .errors import MalformedManifestError, ManifestParseError, ManifestReadError
from .logging import get_logger
from .models import PackageInfo, Version, WorkspaceInfo, WorkspaceKind, WorkspaceSearch
from .workspace import Detector, assemble_workspace

logger = get_logger("javascript")

MANIFEST_NAME = "package.json"


class PackageRepository(BaseModel):
    """The object form of the ``repository`` field."""

    type: str | None = None
    url: str | None = None
    directory: str | None = None


class PackageJson(BaseModel):
    """The subset of package.json fields that describe the package itself."""

    name: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | dict[str, Any] | None = None
    license: str | None = None
    repository: str | PackageRepository | None = None
    homepage: str | None = None


def load_package_json(manifest_path: Path) -> PackageJson:
    """Read and parse a package.json.

    Args:
        manifest_path: Path to the package.json file

    Returns:
        The parsed manifest

    Raises:
        ManifestReadError: if the file can't be read
        ManifestParseError: if the file isn't a JSON object matching the schema
    """
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestReadError(manifest_path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ManifestReadError(manifest_path, e.strerror or str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(manifest_path, str(e)) from e

    if not isinstance(data, dict):
        raise ManifestParseError(manifest_path, f"expected a JSON object, got {type(data).__name__}")

    try:
        return PackageJson.model_validate(data)
    except ValidationError as e:
        raise ManifestParseError(manifest_path, str(e)) from e


def repository_url(repository: str | PackageRepository | None) -> str | None:
    """Normalize the ``repository`` field to a URL string.

    Shorthands like ``"user/repo"`` or ``"github:user/repo"`` are returned
    as written; they are not expanded into full URLs.
    """
    if isinstance(repository, PackageRepository):
        return repository.url
    return repository


def package_info(manifest_path: Path, manifest: PackageJson, warnings: list[str]) -> PackageInfo:
    """Normalize a package.json into a PackageInfo.

    The package is assumed to ship exactly one binary named after itself.
    Readme, documentation and license files can't be declared here and are
    left for auto-include discovery. An object-form author is dropped and
    recorded in ``warnings``.

    Raises:
        MalformedManifestError: if the manifest has no name
    """
    # Virtual workspace manifests commonly have no name
    if not manifest.name:
        raise MalformedManifestError(
            manifest_path, "package has no name; is it a workspace? Those aren't supported yet"
        )

    authors: list[str] = []
    if isinstance(manifest.author, str):
        authors = [manifest.author]
    elif manifest.author is not None:
        warnings.append(f"{manifest.name}: structured 'author' objects aren't supported; author was ignored")

    return PackageInfo(
        manifest_path=manifest_path,
        package_root=manifest_path.parent,
        name=manifest.name,
        version=Version(WorkspaceKind.JAVASCRIPT, manifest.version) if manifest.version else None,
        description=manifest.description,
        authors=authors,
        license=manifest.license,
        publish=True,
        repository_url=repository_url(manifest.repository),
        homepage_url=manifest.homepage,
        binaries=[manifest.name],
    )


class JavaScriptDetector(Detector):
    """Detects npm-style projects from the nearest package.json.

    Workspaces aren't understood: the first package.json found is treated
    as the one and only package.
    """

    kind = WorkspaceKind.JAVASCRIPT
    manifest_name = MANIFEST_NAME
    target_dir_name = "node_modules"

    def get_workspace(self, start_dir: Path | None = None, clamp_dir: Path | None = None) -> WorkspaceSearch:
        if start_dir is None:
            start_dir = Path.cwd()
        return super().get_workspace(start_dir, clamp_dir)

    def workspace_from(self, manifest_path: Path) -> WorkspaceInfo:
        manifest = load_package_json(manifest_path)
        warnings: list[str] = []
        info = package_info(manifest_path, manifest, warnings)
        logger.debug("normalized %s from %s", info.name, manifest_path)

        return assemble_workspace(
            self.kind,
            manifest_path,
            [info],
            target_dir=self.target_dir(manifest_path.parent),
            warnings=warnings,
        )


def get_project(start_dir: Path | None = None, clamp_dir: Path | None = None) -> WorkspaceSearch:
    """Try to find a JavaScript project at or above ``start_dir`` (default: cwd)."""
    return JavaScriptDetector().get_workspace(start_dir, clamp_dir)
