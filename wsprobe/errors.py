"""Error types raised while discovering workspaces."""

from pathlib import Path


class WorkspaceError(Exception):
    """Base class for every workspace discovery failure."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ManifestNotFoundError(WorkspaceError):
    """No manifest with the expected name exists within the search bounds."""

    def __init__(self, filename: str, start_dir: Path, clamp_dir: Path | None = None):
        if clamp_dir is None:
            bounds = f"{start_dir} and its ancestors"
        else:
            bounds = f"{start_dir} up to {clamp_dir}"
        super().__init__(f"couldn't find {filename} in {bounds}")
        self.filename = filename
        self.start_dir = start_dir
        self.clamp_dir = clamp_dir


class ManifestReadError(WorkspaceError):
    """A manifest exists but its bytes could not be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"failed to read {path}: {reason}", path)


class ManifestParseError(WorkspaceError):
    """A manifest was read but does not match its format's grammar."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"failed to parse {path}: {reason}", path)


class MalformedManifestError(WorkspaceError):
    """A manifest parsed cleanly but lacks a required section or field."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path} is malformed: {reason}", path)


class PackageMissingError(WorkspaceError):
    """A workspace member's manifest has no package section."""

    def __init__(self, path: Path):
        super().__init__(f"{path} has no [package] section", path)


class MemberOutsideWorkspaceError(WorkspaceError):
    """A workspace member resolves to a directory outside the workspace root."""

    def __init__(self, member: Path, workspace_dir: Path):
        super().__init__(f"member {member} is not inside workspace {workspace_dir}", member)
        self.workspace_dir = workspace_dir


class DuplicatePackageError(WorkspaceError):
    """Two members of one workspace declare the same package name."""

    def __init__(self, name: str, path: Path):
        super().__init__(f"package name {name!r} is declared more than once (again in {path})", path)
        self.name = name
