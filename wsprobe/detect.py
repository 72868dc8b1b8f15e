"""Ecosystem detection for workspace manifests."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .generic import GenericDetector
from .javascript import JavaScriptDetector
from .logging import get_logger
from .models import Broken, Found, WorkspaceInfo, WorkspaceKind, WorkspaceSearch
from .workspace import Detector

logger = get_logger("detect")

# Order is the tie-break when two ecosystems are found in the same directory
DETECTORS: dict[WorkspaceKind, Detector] = {
    WorkspaceKind.GENERIC: GenericDetector(),
    WorkspaceKind.JAVASCRIPT: JavaScriptDetector(),
}


def identify(filename: str) -> WorkspaceKind | None:
    """Detect the ecosystem a manifest file belongs to from its name.

    Args:
        filename: The manifest file name or path

    Returns:
        The matching workspace kind, or None if no detector owns that file
    """
    name = Path(filename).name
    for kind, detector in DETECTORS.items():
        if detector.manifest_name == name:
            return kind
    return None


def parse_kind(value: str) -> WorkspaceKind:
    """Turn a user-supplied ecosystem name into a WorkspaceKind.

    Raises:
        ValueError: if the name isn't a known ecosystem
    """
    try:
        return WorkspaceKind(value.strip().lower())
    except ValueError:
        known = ", ".join(kind.value for kind in WorkspaceKind)
        raise ValueError(f"unknown ecosystem {value!r} (expected one of: {known})") from None


@dataclass(frozen=True)
class Workspaces:
    """The result of probing one directory with several detectors."""

    searches: dict[WorkspaceKind, WorkspaceSearch]

    def __getitem__(self, kind: WorkspaceKind) -> WorkspaceSearch:
        return self.searches[kind]

    def found(self) -> list[WorkspaceInfo]:
        return [search.info for search in self.searches.values() if isinstance(search, Found)]

    def broken(self) -> list[Broken]:
        return [search for search in self.searches.values() if isinstance(search, Broken)]

    def best(self) -> WorkspaceInfo | None:
        """Pick the workspace closest to where the search started.

        Returns:
            The found workspace with the deepest manifest, or None if every
            detector came back missing

        Raises:
            WorkspaceError: the first broken manifest's cause, when nothing was found
        """
        found = self.found()
        if found:
            # max() keeps the first of equal depths, i.e. registry order
            return max(found, key=lambda info: len(info.workspace_dir.parts))

        broken = self.broken()
        if broken:
            raise broken[0].cause
        return None


def get_workspaces(
    start_dir: Path,
    clamp_dir: Path | None = None,
    kinds: Iterable[WorkspaceKind] | None = None,
) -> Workspaces:
    """Probe ``start_dir`` with every registered detector, or just ``kinds``.

    Args:
        start_dir: Directory to start searching from
        clamp_dir: Optional ancestor no search may climb past
        kinds: Restrict probing to these ecosystems

    Returns:
        One search outcome per probed ecosystem
    """
    selected = set(kinds) if kinds is not None else set(DETECTORS)
    searches: dict[WorkspaceKind, WorkspaceSearch] = {}
    for kind, detector in DETECTORS.items():
        if kind not in selected:
            continue
        searches[kind] = detector.get_workspace(start_dir, clamp_dir)
        logger.debug("%s search from %s: %s", kind.value, start_dir, searches[kind].status)
    return Workspaces(searches)
