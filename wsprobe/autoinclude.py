"""Conventional README/LICENSE/CHANGELOG discovery and merging."""

from collections.abc import Iterable
from pathlib import Path

from .errors import ManifestReadError
from .logging import get_logger
from .models import PackageInfo

logger = get_logger("autoinclude")

README_PREFIXES = ("readme",)
LICENSE_PREFIXES = ("license", "licence", "copying", "unlicense")
CHANGELOG_PREFIXES = ("changelog", "changes", "releases")


def is_readme(path: Path) -> bool:
    return path.name.lower().startswith(README_PREFIXES)


def is_license(path: Path) -> bool:
    return path.name.lower().startswith(LICENSE_PREFIXES)


def is_changelog(path: Path) -> bool:
    return path.name.lower().startswith(CHANGELOG_PREFIXES)


def find_auto_includes(directory: Path) -> frozenset[Path]:
    """Collect files in ``directory`` that look like a README, LICENSE or CHANGELOG.

    Only the directory itself is scanned, not its subdirectories.

    Args:
        directory: Directory to scan

    Returns:
        Absolute paths of every candidate file

    Raises:
        ManifestReadError: if the directory can't be listed
    """
    directory = Path(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise ManifestReadError(directory, e.strerror or str(e)) from e

    found = frozenset(
        entry.absolute()
        for entry in entries
        if entry.is_file() and (is_readme(entry) or is_license(entry) or is_changelog(entry))
    )
    logger.debug("auto-includes in %s: %s", directory, sorted(p.name for p in found))
    return found


def merge_auto_includes(info: PackageInfo, auto_includes: Iterable[Path]) -> None:
    """Fill in a package's readme, license files and changelog from discovered files.

    Fields the manifest already declared are left alone, so merging the
    same set twice is the same as merging it once.
    """
    candidates = sorted(auto_includes)

    if info.readme_file is None:
        info.readme_file = next((path for path in candidates if is_readme(path)), None)

    if not info.license_files:
        info.license_files = [path for path in candidates if is_license(path)]

    if info.changelog_file is None:
        info.changelog_file = next((path for path in candidates if is_changelog(path)), None)
