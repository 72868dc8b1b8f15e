"""Upward directory search for manifest files."""

from pathlib import Path

from .errors import ManifestNotFoundError
from .logging import get_logger

logger = get_logger("search")


def find_file(name: str, start_dir: Path, clamp_dir: Path | None = None) -> Path:
    """Find the nearest file called ``name`` at or above ``start_dir``.

    The walk checks ``start_dir`` first, then each parent in turn. If
    ``clamp_dir`` is given it is still searched, but nothing above it is.
    Otherwise the walk ends at the filesystem root.

    Args:
        name: File name to look for, e.g. ``"dist.toml"``
        start_dir: Directory to start searching from
        clamp_dir: Optional ancestor the search must not climb past

    Returns:
        Absolute path of the first match

    Raises:
        ManifestNotFoundError: if no match exists within the bounds
    """
    start = Path(start_dir).absolute()
    clamp = Path(clamp_dir).absolute() if clamp_dir is not None else None

    for directory in (start, *start.parents):
        candidate = directory / name
        if candidate.is_file():
            logger.debug("found %s at %s", name, candidate)
            return candidate
        if clamp is not None and directory == clamp:
            break

    logger.debug("no %s between %s and %s", name, start, clamp or "/")
    raise ManifestNotFoundError(name, start, clamp)
