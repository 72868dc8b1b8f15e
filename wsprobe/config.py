"""Configuration loading for wsprobe (.wsprobe.toml)."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .detect import parse_kind
from .models import WorkspaceKind

CONFIG_FILENAME = ".wsprobe.toml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProbeConfig:
    """Settings that shape a workspace search."""

    clamp_dir: Path | None = None
    kinds: list[WorkspaceKind] = field(default_factory=list)
    verbose: bool = False


def load_config(config_path: Path) -> ProbeConfig:
    """Load configuration from disk.

    A missing file yields the defaults. A relative ``clamp`` is resolved
    against the directory holding the config file.

    Args:
        config_path: The config file, or a directory containing .wsprobe.toml

    Returns:
        The loaded settings

    Raises:
        ConfigError: if the file is unreadable, not TOML, or has bad values
    """
    config_file = config_path / CONFIG_FILENAME if config_path.is_dir() else config_path
    if not config_file.exists():
        return ProbeConfig()

    try:
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Unable to read {config_file}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e

    return _build_config(data, config_file.parent.resolve(), config_file)


def _build_config(data: dict[str, Any], root: Path, config_file: Path) -> ProbeConfig:
    config = ProbeConfig()

    clamp = data.get("clamp")
    if clamp is not None:
        if not isinstance(clamp, str):
            raise ConfigError(f"'clamp' in {config_file} must be a string")
        config.clamp_dir = (root / clamp).resolve()

    ecosystems = data.get("ecosystems", [])
    if not isinstance(ecosystems, list) or not all(isinstance(item, str) for item in ecosystems):
        raise ConfigError(f"'ecosystems' in {config_file} must be a list of strings")
    try:
        config.kinds = [parse_kind(item) for item in ecosystems]
    except ValueError as e:
        raise ConfigError(f"{config_file}: {e}") from e

    verbose = data.get("verbose", False)
    if not isinstance(verbose, bool):
        raise ConfigError(f"'verbose' in {config_file} must be true or false")
    config.verbose = verbose

    return config
