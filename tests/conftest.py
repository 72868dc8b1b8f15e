"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def sample_dist_toml():
    """Single-package dist.toml content for testing."""
    return """
[package]
name = "demo"
version = "1.2.3"
binaries = ["demo"]
build-command = ["make"]
"""


@pytest.fixture
def sample_package_json():
    """Sample package.json content for testing."""
    return """
{
  "name": "test-project",
  "version": "0.4.0",
  "description": "A test project",
  "author": "Jane Doe",
  "license": "MIT",
  "repository": "https://github.com/example/test-project",
  "dependencies": {
    "express": "^4.18.0"
  }
}
"""


@pytest.fixture
def write_package():
    """Write a minimal single-package dist.toml into a directory."""

    def _write(directory: Path, name: str, extra: str = "") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        manifest = directory / "dist.toml"
        manifest.write_text(
            f'[package]\nname = "{name}"\nbinaries = ["{name}"]\nbuild-command = ["make"]\n{extra}'
        )
        return manifest

    return _write


@pytest.fixture
def two_member_workspace(tmp_path, write_package):
    """A workspace root listing two valid members, a and b."""
    (tmp_path / "dist.toml").write_text('[workspace]\nmembers = ["a", "b"]\n')
    write_package(tmp_path / "a", "alpha")
    write_package(tmp_path / "b", "beta")
    return tmp_path
