"""Test that project structure is correct and modules can be imported."""

from pathlib import Path

import wsprobe.autoinclude
import wsprobe.detect
import wsprobe.generic
import wsprobe.javascript
import wsprobe.models
import wsprobe.search
from wsprobe.models import PackageInfo, WorkspaceKind


def test_core_modules_importable():
    """Ensure core modules can be imported."""
    # This will fail if modules have syntax errors or missing dependencies

    # Basic smoke test - ensure key classes exist
    assert hasattr(wsprobe.models, "PackageInfo")
    assert hasattr(wsprobe.models, "WorkspaceInfo")
    assert hasattr(wsprobe.models, "Broken")
    assert hasattr(wsprobe.search, "find_file")
    assert hasattr(wsprobe.autoinclude, "merge_auto_includes")
    assert hasattr(wsprobe.generic, "GenericDetector")
    assert hasattr(wsprobe.javascript, "JavaScriptDetector")
    assert hasattr(wsprobe.detect, "get_workspaces")


def test_model_creation():
    """Test that basic models can be instantiated with empty list defaults."""
    info = PackageInfo(manifest_path=Path("dist.toml"), package_root=Path("."), name="demo")
    assert info.name == "demo"
    assert info.authors == []
    assert info.license_files == []
    assert info.binaries == []
    assert info.publish is True
    assert WorkspaceKind("generic") is WorkspaceKind.GENERIC
