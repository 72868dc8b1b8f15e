"""Tests for workspace assembly and search classification."""

from pathlib import Path

import pytest

from wsprobe.errors import DuplicatePackageError, ManifestParseError, MemberOutsideWorkspaceError
from wsprobe.models import Broken, Found, Missing, PackageInfo, WorkspaceInfo, WorkspaceKind
from wsprobe.workspace import Detector, assemble_workspace


def make_info(root: Path, name: str, **kwargs) -> PackageInfo:
    return PackageInfo(manifest_path=root / "dist.toml", package_root=root, name=name, **kwargs)


class TestAssembleWorkspace:
    """Test combining packages into a WorkspaceInfo."""

    def test_packages_keyed_by_name_in_order(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        packages = [make_info(tmp_path / "b", "beta"), make_info(tmp_path / "a", "alpha")]

        info = assemble_workspace(
            WorkspaceKind.GENERIC,
            tmp_path / "dist.toml",
            packages,
            target_dir=tmp_path / "target",
        )

        assert list(info.package_info) == ["beta", "alpha"]
        assert info.find_package("alpha").package_root == tmp_path / "a"
        assert info.find_package("gamma") is None
        assert info.workspace_dir == tmp_path

    def test_repository_from_first_member_that_has_one(self, tmp_path):
        packages = [
            make_info(tmp_path, "a"),
            make_info(tmp_path, "b", repository_url="https://example.com/b"),
            make_info(tmp_path, "c", repository_url="https://example.com/c"),
        ]

        info = assemble_workspace(
            WorkspaceKind.GENERIC, tmp_path / "dist.toml", packages, target_dir=tmp_path / "target"
        )
        assert info.repository_url == "https://example.com/b"

    def test_no_repository(self, tmp_path):
        info = assemble_workspace(
            WorkspaceKind.GENERIC, tmp_path / "dist.toml", [make_info(tmp_path, "a")], target_dir=tmp_path
        )
        assert info.repository_url is None

    def test_duplicate_names_rejected(self, tmp_path):
        with pytest.raises(DuplicatePackageError):
            assemble_workspace(
                WorkspaceKind.GENERIC,
                tmp_path / "dist.toml",
                [make_info(tmp_path, "a"), make_info(tmp_path, "a")],
                target_dir=tmp_path,
            )

    def test_member_outside_workspace_rejected(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        with pytest.raises(MemberOutsideWorkspaceError):
            assemble_workspace(
                WorkspaceKind.GENERIC, root / "dist.toml", [make_info(tmp_path, "a")], target_dir=root
            )

    def test_result_is_immutable(self, tmp_path):
        info = assemble_workspace(
            WorkspaceKind.GENERIC, tmp_path / "dist.toml", [make_info(tmp_path, "a")], target_dir=tmp_path
        )

        with pytest.raises(TypeError):
            info.package_info["b"] = make_info(tmp_path, "b")
        with pytest.raises(AttributeError):
            info.repository_url = "https://example.com"

    def test_warnings_kept_in_order(self, tmp_path):
        info = assemble_workspace(
            WorkspaceKind.GENERIC,
            tmp_path / "dist.toml",
            [make_info(tmp_path, "a")],
            target_dir=tmp_path,
            warnings=["first", "second"],
        )
        assert info.warnings == ("first", "second")

    def test_explicit_root_auto_includes(self, tmp_path):
        readme = tmp_path / "README"
        info = assemble_workspace(
            WorkspaceKind.GENERIC,
            tmp_path / "dist.toml",
            [make_info(tmp_path, "a")],
            target_dir=tmp_path,
            root_auto_includes=frozenset({readme}),
        )
        assert info.root_auto_includes == {readme}
        assert info.package_info["a"].readme_file == readme


class FakeDetector(Detector):
    kind = WorkspaceKind.GENERIC
    manifest_name = "fake.toml"
    target_dir_name = "out"

    def workspace_from(self, manifest_path: Path) -> WorkspaceInfo:
        if manifest_path.read_text() == "bad":
            raise ManifestParseError(manifest_path, "bad content")
        return assemble_workspace(
            self.kind,
            manifest_path,
            [make_info(manifest_path.parent, "fake")],
            target_dir=self.target_dir(manifest_path.parent),
        )


class TestDetectorClassification:
    """Test the Found/Missing/Broken split."""

    def test_found(self, tmp_path):
        (tmp_path / "fake.toml").write_text("ok")
        search = FakeDetector().get_workspace(tmp_path, tmp_path)

        assert isinstance(search, Found)
        assert search.status == "found"
        assert search.info.target_dir == tmp_path / "out"

    def test_missing_is_not_broken(self, tmp_path):
        search = FakeDetector().get_workspace(tmp_path, tmp_path)

        assert isinstance(search, Missing)
        assert search.status == "missing"
        assert search.cause.filename == "fake.toml"

    def test_broken_keeps_path_and_cause(self, tmp_path):
        (tmp_path / "fake.toml").write_text("bad")
        search = FakeDetector().get_workspace(tmp_path, tmp_path)

        assert isinstance(search, Broken)
        assert search.status == "broken"
        assert search.manifest_path == tmp_path / "fake.toml"
        assert isinstance(search.cause, ManifestParseError)
        assert "bad content" in str(search)
