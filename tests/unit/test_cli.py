"""Tests for CLI functionality."""

import json

from typer.testing import CliRunner

from apps.cli.main import app


class TestCLI:
    """Test CLI command interface."""

    def setup_method(self):
        """Setup test fixtures."""
        self.runner = CliRunner()

    def test_cli_help_command(self):
        """Should display help when called with --help."""
        result = self.runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "workspace" in result.output.lower()
        assert "--clamp" in result.output

    def test_discover_single_package_text(self, tmp_path, sample_dist_toml):
        """Should print a table of packages for a found workspace."""
        (tmp_path / "dist.toml").write_text(sample_dist_toml)

        result = self.runner.invoke(app, [str(tmp_path), "--clamp", str(tmp_path)])

        assert result.exit_code == 0
        assert "generic" in result.output
        assert "demo" in result.output
        assert "1.2.3" in result.output

    def test_discover_json(self, tmp_path, two_member_workspace):
        """Should emit machine-readable JSON for a found workspace."""
        result = self.runner.invoke(
            app, [str(two_member_workspace), "--clamp", str(two_member_workspace), "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "found"
        assert data["workspace"]["kind"] == "generic"
        assert [p["name"] for p in data["workspace"]["packages"]] == ["alpha", "beta"]
        assert data["workspace"]["repository_url"] is None

    def test_discover_missing_exit_code(self, tmp_path):
        """Should exit 2 when nothing is found."""
        result = self.runner.invoke(app, [str(tmp_path), "--clamp", str(tmp_path)])

        assert result.exit_code == 2
        assert "No workspace found" in result.output

    def test_discover_missing_json(self, tmp_path):
        result = self.runner.invoke(app, [str(tmp_path), "--clamp", str(tmp_path), "--format", "json"])

        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["status"] == "missing"
        assert len(data["causes"]) == 2

    def test_discover_broken(self, tmp_path):
        """Should exit 1 and say which manifest is broken."""
        (tmp_path / "dist.toml").write_text('title = "nope"\n')

        result = self.runner.invoke(
            app, [str(tmp_path), "--clamp", str(tmp_path), "--format", "json"]
        )

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["status"] == "broken"
        assert data["manifest_path"] == str(tmp_path / "dist.toml")
        assert "malformed" in data["cause"]

    def test_kind_option_limits_search(self, tmp_path, sample_dist_toml):
        """Should only probe the requested ecosystem."""
        (tmp_path / "dist.toml").write_text(sample_dist_toml)

        result = self.runner.invoke(app, [str(tmp_path), "--clamp", str(tmp_path), "--kind", "javascript"])

        assert result.exit_code == 2

    def test_unknown_kind(self, tmp_path):
        result = self.runner.invoke(app, [str(tmp_path), "--kind", "cobol"])

        assert result.exit_code == 1
        assert "unknown ecosystem" in result.output.replace("\n", " ")

    def test_config_file_supplies_defaults(self, tmp_path, sample_dist_toml):
        """Should read ecosystems from .wsprobe.toml in the start directory."""
        (tmp_path / "dist.toml").write_text(sample_dist_toml)
        (tmp_path / ".wsprobe.toml").write_text('clamp = "."\necosystems = ["javascript"]\n')

        result = self.runner.invoke(app, [str(tmp_path)])

        assert result.exit_code == 2

    def test_nonexistent_directory(self, tmp_path):
        result = self.runner.invoke(app, [str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "not found" in result.output.replace("\n", " ")
