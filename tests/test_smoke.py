import json

from click.testing import CliRunner

from build_dependency import __version__
from build_dependency.cli.main import cli


def test_version():
    assert __version__ == "0.1.0"


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Deterministic dependency resolution" in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_resolve_manifest(tmp_path):
    manifest = tmp_path / "packages.yaml"
    manifest.write_text(
        "packages:\n"
        "  - {name: lib, provides: [lib]}\n"
        "  - {name: app, provides: [app], depends: [lib]}\n"
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(manifest), "app", "--format", "json"])
    assert result.exit_code == 0
    ordered = [entry["provider"] for entry in json.loads(result.output)["ordered"]]
    assert ordered == ["lib", "app"]


def test_resolve_reports_missing_dependency(tmp_path):
    manifest = tmp_path / "packages.yaml"
    manifest.write_text("packages:\n  - {name: app, provides: [app], depends: [lib]}\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(manifest), "app"])
    assert result.exit_code == 1
    assert "unresolved lib" in result.output
