"""Tests for YAML provider manifests."""

from __future__ import annotations

from pathlib import Path

import pytest

from build_dependency.core import Chain, Depends, Key
from build_dependency.exceptions import FrozenError, ManifestError
from build_dependency.manifest import Manifest, load_manifest, parse_manifest, parse_name


MANIFEST = """\
selection: [apple]
targets: [salad]
packages:
  - name: apple
    priority: 10
    provides:
      - apple
      - fruit: apple
  - name: banana
    provides:
      - banana
      - ":fruit": [banana]
  - name: salad
    provides: [salad]
    depends:
      - ":fruit"
      - name: dressing
        private: true
  - name: dressing
    provides: [dressing]
"""


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    path = tmp_path / "packages.yaml"
    path.write_text(MANIFEST)
    return path


class TestLoadManifest:

    def test_loads_packages_in_order(self, manifest_file: Path) -> None:
        manifest = load_manifest(manifest_file)

        assert [package.name for package in manifest.packages] == [
            "apple", "banana", "salad", "dressing",
        ]
        assert manifest.selection == ["apple"]
        assert manifest.targets == ["salad"]

    def test_provisions_and_aliases(self, manifest_file: Path) -> None:
        apple = load_manifest(manifest_file).package("apple")

        assert apple.priority == 10
        assert "apple" in apple.provisions
        alias = apple.provisions[Key("fruit")]
        assert alias.is_alias
        assert alias.dependencies == ("apple",)

    def test_colon_prefixed_alias_name(self, manifest_file: Path) -> None:
        banana = load_manifest(manifest_file).package("banana")
        assert banana.provisions[Key("fruit")].dependencies == ("banana",)

    def test_dependencies(self, manifest_file: Path) -> None:
        salad = load_manifest(manifest_file).package("salad")

        assert salad.dependencies == (Depends(Key("fruit")), Depends("dressing"))
        assert salad.dependencies[1].private

    def test_packages_are_frozen(self, manifest_file: Path) -> None:
        salad = load_manifest(manifest_file).package("salad")

        assert salad.frozen
        with pytest.raises(FrozenError):
            salad.provides("soup")

    def test_unknown_package(self, manifest_file: Path) -> None:
        assert load_manifest(manifest_file).package("pear") is None

    def test_resolves(self, manifest_file: Path) -> None:
        manifest = load_manifest(manifest_file)
        chain = Chain.expand(manifest.targets, manifest.packages, manifest.selection)

        assert [r.provider.name for r in chain.ordered] == ["apple", "dressing", "salad"]

    def test_symbolic_targets(self, tmp_path: Path) -> None:
        path = tmp_path / "platform.yaml"
        path.write_text(
            "targets: [':platform', app]\n"
            "packages:\n"
            "  - name: linux\n"
            "    provides: [linux, {platform: linux}]\n"
        )

        manifest = load_manifest(path)

        assert manifest.targets == [Key("platform"), "app"]
        chain = Chain(manifest.targets[:1], manifest.packages)
        assert [r.provider.name for r in chain.ordered] == ["linux"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            load_manifest(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("packages: [unclosed\n")

        with pytest.raises(ManifestError, match="Invalid YAML"):
            load_manifest(path)


class TestParseManifest:

    def test_empty_mapping(self) -> None:
        assert parse_manifest({}) == Manifest()

    def test_defaults(self) -> None:
        manifest = parse_manifest({"packages": [{"name": "solo"}]})
        solo = manifest.package("solo")

        assert solo.priority == 0
        assert dict(solo.provisions) == {}
        assert solo.dependencies == ()

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            "packages",
            {"packages": {"name": "apple"}},
            {"packages": ["apple"]},
            {"packages": [{"provides": ["apple"]}]},
            {"packages": [{"name": "apple", "priority": "high"}]},
            {"packages": [{"name": "apple", "priority": True}]},
            {"packages": [{"name": "apple", "provides": "apple"}]},
            {"packages": [{"name": "apple", "provides": [":apple"]}]},
            {"packages": [{"name": "apple", "provides": [{"fruit": []}]}]},
            {"packages": [{"name": "apple", "depends": "tree"}]},
            {"packages": [{"name": "apple", "depends": [{"private": True}]}]},
            {"packages": [{"name": "apple", "depends": [{"name": "a", "private": "yes"}]}]},
            {"packages": [{"name": "apple", "depends": [""]}]},
            {"packages": [{"name": "apple"}, {"name": "apple"}]},
            {"selection": "apple"},
            {"targets": [1, 2]},
            {"targets": [":"]},
        ],
    )
    def test_invalid_structure(self, data) -> None:
        with pytest.raises(ManifestError):
            parse_manifest(data)

    def test_duplicate_names_reported(self) -> None:
        with pytest.raises(ManifestError, match="Duplicate package name 'apple'"):
            parse_manifest({"packages": [{"name": "apple"}, {"name": "apple"}]})


class TestParseName:

    def test_plain_name(self) -> None:
        assert parse_name("Language/C++17") == "Language/C++17"

    def test_symbolic_name(self) -> None:
        assert parse_name(":platform") == Key("platform")

    @pytest.mark.parametrize("raw", ["", ":", None, 3])
    def test_invalid(self, raw) -> None:
        with pytest.raises(ManifestError, match="expected a non-empty name"):
            parse_name(raw, "target")
