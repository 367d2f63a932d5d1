"""YAML provider manifests for the command line tool.

The resolution engine takes in-memory providers; this module is the outer
layer that builds them from a file::

    selection: [apple]
    targets: [salad]
    packages:
      - name: apple
        priority: 10
        provides:
          - apple
          - fruit: apple
        depends:
          - lib
          - name: ":platform"
            private: true

A mapping entry under ``provides`` declares an alias. A dependency name,
targets included, starting with ``:`` is symbolic (``":platform"`` is
``Key("platform")``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from build_dependency.core import Depends, Key, Package
from build_dependency.core.depends import Name
from build_dependency.exceptions import ManifestError

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    """Providers and default request loaded from a manifest file.

    Attributes:
        packages: Frozen packages, in file order.
        selection: Package names preferred when several supply a name.
        targets: Dependency names to resolve when none are given.
    """

    packages: list[Package] = field(default_factory=list)
    selection: list[str] = field(default_factory=list)
    targets: list[Name] = field(default_factory=list)

    def package(self, name: str) -> Package | None:
        for package in self.packages:
            if package.name == name:
                return package
        return None


def parse_name(raw: Any, where: str = "name") -> Name:
    """Convert a written dependency name; a leading ``:`` makes it a ``Key``.

    Raises:
        ManifestError: If *raw* is not a non-empty string.
    """
    if not isinstance(raw, str) or raw in ("", ":"):
        raise ManifestError(f"{where}: expected a non-empty name, got {raw!r}")
    if raw.startswith(":"):
        return Key(raw[1:])
    return raw


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ManifestError(f"'{key}' must be a list of names")
    return list(value)


def _parse_provides(package: Package, entries: Any, where: str) -> None:
    if not isinstance(entries, list):
        raise ManifestError(f"{where}: 'provides' must be a list")

    for entry in entries:
        if isinstance(entry, dict):
            for key, targets in entry.items():
                if isinstance(targets, str):
                    targets = [targets]
                if not isinstance(targets, list) or not targets:
                    raise ManifestError(f"{where}: alias {key!r} needs at least one target")
                alias = parse_name(key, where)
                if not isinstance(alias, Key):
                    alias = Key(alias)
                package.provides({alias: [parse_name(target, where) for target in targets]})
        else:
            name = parse_name(entry, where)
            if isinstance(name, Key):
                raise ManifestError(f"{where}: provision {entry!r} cannot be symbolic")
            package.provides(name)


def _parse_depends(package: Package, entries: Any, where: str) -> None:
    if not isinstance(entries, list):
        raise ManifestError(f"{where}: 'depends' must be a list")

    for entry in entries:
        if isinstance(entry, dict):
            private = entry.get("private", False)
            if not isinstance(private, bool):
                raise ManifestError(f"{where}: 'private' must be true or false")
            package.depends(Depends(parse_name(entry.get("name"), where), private=private))
        else:
            package.depends(parse_name(entry, where))


def _parse_package(data: Any, index: int) -> Package:
    if not isinstance(data, dict):
        raise ManifestError(f"packages[{index}]: expected a mapping")

    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"packages[{index}]: missing package name")

    priority = data.get("priority", 0)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise ManifestError(f"package {name!r}: priority must be an integer")

    package = Package(name, priority=priority)
    _parse_provides(package, data.get("provides") or [], f"package {name!r}")
    _parse_depends(package, data.get("depends") or [], f"package {name!r}")
    package.freeze()

    return package


def parse_manifest(data: Any) -> Manifest:
    """Build a ``Manifest`` from already-parsed YAML data.

    Raises:
        ManifestError: If the structure is invalid.
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a mapping")

    packages_data = data.get("packages") or []
    if not isinstance(packages_data, list):
        raise ManifestError("'packages' must be a list")

    manifest = Manifest(
        selection=_string_list(data, "selection"),
        targets=[parse_name(target, "targets") for target in _string_list(data, "targets")],
    )

    seen: set[str] = set()
    for index, entry in enumerate(packages_data):
        package = _parse_package(entry, index)
        if package.name in seen:
            raise ManifestError(f"Duplicate package name {package.name!r}")
        seen.add(package.name)
        manifest.packages.append(package)

    logger.debug("Loaded %d packages", len(manifest.packages))
    return manifest


def load_manifest(path: Path) -> Manifest:
    """Read and parse a manifest file.

    Raises:
        ManifestError: If the file is unreadable, not valid YAML, or does
            not describe a valid set of packages.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in manifest {path}: {exc}") from exc

    return parse_manifest(data)
