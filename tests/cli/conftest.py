"""Shared fixtures for CLI tests.

Provides manifest files describing small provider universes: one that
resolves cleanly, one with an ambiguous provider, and one with a cycle.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def salad_manifest(tmp_path: Path) -> Path:
    """Two packages provide ``fruit``; resolving ``salad`` needs a selection."""
    path = tmp_path / "salad.yaml"
    path.write_text(
        "targets: [salad]\n"
        "packages:\n"
        "  - name: apple\n"
        "    provides: [apple, fruit]\n"
        "  - name: banana\n"
        "    provides: [fruit]\n"
        "  - name: salad\n"
        "    provides: [salad]\n"
        "    depends: [fruit]\n"
    )
    return path


@pytest.fixture
def app_manifest(tmp_path: Path) -> Path:
    """An application, its library and a platform reached through an alias."""
    path = tmp_path / "app.yaml"
    path.write_text(
        "targets: [app, lib]\n"
        "packages:\n"
        "  - name: app\n"
        "    provides: [app]\n"
        "    depends:\n"
        "      - {name: lib, private: true}\n"
        "      - {name: ':platform', private: true}\n"
        "  - name: lib\n"
        "    provides: [lib]\n"
        "    depends:\n"
        "      - {name: ':platform', private: true}\n"
        "  - name: Platform/linux\n"
        "    provides:\n"
        "      - Platform/linux\n"
        "      - platform: Platform/linux\n"
    )
    return path


@pytest.fixture
def cycle_manifest(tmp_path: Path) -> Path:
    path = tmp_path / "cycle.yaml"
    path.write_text(
        "packages:\n"
        "  - {name: a, provides: [a], depends: [b]}\n"
        "  - {name: b, provides: [b], depends: [a]}\n"
    )
    return path
