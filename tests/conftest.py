"""Shared provider fixtures for build-dependency tests.

The "app packages" scenario models a small C++ project: an application and
a test runner both privately depend on a library, a platform (reached via
the ``:platform`` alias, which itself depends on the ``:variant`` alias)
and a compiler language level.
"""

from __future__ import annotations

import pytest

from build_dependency.core import Key, Package


@pytest.fixture
def app() -> Package:
    package = Package("app")
    package.provides("app")
    package.depends("lib", private=True)
    package.depends(Key("platform"), private=True)
    package.depends("Language/C++14", private=True)
    return package


@pytest.fixture
def tests_package() -> Package:
    package = Package("tests")
    package.provides("tests")
    package.depends("lib", private=True)
    package.depends(Key("platform"), private=True)
    package.depends("Language/C++17", private=True)
    return package


@pytest.fixture
def lib() -> Package:
    package = Package("lib")
    package.provides("lib")
    package.depends(Key("platform"), private=True)
    package.depends("Language/C++17", private=True)
    return package


@pytest.fixture
def platform() -> Package:
    package = Package("Platform/linux")
    package.provides(platform="Platform/linux")
    package.provides("Platform/linux")
    package.depends(Key("variant"))
    return package


@pytest.fixture
def variant() -> Package:
    package = Package("Variant/debug")
    package.provides(variant="Variant/debug")
    package.provides("Variant/debug")
    return package


@pytest.fixture
def compiler() -> Package:
    package = Package("Compiler/clang")
    package.provides("Language/C++14")
    package.provides("Language/C++17")
    return package


@pytest.fixture
def packages(
    app: Package,
    tests_package: Package,
    lib: Package,
    platform: Package,
    variant: Package,
    compiler: Package,
) -> list[Package]:
    """All app-scenario packages, in declaration order."""
    return [app, tests_package, lib, platform, variant, compiler]
