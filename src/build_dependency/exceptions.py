"""build-dependency exception hierarchy.

All public exceptions inherit from BuildDependencyError, giving callers a
single base class to catch when they want to handle any resolution failure
without swallowing unrelated errors.

The resolver itself never raises while walking the graph: unresolved
dependencies, conflicts and cycles are recorded on the chain. Only the
convenience entry points (``Chain.expand``, the manifest loader, the CLI)
turn those records into exceptions.
"""

from __future__ import annotations

from typing import Any


class BuildDependencyError(Exception):
    """Base exception for all build-dependency errors."""


class FrozenError(BuildDependencyError):
    """Raised when a frozen provider or resolver is mutated.

    Providers are frozen explicitly by their owner; chains freeze themselves
    at the end of construction.
    """


class ResolutionError(BuildDependencyError):
    """Raised when a top-level resolution cannot be completed.

    The frozen, incomplete chain is attached for diagnostics.
    """

    def __init__(self, message: str, chain: Any) -> None:
        super().__init__(message)
        self.chain = chain


class UnresolvedDependencyError(ResolutionError):
    """Raised when dependencies remain unresolved after full expansion.

    Covers names no provider offers and names where several providers tie
    after explicit selection and priority filtering (see ``conflicts``).
    """

    def __init__(self, chain: Any) -> None:
        super().__init__(
            f"Unresolved dependency chain: {list(chain.unresolved)!r}!", chain
        )

    @property
    def unresolved(self) -> tuple:
        return self.chain.unresolved

    @property
    def conflicts(self):
        return self.chain.conflicts


class CircularDependencyError(ResolutionError):
    """Raised when providers depend on each other in a cycle."""

    def __init__(self, chain: Any) -> None:
        super().__init__(
            f"Circular dependency chain: {list(chain.cycles)!r}!", chain
        )

    @property
    def cycles(self) -> tuple:
        return self.chain.cycles


class ManifestError(BuildDependencyError):
    """Raised when a provider manifest cannot be loaded.

    Covers unreadable files, YAML syntax errors and manifests whose
    structure does not describe a valid set of packages.
    """
