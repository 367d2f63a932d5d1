"""The abstract resolution engine shared by ``Chain`` and ``PartialChain``.

Resolution is a memoized depth-first walk over three kinds of node:
dependency expressions, providers and the synthetic root ``TOP``. Starting
from a requested dependency the engine

1. asks the subclass which supplies satisfy it (``expand_dependency``),
2. expands every dependency an alias stands for,
3. expands all dependencies of the supply's provider, then
4. appends the provider to ``ordered`` and concrete provisions to
   ``provisions``.

Because a provider is appended only after its own dependencies have been
appended, ``ordered`` is a topological build order. Each dependency and each
provider is expanded at most once, and each provision is listed once.

Failures are data, not exceptions: unresolved dependencies, conflicts and
cycles are recorded and the walk continues.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from build_dependency.core.depends import TOP, Depends
from build_dependency.core.provider import Resolution, Supply
from build_dependency.exceptions import FrozenError

logger = logging.getLogger(__name__)


class Resolver(ABC):
    """Base resolver holding the mutable state of one resolution pass.

    Subclasses decide how a dependency maps to supplies
    (``expand_dependency``) and how far private dependencies are followed
    (``follows``). State is populated during construction and frozen
    afterwards.

    Attributes:
        resolved: Dependency -> tuple of supplies, and provider -> the supply
            through which it entered the chain. Both key spaces share one map.
        ordered: ``Resolution`` entries in topological order.
        provisions: Concrete provisions required, in build order. Never
            contains an ``Alias``.
        unresolved: ``(dependency, parent)`` pairs that could not be satisfied.
        conflicts: Dependency -> providers tied after selection and priority.
        cycles: ``(dependency, parent)`` pairs that refer back to a provider
            whose dependencies were still being expanded.
    """

    def __init__(self) -> None:
        self._resolved: dict[Any, Any] = {}
        self._failed: set[Depends] = set()
        self._ordered: list[Resolution] = []
        self._provisions: list[Supply] = []
        self._supplied: set[Supply] = set()
        self._unresolved: list[tuple[Depends, Any]] = []
        self._conflicts: dict[Depends, Any] = {}
        self._cycles: list[tuple[Depends, Any]] = []
        # Providers whose own dependencies are currently being expanded.
        self._expanding: set[Any] = set()
        self._frozen = False

    @property
    def resolved(self) -> Mapping[Any, Any]:
        return self._resolved

    @property
    def ordered(self) -> Sequence[Resolution]:
        return self._ordered

    @property
    def provisions(self) -> Sequence[Supply]:
        return self._provisions

    @property
    def unresolved(self) -> Sequence[tuple[Depends, Any]]:
        return self._unresolved

    @property
    def conflicts(self) -> Mapping[Depends, Any]:
        return self._conflicts

    @property
    def cycles(self) -> Sequence[tuple[Depends, Any]]:
        return self._cycles

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make all resolution state immutable. Idempotent."""
        if self._frozen:
            return

        self._resolved = MappingProxyType(self._resolved)
        self._ordered = tuple(self._ordered)
        self._provisions = tuple(self._provisions)
        self._unresolved = tuple(self._unresolved)
        self._conflicts = MappingProxyType(
            {dependency: tuple(providers) for dependency, providers in self._conflicts.items()}
        )
        self._cycles = tuple(self._cycles)
        self._supplied = frozenset(self._supplied)
        self._expanding = frozenset()
        self._frozen = True

    # -- hooks -------------------------------------------------------------

    @abstractmethod
    def expand_dependency(self, dependency: Depends, parent: Any) -> Sequence[Supply]:
        """Return the supplies satisfying *dependency*, or nothing."""

    def follows(self, dependency: Depends, parent: Any) -> bool:
        """Should *dependency*, requested by *parent*, be traversed at all?

        By default private dependencies are only followed from ``TOP``.
        """
        return parent is TOP or not dependency.private

    # -- traversal ---------------------------------------------------------

    def expand_nested(self, dependencies: Iterable[Any], parent: Any) -> None:
        for dependency in dependencies:
            self.resolve(Depends.coerce(dependency), parent)

    def resolve(self, dependency: Depends, parent: Any) -> None:
        """Expand one *dependency* requested by *parent* into the chain state."""
        if self._frozen:
            raise FrozenError(f"Cannot expand {dependency} on a frozen resolver")

        if not self.follows(dependency, parent):
            logger.debug("Not following private %s from %r", dependency, parent)
            return

        if dependency in self._resolved:
            for supply in self._resolved[dependency]:
                if self._detect_cycle(supply, dependency, parent):
                    break
            return

        if dependency in self._failed:
            self._unresolved.append((dependency, parent))
            return

        logger.debug("Expanding %s from %r", dependency, parent)
        supplies = tuple(self.expand_dependency(dependency, parent))

        if not supplies:
            logger.debug("Could not resolve %s from %r", dependency, parent)
            self._failed.add(dependency)
            self._unresolved.append((dependency, parent))
            return

        # Marked before recursing so re-entrant requests hit the memo.
        self._resolved[dependency] = supplies

        for supply in supplies:
            self._expand_provision(supply, dependency, parent)

    def _expand_provision(self, supply: Supply, dependency: Depends, parent: Any) -> None:
        provider = supply.provider

        # An alias is satisfied by its targets, which come first.
        if supply.is_alias:
            self.expand_nested(supply.dependencies, provider)

        if provider not in self._resolved:
            self._resolved[provider] = supply

            self._expanding.add(provider)
            self.expand_nested(provider.dependencies, provider)
            self._expanding.discard(provider)

            self._ordered.append(Resolution(supply, dependency))
        else:
            self._detect_cycle(supply, dependency, parent)

        if not supply.is_alias and supply not in self._supplied:
            self._supplied.add(supply)
            self._provisions.append(supply)

    def _detect_cycle(self, supply: Supply, dependency: Depends, parent: Any) -> bool:
        for provision in self._concrete_supplies(supply):
            provider = provision.provider
            if provider in self._expanding and provider is not parent:
                logger.warning(
                    "Circular dependency: %r needs %s from %r, which is not yet satisfied",
                    parent, dependency, provider,
                )
                self._cycles.append((dependency, parent))
                return True
        return False

    def _concrete_supplies(self, supply: Supply) -> list[Supply]:
        """The provisions *supply* stands for, looking through aliases.

        An alias is never built, so only the providers of its resolved
        targets can close a cycle.
        """
        found: list[Supply] = []
        pending = [supply]
        seen: set[Supply] = set()

        while pending:
            current = pending.pop(0)
            if current in seen:
                continue
            seen.add(current)

            if not current.is_alias:
                found.append(current)
                continue

            for target in current.dependencies:
                supplies = self._resolved.get(Depends.coerce(target), ())
                pending.extend(supplies)

        return found
