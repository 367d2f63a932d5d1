"""Top-level resolution over a universe of providers.

A ``Chain`` searches its providers for every requested dependency. When
several providers supply the same name, the tie is broken by

1. the caller's explicit *selection* of provider names, then
2. the highest provider ``priority``.

If providers are still tied, the dependency is recorded in ``conflicts``
and ``unresolved``; the chain never guesses.

Private dependencies follow a one-hop rule: the direct dependencies of a
provider that satisfies a requested dependency are always expanded, even
when private, because they are that provider's own build requirement.
Deeper private dependencies are hidden from the consumer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from itertools import takewhile
from typing import Any

from build_dependency.core.depends import TOP, Depends
from build_dependency.core.provider import Supply, provides_any
from build_dependency.core.resolver import Resolver
from build_dependency.exceptions import CircularDependencyError, UnresolvedDependencyError

logger = logging.getLogger(__name__)


class Chain(Resolver):
    """A complete, fresh resolution of *dependencies* against *providers*.

    Construction resolves synchronously and freezes the chain. Use
    ``Chain.expand`` to additionally require that nothing is left
    unresolved.

    Args:
        dependencies: Requested names or ``Depends`` expressions.
        providers: Candidate providers, searched in order.
        selection: Provider names preferred when several providers supply
            the same dependency.
    """

    def __init__(
        self,
        dependencies: Iterable[Any],
        providers: Iterable[Any],
        selection: Iterable[str] = (),
    ) -> None:
        super().__init__()

        self._selection = frozenset(selection)
        self._dependencies = tuple(Depends.coerce(dependency) for dependency in dependencies)
        self._providers = tuple(providers)

        # Providers that satisfied a requested dependency; their direct
        # private dependencies are followed.
        self._top_providers: set[Any] = set()

        self.expand_nested(self._dependencies, TOP)
        self.freeze()

        logger.info(
            "Resolved %d dependencies into %d providers (%d unresolved, %d conflicts)",
            len(self._dependencies), len(self.ordered),
            len(self.unresolved), len(self.conflicts),
        )

    @classmethod
    def expand(
        cls,
        dependencies: Iterable[Any],
        providers: Iterable[Any],
        selection: Iterable[str] = (),
    ) -> Chain:
        """Resolve and fail unless the result is complete.

        Raises:
            UnresolvedDependencyError: Some dependency has no unique provider.
            CircularDependencyError: Providers depend on each other in a cycle.
        """
        chain = cls(dependencies, providers, selection)

        if chain.unresolved:
            raise UnresolvedDependencyError(chain)

        if chain.cycles:
            raise CircularDependencyError(chain)

        return chain

    @property
    def selection(self) -> frozenset[str]:
        return self._selection

    @property
    def dependencies(self) -> tuple[Depends, ...]:
        return self._dependencies

    @property
    def providers(self) -> tuple[Any, ...]:
        return self._providers

    # -- privacy -----------------------------------------------------------

    def follows(self, dependency: Depends, parent: Any) -> bool:
        if not dependency.private or parent is TOP:
            return True
        return parent in self._top_providers

    # -- provider search ---------------------------------------------------

    def expand_dependency(self, dependency: Depends, parent: Any) -> Sequence[Supply]:
        if dependency.is_wildcard:
            supplies = self._expand_wildcard(dependency, parent)
        else:
            supplies = self._find_supplies(dependency)

        if dependency in self._dependencies:
            self._top_providers.update(supply.provider for supply in supplies)

        return supplies

    def _expand_wildcard(self, dependency: Depends, parent: Any) -> list[Supply]:
        names: dict[Any, None] = {}
        for provider in self._providers:
            for name, _ in provider.filter(dependency):
                names.setdefault(name, None)

        logger.debug("Wildcard %s matched %s", dependency, list(names))

        supplies: list[Supply] = []
        for name in names:
            concrete = Depends(name, private=dependency.private)
            if concrete in self._resolved:
                supplies.extend(self._resolved[concrete])
                continue

            if concrete in self._failed:
                found = []
            else:
                found = self._find_supplies(concrete)
                if found:
                    self._resolved[concrete] = tuple(found)
                else:
                    self._failed.add(concrete)

            if not found and concrete in self._conflicts:
                self._unresolved.append((concrete, parent))
            supplies.extend(found)

        return supplies

    def _find_supplies(self, dependency: Depends) -> list[Supply]:
        provider = self._select_provider(dependency)
        if provider is None:
            return []
        return [provider.provision_for(dependency)]

    def _select_provider(self, dependency: Depends) -> Any | None:
        # Mostly, only one provider will satisfy the dependency...
        viable = provides_any(self._providers, dependency)

        if len(viable) <= 1:
            return viable[0] if viable else None

        logger.debug(
            "%d providers for %s: %r", len(viable), dependency, viable
        )

        # ...however where aliases are used an explicit selection is often
        # needed to pick one.
        candidates = self._filter_by_selection(viable)

        if len(candidates) != 1:
            candidates = self._filter_by_priority(candidates or viable)

        if len(candidates) == 1:
            return candidates[0]

        logger.debug("Conflict for %s between %r", dependency, candidates)
        self._conflicts[dependency] = candidates
        return None

    def _filter_by_selection(self, viable: list[Any]) -> list[Any]:
        return [
            provider for provider in viable
            if getattr(provider, "name", None) in self._selection
        ]

    @staticmethod
    def _filter_by_priority(viable: list[Any]) -> list[Any]:
        # Stable sort keeps input order among equal priorities.
        ranked = sorted(viable, key=lambda provider: provider.priority, reverse=True)
        highest = ranked[0].priority
        return list(takewhile(lambda provider: provider.priority == highest, ranked))
