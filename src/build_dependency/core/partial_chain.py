"""Scoped re-derivation of a resolved chain.

A ``PartialChain`` answers "what exactly does this one provider need to
build?" after a full ``Chain`` has been resolved. It does no provider search
of its own: every dependency maps to whatever the parent chain already
chose, so selection and priority tie-breaks are inherited unchanged.

Privacy is scoped to the narrowed request: the requested dependencies are
the direct dependencies of one (virtual) top provider, so they are followed
even when private. Anything private further down is not.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from build_dependency.core.chain import Chain
from build_dependency.core.depends import TOP, Depends
from build_dependency.core.provider import Supply
from build_dependency.core.resolver import Resolver


class PartialChain(Resolver):
    """The closure of *dependencies* within an already-resolved *chain*.

    Args:
        chain: A resolved ``Chain``. Its ``resolved`` map is the only source
            of supplies.
        dependencies: The narrowed list of requested names, typically one
            provider's ``dependencies``.
    """

    def __init__(self, chain: Chain, dependencies: Iterable[Any]) -> None:
        super().__init__()

        self._chain = chain
        self._dependencies = tuple(Depends.coerce(dependency) for dependency in dependencies)

        self.expand_nested(self._dependencies, TOP)
        self.freeze()

    @property
    def chain(self) -> Chain:
        return self._chain

    @property
    def dependencies(self) -> tuple[Depends, ...]:
        return self._dependencies

    @property
    def selection(self) -> frozenset[str]:
        return self._chain.selection

    @property
    def providers(self) -> tuple[Any, ...]:
        return self._chain.providers

    def follows(self, dependency: Depends, parent: Any) -> bool:
        return not dependency.private or dependency in self._dependencies

    def expand_dependency(self, dependency: Depends, parent: Any) -> Sequence[Supply]:
        return self._chain.resolved.get(dependency, ())


def _partial(self: Chain, provider: Any) -> PartialChain:
    """Return the partial chain of *provider*'s own dependencies."""
    return PartialChain(self, provider.dependencies)
