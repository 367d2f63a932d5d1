"""Provisions, aliases and the ``Provider`` capability.

A provider publishes named *supplies* and declares the dependencies it
needs. A supply is one of two variants:

- ``Provision`` -- a concrete, terminal artifact with an opaque payload
  (e.g. a deferred configuration callback). Provisions are what actually
  gets built.
- ``Alias`` -- pure indirection. Resolving an alias means resolving the
  dependencies it stands for; an alias is never itself built.

``Provider`` is a mixin: any domain object (typically a package) gains the
capability by inheriting from it and calling ``Provider.__init__``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from build_dependency.core.depends import Depends, Key, Name, NameKind
from build_dependency.exceptions import FrozenError


# ---------------------------------------------------------------------------
# Supplies: Provision & Alias
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Provision:
    """A concrete artifact supplied under ``name`` by ``provider``."""

    name: Name
    provider: Any = field(repr=False)
    value: Any = None

    @property
    def is_alias(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"provides {self.name!r}"


@dataclass(frozen=True, eq=False)
class Alias:
    """A symbolic name standing for an ordered list of dependencies."""

    name: Key
    provider: Any = field(repr=False)
    dependencies: tuple[Any, ...] = ()

    @property
    def is_alias(self) -> bool:
        return True

    def __str__(self) -> str:
        targets = ", ".join(repr(dependency) for dependency in self.dependencies)
        return f"provides {self.name!r} -> {targets}"


Supply = Union[Provision, Alias]


# ---------------------------------------------------------------------------
# Resolution: One step of a resolved chain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Resolution:
    """Records that ``provision`` was selected to satisfy ``dependency``.

    Resolutions are the unit of a chain's topological order.
    """

    provision: Supply
    dependency: Depends

    @property
    def provider(self) -> Any:
        return self.provision.provider

    @property
    def name(self) -> Name:
        return self.dependency.name

    def __str__(self) -> str:
        provider_name = getattr(self.provider, "name", self.provider)
        return f"resolution {provider_name!r} -> {self.name!r}"


# ---------------------------------------------------------------------------
# Provider: The capability mixin
# ---------------------------------------------------------------------------


def _alias_targets(dependencies: Any) -> tuple[Any, ...]:
    if isinstance(dependencies, (str, Key, Depends)):
        return (dependencies,)
    return tuple(dependencies)


class Provider:
    """Gives a domain object a priority, named supplies and dependencies.

    Mutators fail with ``FrozenError`` once ``freeze()`` has been called.
    The resolver only ever reads providers.

    Args:
        priority: Tie-break weight when several providers supply the same
            name; higher wins.
    """

    def __init__(self, priority: int = 0) -> None:
        self._priority = priority
        self._provisions: dict[Name, Supply] = {}
        # Insertion-ordered set: keeps declaration order for deterministic
        # traversal, first declaration wins on duplicate names.
        self._dependencies: dict[Depends, None] = {}
        self._frozen = False

    # -- state -------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise FrozenError(f"Cannot modify frozen provider {self!r}")

    @property
    def priority(self) -> int:
        return self._priority

    @priority.setter
    def priority(self, value: int) -> None:
        self._check_mutable()
        self._priority = value

    @property
    def provisions(self) -> Mapping[Name, Supply]:
        """Read-only table of supplies by name."""
        return MappingProxyType(self._provisions)

    @property
    def dependencies(self) -> tuple[Depends, ...]:
        """Declared dependencies, unique by name, in declaration order."""
        return tuple(self._dependencies)

    # -- declaration -------------------------------------------------------

    def provides(
        self,
        name_or_aliases: Name | Mapping[Any, Any] | None = None,
        value: Any = None,
        **aliases: Any,
    ) -> None:
        """Register a provision, or one alias per mapping entry.

        ``provides("clang", value)`` registers a concrete provision,
        replacing any supply already registered under that name.
        ``provides({Key("compiler"): "clang"})`` and the keyword form
        ``provides(compiler="clang")`` register ``Alias`` entries whose
        dependencies are the given name(s). Alias names are always symbolic.
        """
        self._check_mutable()

        if isinstance(name_or_aliases, (str, Key)):
            self._provisions[name_or_aliases] = Provision(
                name_or_aliases, self, value
            )
        elif isinstance(name_or_aliases, Mapping):
            aliases = {**name_or_aliases, **aliases}
        elif name_or_aliases is not None:
            raise TypeError(f"Invalid provision name: {name_or_aliases!r}")

        for key, dependencies in aliases.items():
            if not isinstance(key, Key):
                key = Key(key)
            self._provisions[key] = Alias(key, self, _alias_targets(dependencies))

    def depends(self, *names: Any, private: bool = False) -> None:
        """Declare one dependency per name."""
        self._check_mutable()

        for name in names:
            if isinstance(name, Depends):
                dependency = name
            else:
                dependency = Depends(name, private=private)
            self._dependencies.setdefault(dependency, None)

    # -- queries -----------------------------------------------------------

    def depends_on(self, name: Any) -> bool:
        return Depends.coerce(name) in self._dependencies

    def can_provide(self, dependency: Depends) -> bool:
        """Does this provider have a supply registered under the name?"""
        return dependency.name in self._provisions

    def provision_for(self, dependency: Depends) -> Supply | None:
        return self._provisions.get(dependency.name)

    def resolution_for(self, dependency: Depends) -> Resolution:
        return Resolution(self.provision_for(dependency), dependency)

    def filter(self, dependency: Depends) -> list[tuple[Name, Supply]]:
        """Return ``(name, supply)`` pairs whose name matches *dependency*.

        Used for wildcard expansion, so only string names are considered.
        """
        return [
            (name, supply)
            for name, supply in self._provisions.items()
            if NameKind.of(name) is not NameKind.SYMBOLIC and dependency.match(name)
        ]


def provides_any(providers: Iterable[Any], dependency: Depends) -> list[Any]:
    """Return the providers able to supply *dependency*, in input order."""
    return [provider for provider in providers if provider.can_provide(dependency)]
