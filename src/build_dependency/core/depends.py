"""Dependency expressions: the names a provider asks for.

A dependency name is one of three kinds:

- **concrete** -- a plain string such as ``"Language/C++17"``, matched
  literally against provision names.
- **wildcard** -- a string containing shell-glob metacharacters such as
  ``"fruit-*"``, which fans out to every concrete provision it matches.
- **symbolic** -- a ``Key`` such as ``Key("platform")``, which names an
  alias that stands for one or more other dependencies.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, Union

# Characters that make a string name a shell-glob pattern.
_GLOB_CHARS = frozenset("*?[")


# ---------------------------------------------------------------------------
# Key & NameKind: Tagged dependency names
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Key:
    """A symbolic dependency name, used to key aliases.

    ``Key("platform")`` and the string ``"platform"`` are different names:
    the former can only be satisfied by an alias, the latter only by a
    provision registered under that exact string.
    """

    name: str

    def __repr__(self) -> str:
        return f"Key({self.name!r})"

    def __str__(self) -> str:
        return self.name


Name = Union[str, Key]


class NameKind(enum.Enum):
    """How a dependency name is matched against provisions."""

    CONCRETE = "concrete"
    WILDCARD = "wildcard"
    SYMBOLIC = "symbolic"

    @classmethod
    def of(cls, name: Name) -> NameKind:
        if isinstance(name, Key):
            return cls.SYMBOLIC
        if isinstance(name, str):
            if _GLOB_CHARS.intersection(name):
                return cls.WILDCARD
            return cls.CONCRETE
        raise TypeError(f"Invalid dependency name: {name!r}")


# ---------------------------------------------------------------------------
# Depends: A dependency expression
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Depends:
    """A named requirement plus options.

    Identity is by name only: ``Depends("a", private=True) == Depends("a")``.
    This lets a private dependency declared by one provider and a public
    request for the same name share one memoized resolution.

    Attributes:
        name: A string, wildcard string or ``Key``.
        private: Implementation-only dependency. Private dependencies are
            only followed one hop past a top-level request; they do not leak
            transitively into a consumer's build graph.
    """

    name: Name
    private: bool = False

    def __post_init__(self) -> None:
        # Validates the name eagerly so bad input fails at declaration time.
        NameKind.of(self.name)

    @classmethod
    def coerce(cls, name_or_dependency: Any) -> Depends:
        """Return *name_or_dependency* as a ``Depends``, unchanged if it is one."""
        if isinstance(name_or_dependency, cls):
            return name_or_dependency
        return cls(name_or_dependency)

    @property
    def kind(self) -> NameKind:
        return NameKind.of(self.name)

    @property
    def is_alias(self) -> bool:
        return self.kind is NameKind.SYMBOLIC

    @property
    def is_wildcard(self) -> bool:
        return self.kind is NameKind.WILDCARD

    @property
    def options(self) -> dict[str, Any]:
        """Options that were set explicitly, for display."""
        return {"private": True} if self.private else {}

    def match(self, name: Name) -> bool:
        """Check whether a concrete provision name satisfies this expression.

        Wildcards use case-sensitive shell-glob semantics; every other kind
        compares names for equality. Symbolic provision names never match a
        wildcard.
        """
        if self.is_wildcard:
            return isinstance(name, str) and fnmatchcase(name, self.name)
        return name == self.name

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Depends):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        if self.options:
            return f"depends on {self.name!r} {self.options!r}"
        return f"depends on {self.name!r}"


# The synthetic root: the parent of every dependency requested at top level.
TOP = Depends("<top>")
