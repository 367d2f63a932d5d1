"""Dependency resolution engine.

Given providers that publish named provisions and declare dependencies, and
a list of requested names, the engine computes a deterministic topological
build order, the concrete provisions to produce, and diagnostics for
anything unresolved or ambiguous.

The package is split into focused submodules:

- ``depends``: Dependency expressions (``Depends``, ``Key``, ``NameKind``)
  and the synthetic root ``TOP``.
- ``provider``: Supplies (``Provision``, ``Alias``), ``Resolution`` and the
  ``Provider`` capability mixin.
- ``package``: ``Package``, a named provider.
- ``resolver``: The abstract memoized expansion engine.
- ``chain``: ``Chain``, a fresh resolution with selection and priority
  tie-breaks.
- ``partial_chain``: ``PartialChain``, one provider's closure re-derived
  from a resolved chain.

All public names are re-exported here, so ``from build_dependency.core
import Chain`` is the supported import path.
"""

from build_dependency.core.depends import TOP, Depends, Key, NameKind
from build_dependency.core.provider import Alias, Provider, Provision, Resolution
from build_dependency.core.package import Package
from build_dependency.core.resolver import Resolver
from build_dependency.core.chain import Chain

# Attach partial derivation to Chain as a method
from build_dependency.core import partial_chain as _partial_chain
from build_dependency.core.partial_chain import PartialChain

Chain.partial = _partial_chain._partial

__all__ = [
    "TOP",
    "Alias",
    "Chain",
    "Depends",
    "Key",
    "NameKind",
    "Package",
    "PartialChain",
    "Provider",
    "Provision",
    "Resolution",
    "Resolver",
]
