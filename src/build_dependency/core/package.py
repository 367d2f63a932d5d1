"""A named package: the usual concrete ``Provider``."""

from __future__ import annotations

from build_dependency.core.provider import Provider


class Package(Provider):
    """A provider identified by name.

    The name is what an explicit selection refers to when several packages
    supply the same dependency. Packages compare by identity, so two
    packages with the same name are still distinct providers.
    """

    def __init__(self, name: str | None = None, priority: int = 0) -> None:
        super().__init__(priority=priority)
        self.name = name

    def __repr__(self) -> str:
        return f"<Package:{self.name}>"
