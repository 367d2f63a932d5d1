"""build-dependency: Deterministic dependency resolution for build providers."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
