"""RegistryAdapter protocol: enumerate module identifiers under a prefix."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RegistryAdapter(Protocol):
    def list_under(self, prefix: str, recursive: bool = True) -> set[str]:
        """Return every identifier registered under *prefix* ('' = all)."""
        ...
