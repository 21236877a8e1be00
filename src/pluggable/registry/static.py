"""StaticRegistry: identifiers registered explicitly at init time."""

from __future__ import annotations

from collections.abc import Iterable

from pluggable.core.errors import InvalidArgumentError


class StaticRegistry:
    """In-memory registry fed by register() calls instead of a filesystem scan."""

    def __init__(self, identifiers: Iterable[str] = ()):
        self._identifiers: set[str] = set()
        self.register(*identifiers)

    def register(self, *identifiers: str) -> None:
        for ident in identifiers:
            if not isinstance(ident, str) or not ident.strip():
                raise InvalidArgumentError(f"invalid plugin identifier: {ident!r}")
            self._identifiers.add(ident.strip())

    @property
    def identifiers(self) -> list[str]:
        return sorted(self._identifiers)

    def list_under(self, prefix: str, recursive: bool = True) -> set[str]:
        if not recursive:
            raise InvalidArgumentError("non-recursive listing is not supported")
        return {i for i in self._identifiers if i.startswith(prefix)}
