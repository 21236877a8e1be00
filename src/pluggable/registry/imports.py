"""ImportRegistry: list modules on the import path without executing them."""

from __future__ import annotations

import os
import pkgutil
import sys
from collections.abc import Iterable
from importlib.machinery import PathFinder

from pluggable.core.errors import InvalidArgumentError
from pluggable.core.utils import SEPARATOR, package_name


class ImportRegistry:
    """Walk the import path below a package with pkgutil.

    Only the finders are consulted: neither the plugin modules nor the packages
    that contain them are imported while listing. Sub-packages are always
    descended into; they are reported themselves only with *include_packages*.
    """

    def __init__(self, path: list[str] | None = None, include_packages: bool = False):
        self.path = path
        self.include_packages = include_packages

    def list_under(self, prefix: str, recursive: bool = True) -> set[str]:
        if not recursive:
            raise InvalidArgumentError("non-recursive listing is not supported")
        found: set[str] = set()
        seen: set[str] = set()
        if not prefix:
            self._walk(self._search_path(), "", found, seen)
            return found
        locations = self._package_locations(package_name(prefix))
        if locations:
            self._walk(locations, prefix, found, seen)
        return found

    def _search_path(self) -> list[str]:
        return list(self.path) if self.path is not None else list(sys.path)

    def _package_locations(self, name: str) -> list[str]:
        """Resolve the __path__ of package *name*, or [] if it is not a package."""
        if self.path is None and name in sys.modules:
            return list(getattr(sys.modules[name], "__path__", None) or [])
        locations = self._search_path()
        parts = name.split(SEPARATOR)
        for i in range(len(parts)):
            fullname = SEPARATOR.join(parts[: i + 1])
            spec = PathFinder.find_spec(fullname, locations)
            if spec is None or spec.submodule_search_locations is None:
                return []
            locations = list(spec.submodule_search_locations)
        return locations

    def _walk(self, locations: Iterable[str], prefix: str, found: set[str], seen: set[str]) -> None:
        for info in pkgutil.iter_modules(list(locations), prefix):
            if not info.ispkg:
                found.add(info.name)
                continue
            if self.include_packages:
                found.add(info.name)
            spec = info.module_finder.find_spec(info.name)
            if spec is None or not spec.submodule_search_locations:
                continue
            sub = [p for p in spec.submodule_search_locations if os.path.realpath(p) not in seen]
            seen.update(os.path.realpath(p) for p in sub)
            if sub:
                self._walk(sub, info.name + SEPARATOR, found, seen)
