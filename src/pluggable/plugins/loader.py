"""Loader: load_one (at most once per plugin), load / require / import_."""

from __future__ import annotations

import importlib
import threading
from collections.abc import Callable, Iterable
from types import ModuleType

from rich.console import Console

from pluggable.core.errors import ConflictError, InvalidArgumentError, LoadError
from pluggable.core.utils import as_exception_set, is_blank
from pluggable.registry import ImportRegistry, RegistryAdapter

from .discover import discover
from .models import (
    ExportMap,
    LoadOptions,
    LoadResult,
    PluginRecord,
    PluginState,
    find_conflicts,
)

console = Console(stderr=True)

Executor = Callable[[str], ModuleType]


def declared_exports(module: ModuleType) -> tuple[str, ...]:
    """Read a plugin's ``__all__``; a module without one exports nothing."""
    declared = getattr(module, "__all__", ())
    if isinstance(declared, str) or not isinstance(declared, (list, tuple)):
        raise TypeError(f"__all__ must be a list or tuple of names, not {type(declared).__name__}")
    for name in declared:
        if not isinstance(name, str):
            raise TypeError(f"__all__ entries must be str, got {name!r}")
    return tuple(dict.fromkeys(declared))


class Loader:
    """Load plugins through an executor and remember which ones completed.

    The loaded set only grows: a plugin that finished loading is never executed
    again by this loader. Failures are not remembered, so a later request
    retries the import.
    """

    def __init__(
        self,
        registry: RegistryAdapter | None = None,
        executor: Executor | None = None,
        verbose: bool = False,
    ):
        self.registry = registry if registry is not None else ImportRegistry()
        self.executor: Executor = executor or importlib.import_module
        self.verbose = verbose
        self._records: dict[str, PluginRecord] = {}
        self._states: dict[str, PluginState] = {}
        self._lock = threading.Lock()
        # held for the whole of a load, re-entered by nested load_one calls
        self._load_lock = threading.RLock()

    # ── state ───────────────────────────────────────────────────────

    @property
    def loaded(self) -> list[str]:
        return sorted(self._records)

    def is_loaded(self, plugin_id: str) -> bool:
        return plugin_id in self._records

    def state(self, plugin_id: str) -> PluginState:
        return self._states.get(plugin_id, PluginState.UNLOADED)

    def exports_of(self, plugin_id: str) -> tuple[str, ...] | None:
        record = self._records.get(plugin_id)
        return record.exports if record else None

    def module_of(self, plugin_id: str) -> ModuleType | None:
        record = self._records.get(plugin_id)
        return record.module if record else None

    def _set_state(self, plugin_id: str, state: PluginState) -> None:
        with self._lock:
            self._states[plugin_id] = state

    # ── single plugin ───────────────────────────────────────────────

    def load_one(self, plugin_id: str) -> tuple[str, ...]:
        """Load *plugin_id* if needed and return its declared exports.

        Loads are serialized per loader, so each import runs once even with
        concurrent callers. A plugin may load other plugins while it is being
        imported; a chain that comes back to a plugin still loading raises
        LoadError with an ImportError cause. Raises LoadError too if the
        import or __all__ is broken.
        """
        if not isinstance(plugin_id, str) or is_blank(plugin_id):
            raise InvalidArgumentError(f"invalid plugin identifier: {plugin_id!r}")
        record = self._records.get(plugin_id)
        if record is not None:
            return record.exports

        with self._load_lock:
            record = self._records.get(plugin_id)
            if record is not None:
                return record.exports
            # only the thread holding _load_lock can find a plugin LOADING here
            if self._states.get(plugin_id) is PluginState.LOADING:
                cause = ImportError(f"circular plugin load of {plugin_id}")
                raise LoadError(plugin_id, cause) from cause
            self._set_state(plugin_id, PluginState.LOADING)
            try:
                module = self.executor(plugin_id)
                exports = declared_exports(module)
            except Exception as e:
                self._set_state(plugin_id, PluginState.FAILED)
                raise LoadError(plugin_id, e) from e
            with self._lock:
                self._records[plugin_id] = PluginRecord(plugin_id, module, exports)
                self._states[plugin_id] = PluginState.LOADED

        if self.verbose:
            console.print(f"  [dim]loaded {plugin_id} ({len(exports)} exports)[/dim]")
        return exports

    # ── prefix ──────────────────────────────────────────────────────

    def report(
        self, prefix: str | None, exceptions: str | Iterable[str] | None = None
    ) -> ExportMap:
        """Load every plugin under *prefix* and map each export to its plugins."""
        report: ExportMap = {}
        for plugin in discover(prefix, exceptions, self.registry):
            for name in self.load_one(plugin):
                report.setdefault(name, []).append(plugin)
        return report

    def load(self, prefix: str, options: LoadOptions | None = None) -> LoadResult:
        """Load every plugin under *prefix*; see LoadOptions for the switches.

        With ``check_conflicts`` the whole tree is scanned for duplicate exports
        before anything else is loaded. With ``import_enabled`` the declared
        exports are resolved into ``LoadResult.symbols``; binding them anywhere
        is up to the caller. Plugins loaded before an error stay loaded.
        """
        options = options or LoadOptions()
        if not isinstance(prefix, str) or is_blank(prefix):
            raise InvalidArgumentError("load called without a plugin root location")

        if options.check_conflicts:
            conflicts = find_conflicts(self.report(prefix, options.exceptions))
            if conflicts:
                raise ConflictError(conflicts)

        result = LoadResult()
        origins: dict[str, list[str]] = {}
        for plugin in discover(prefix, options.exceptions, self.registry):
            exports = self.load_one(plugin)
            result.plugins.append(plugin)
            result.count += 1
            if options.import_enabled:
                self._merge(plugin, exports, result.symbols, origins)

        conflicts = find_conflicts(origins)
        if conflicts:
            raise ConflictError(conflicts)
        return result

    def _merge(
        self, plugin: str, exports: tuple[str, ...], symbols: dict, origins: dict[str, list[str]]
    ) -> None:
        module = self._records[plugin].module
        for name in exports:
            try:
                value = getattr(module, name)
            except AttributeError as e:
                raise LoadError(plugin, e) from e
            origins.setdefault(name, []).append(plugin)
            symbols.setdefault(name, value)

    def require(
        self,
        prefix: str,
        exceptions: str | Iterable[str] | None = None,
        check_conflicts: bool = True,
    ) -> int:
        """Load without merging; returns the number of plugins loaded."""
        options = LoadOptions(as_exception_set(exceptions), check_conflicts, import_enabled=False)
        return self.load(prefix, options).count

    def import_(
        self,
        prefix: str,
        exceptions: str | Iterable[str] | None = None,
        check_conflicts: bool = True,
    ) -> LoadResult:
        """Load and merge exports into LoadResult.symbols."""
        options = LoadOptions(as_exception_set(exceptions), check_conflicts, import_enabled=True)
        return self.load(prefix, options)


_default: Loader | None = None
_default_lock = threading.Lock()


def default_loader() -> Loader:
    """The process-wide loader used by the module-level functions."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Loader()
        return _default


def reset_default_loader(loader: Loader | None = None) -> Loader:
    """Replace the process-wide loader (a fresh one by default) and return it."""
    global _default
    with _default_lock:
        _default = loader or Loader()
        return _default
