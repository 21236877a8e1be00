"""pluggable: list, check and load the plugin modules under a package prefix.

    from pluggable import import_modules, list_modules_under

    plugins = list_modules_under("myapp.plugins")
    result = import_modules("myapp.plugins", exceptions=["myapp.plugins.broken"])
    globals().update(result.symbols)

The module-level functions share one process-wide Loader; pass ``loader=`` to
keep a separate loaded set.
"""

from __future__ import annotations

from collections.abc import Iterable

from .core.errors import ConflictError, InvalidArgumentError, LoadError, PluggableError
from .plugins import (
    AuditReport,
    ExportMap,
    LoadOptions,
    LoadResult,
    Loader,
    PluginState,
    audit_exports,
    check_conflicts,
    default_loader,
    discover,
    list_exports,
    report_exports,
    reset_default_loader,
)
from .registry import ImportRegistry, RegistryAdapter, StaticRegistry

__version__ = "0.2.0"

Exceptions = str | Iterable[str] | None


def list_modules_under(
    prefix: str | None, exceptions: Exceptions = None, *, loader: Loader | None = None
) -> list[str]:
    """Sorted module names under *prefix*; '' lists everything (slow)."""
    registry = (loader or default_loader()).registry
    return discover(prefix, exceptions, registry)


def require_modules(
    prefix: str,
    exceptions: Exceptions = None,
    check_conflicts: bool = True,
    *,
    loader: Loader | None = None,
) -> int:
    """Import every plugin under *prefix* without merging; returns the count."""
    return (loader or default_loader()).require(prefix, exceptions, check_conflicts)


def import_modules(
    prefix: str,
    exceptions: Exceptions = None,
    check_conflicts: bool = True,
    *,
    loader: Loader | None = None,
) -> LoadResult:
    """Import every plugin under *prefix* and return count + merged exports."""
    return (loader or default_loader()).import_(prefix, exceptions, check_conflicts)


def report_export_locations(
    prefix: str | None, exceptions: Exceptions = None, *, loader: Loader | None = None
) -> ExportMap:
    return report_exports(prefix, exceptions, loader=loader)


def check_plugin_exports(
    prefix: str | None, exceptions: Exceptions = None, *, loader: Loader | None = None
) -> ExportMap:
    return check_conflicts(prefix, exceptions, loader=loader)


__all__ = [
    "AuditReport",
    "ConflictError",
    "ExportMap",
    "ImportRegistry",
    "InvalidArgumentError",
    "LoadError",
    "LoadOptions",
    "LoadResult",
    "Loader",
    "PluggableError",
    "PluginState",
    "RegistryAdapter",
    "StaticRegistry",
    "audit_exports",
    "check_conflicts",
    "check_plugin_exports",
    "default_loader",
    "discover",
    "import_modules",
    "list_exports",
    "list_modules_under",
    "report_export_locations",
    "report_exports",
    "require_modules",
    "reset_default_loader",
]
