"""Export reporting: report_exports, list_exports, check_conflicts, audit_exports.

Every function here loads the plugins it inspects: a plugin's ``__all__`` is
only known once its module has run. Do not point them at untrusted code.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console

from pluggable.core.errors import ConflictError, LoadError

from .discover import discover
from .loader import Loader, default_loader
from .models import AuditReport, ExportMap, find_conflicts

console = Console(stderr=True)


def report_exports(
    prefix: str | None,
    exceptions: str | Iterable[str] | None = None,
    *,
    loader: Loader | None = None,
) -> ExportMap:
    """Map each exported name to the plugins declaring it, in discovery order."""
    return (loader or default_loader()).report(prefix, exceptions)


def list_exports(
    prefix: str | None,
    exceptions: str | Iterable[str] | None = None,
    *,
    loader: Loader | None = None,
) -> list[str]:
    loader = loader or default_loader()
    names: list[str] = []
    for plugin in discover(prefix, exceptions, loader.registry):
        names.extend(loader.load_one(plugin))
    return names


def check_conflicts(
    prefix: str | None,
    exceptions: str | Iterable[str] | None = None,
    *,
    loader: Loader | None = None,
) -> ExportMap:
    """Raise ConflictError listing every symbol exported by more than one plugin.

    Returns the export map when there are no conflicts. As a side effect every
    plugin under *prefix* is loaded, which also proves each one imports cleanly.
    """
    report = report_exports(prefix, exceptions, loader=loader)
    conflicts = find_conflicts(report)
    if conflicts:
        raise ConflictError(conflicts)
    return report


def audit_exports(
    prefix: str | None,
    exceptions: str | Iterable[str] | None = None,
    *,
    loader: Loader | None = None,
) -> AuditReport:
    """Like check_conflicts, but collect load failures and conflicts instead of raising."""
    loader = loader or default_loader()
    audit = AuditReport(prefix=prefix or "")
    audit.plugins = discover(prefix, exceptions, loader.registry)
    for plugin in audit.plugins:
        try:
            exports = loader.load_one(plugin)
        except LoadError as e:
            audit.failures[plugin] = str(e.cause)
            console.print(f"  [yellow]warning: plugin {plugin}: {e.cause}[/yellow]")
            continue
        for name in exports:
            audit.exports.setdefault(name, []).append(plugin)
    audit.conflicts = find_conflicts(audit.exports)
    for sym, plugins in audit.conflicts.items():
        console.print(
            f"  [yellow]warning: multiple definitions of {sym} from plugins: "
            f"{' '.join(plugins)}[/yellow]"
        )
    return audit
