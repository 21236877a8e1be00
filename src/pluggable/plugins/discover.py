"""discover: list plugin identifiers under a prefix, minus exceptions, sorted."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console

from pluggable.core.utils import as_exception_set, normalize_prefix
from pluggable.registry import ImportRegistry, RegistryAdapter

console = Console(stderr=True)


def discover(
    prefix: str | None,
    exceptions: str | Iterable[str] | None = None,
    registry: RegistryAdapter | None = None,
) -> list[str]:
    """Return the plugins under *prefix* in lexicographic order.

    An empty prefix lists the whole namespace, which can take a while. A
    ``None`` prefix raises InvalidArgumentError.
    """
    root = normalize_prefix(prefix)
    skip = as_exception_set(exceptions)
    registry = registry if registry is not None else ImportRegistry()
    if not root:
        console.print("  [yellow]warning: no module prefix given, listing every module[/yellow]")

    found = registry.list_under(root, recursive=True)
    return sorted({name for name in found if name.startswith(root) and name not in skip})
