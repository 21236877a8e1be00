"""Plugin data models: LoadOptions, LoadResult, PluginState, PluginRecord, AuditReport.

Also holds find_conflicts, which only looks at an ExportMap.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

# symbol -> plugins exporting it, in discovery order
ExportMap = dict[str, list[str]]


def find_conflicts(report: ExportMap) -> dict[str, list[str]]:
    """Symbols with more than one origin, in sorted symbol order."""
    return {sym: list(report[sym]) for sym in sorted(report) if len(report[sym]) > 1}


class PluginState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadOptions:
    """Per-call options for Loader.load."""

    exceptions: frozenset[str] = frozenset()
    check_conflicts: bool = True
    import_enabled: bool = True


@dataclass
class PluginRecord:
    """A plugin that finished loading: its module and declared exports."""

    name: str
    module: ModuleType
    exports: tuple[str, ...] = ()


@dataclass
class LoadResult:
    """Outcome of one Loader.load call."""

    count: int = 0
    # name -> resolved value; empty when import is disabled
    symbols: dict[str, Any] = field(default_factory=dict)
    plugins: list[str] = field(default_factory=list)


@dataclass
class AuditReport:
    """Non-fatal export audit: everything check_conflicts would raise on, collected."""

    prefix: str
    plugins: list[str] = field(default_factory=list)
    exports: ExportMap = field(default_factory=dict)
    conflicts: dict[str, list[str]] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.conflicts and not self.failures
