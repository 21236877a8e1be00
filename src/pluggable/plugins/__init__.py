"""Plugins: discovery, export reporting, conflict checks, loading."""

from .discover import discover
from .exports import audit_exports, check_conflicts, list_exports, report_exports
from .loader import Loader, declared_exports, default_loader, reset_default_loader
from .models import (
    AuditReport,
    ExportMap,
    LoadOptions,
    LoadResult,
    PluginRecord,
    PluginState,
    find_conflicts,
)

__all__ = [
    "AuditReport",
    "ExportMap",
    "LoadOptions",
    "LoadResult",
    "Loader",
    "PluginRecord",
    "PluginState",
    "audit_exports",
    "check_conflicts",
    "declared_exports",
    "default_loader",
    "discover",
    "find_conflicts",
    "list_exports",
    "report_exports",
    "reset_default_loader",
]
