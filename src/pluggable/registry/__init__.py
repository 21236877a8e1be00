"""Registries: enumerate plugin identifiers under a namespace prefix."""

from .base import RegistryAdapter
from .imports import ImportRegistry
from .static import StaticRegistry

__all__ = ["ImportRegistry", "RegistryAdapter", "StaticRegistry"]
