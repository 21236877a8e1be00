"""Error taxonomy: PluggableError, InvalidArgumentError, LoadError, ConflictError."""

from __future__ import annotations


class PluggableError(Exception):
    """Base class for every error raised by pluggable."""


class InvalidArgumentError(PluggableError, ValueError):
    """A required argument is missing, blank, or of the wrong type."""


class LoadError(PluggableError):
    """A plugin failed to import or initialize."""

    def __init__(self, plugin: str, cause: BaseException):
        self.plugin = plugin
        self.cause = cause
        super().__init__(f"{plugin}: {type(cause).__name__}: {cause}")


class ConflictError(PluggableError):
    """Two or more plugins declare the same export symbol.

    ``conflicts`` maps every offending symbol to the plugins exporting it, in
    discovery order. ``symbol`` and ``plugins`` describe the first conflict in
    sorted symbol order.
    """

    def __init__(self, conflicts: dict[str, list[str]]):
        self.conflicts = {sym: list(conflicts[sym]) for sym in sorted(conflicts)}
        first = next(iter(self.conflicts), "")
        self.symbol = first
        self.plugins = self.conflicts.get(first, [])
        super().__init__(
            "\n".join(
                f"Multiple definitions of {sym} from plugins: {' '.join(plugins)}"
                for sym, plugins in self.conflicts.items()
            )
        )
