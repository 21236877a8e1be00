"""Prefix normalization, exception-set coercion, env value parsing."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidArgumentError

SEPARATOR = "."

_FALSE_VALUES = ("0", "false", "no", "off")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def normalize_prefix(prefix: str | None) -> str:
    """Return *prefix* with exactly one trailing separator ('' stays '')."""
    if prefix is None or not isinstance(prefix, str):
        raise InvalidArgumentError(f"missing argument, need a module prefix (got {prefix!r})")
    prefix = prefix.strip()
    if not prefix:
        return ""
    return prefix.rstrip(SEPARATOR) + SEPARATOR


def package_name(prefix: str) -> str:
    """'a.b.' -> 'a.b'."""
    return prefix.rstrip(SEPARATOR)


def as_exception_set(exceptions: str | Iterable[str] | None) -> frozenset[str]:
    """Coerce None, a single identifier, or an iterable of identifiers to a frozenset."""
    if exceptions is None:
        return frozenset()
    if isinstance(exceptions, str):
        return frozenset([exceptions]) if exceptions else frozenset()
    items = list(exceptions)
    for item in items:
        if not isinstance(item, str):
            raise InvalidArgumentError(f"exceptions must be module names, got {item!r}")
    return frozenset(items)


def parse_bool(value: str) -> bool:
    return value.strip().lower() not in _FALSE_VALUES


def split_list(value: str, sep: str = ",") -> list[str]:
    """Split *value* on *sep*, dropping blanks."""
    return [v.strip() for v in value.split(sep) if v.strip()]
