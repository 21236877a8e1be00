"""Shared fixtures: on-disk plugin trees and an in-memory executor."""

import importlib
import sys
import textwrap
import types
import uuid

import pytest

from pluggable import Loader, StaticRegistry


class FakeExecutor:
    """Stands in for importlib.import_module: builds modules from attribute dicts.

    A value that is an exception instance is raised instead. ``calls`` records
    every execution, in order.
    """

    def __init__(self, modules: dict):
        self.modules = modules
        self.calls: list[str] = []

    def __call__(self, name: str) -> types.ModuleType:
        self.calls.append(name)
        spec = self.modules[name]
        if isinstance(spec, BaseException):
            raise spec
        mod = types.ModuleType(name)
        mod.__dict__.update(spec)
        return mod


# A{foo, bar}, B{baz}, C{foo}
CONFLICTING = {
    "app.plugins.a": {"__all__": ["foo", "bar"], "foo": "a.foo", "bar": "a.bar"},
    "app.plugins.b": {"__all__": ["baz"], "baz": "b.baz"},
    "app.plugins.c": {"__all__": ["foo"], "foo": "c.foo"},
}

CLEAN = {
    "app.plugins.a": {"__all__": ["foo", "bar"], "foo": "a.foo", "bar": "a.bar"},
    "app.plugins.b": {"__all__": ["baz"], "baz": "b.baz"},
    "app.plugins.sub.c": {"__all__": ["qux"], "qux": "c.qux", "hidden": "c.hidden"},
}


@pytest.fixture
def fake_loader():
    """Factory: fake_loader(modules) -> (Loader, FakeExecutor)."""

    def make(modules: dict, **kwargs):
        executor = FakeExecutor(dict(modules))
        loader = Loader(registry=StaticRegistry(modules), executor=executor, **kwargs)
        return loader, executor

    return make


@pytest.fixture
def plugin_tree(tmp_path, monkeypatch):
    """Factory: plugin_tree({relpath: source}) -> unique root package name on sys.path.

    Paths are relative to the root package directory; its __init__.py is
    created empty unless given.
    """
    created: list[str] = []

    def make(files: dict[str, str]) -> str:
        name = f"plx_{uuid.uuid4().hex[:8]}"
        root = tmp_path / name
        root.mkdir()
        files = {"__init__.py": "", **files}
        for rel, source in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source))
        created.append(name)
        importlib.invalidate_caches()
        return name

    monkeypatch.syspath_prepend(str(tmp_path))
    yield make
    for mod in list(sys.modules):
        if any(mod == n or mod.startswith(n + ".") for n in created):
            del sys.modules[mod]
