"""CLI entry point: list, exports, check, audit and load plugins under a prefix."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import NoReturn

import click
from rich.console import Console

from .core.config import Config, load_config
from .core.errors import ConflictError, LoadError, PluggableError
from .plugins import Loader, audit_exports, check_conflicts, discover, report_exports

console = Console()
err_console = Console(stderr=True)


def _common_options(fn: Callable) -> Callable:
    fn = click.option("--verbose", "-v", is_flag=True, help="Verbose output")(fn)
    fn = click.option(
        "--path",
        "-p",
        "paths",
        multiple=True,
        type=click.Path(exists=True, file_okay=False),
        help="Directory prepended to sys.path (repeatable)",
    )(fn)
    fn = click.option(
        "--exception",
        "-x",
        "exceptions",
        multiple=True,
        help="Plugin module to skip (repeatable)",
    )(fn)
    return click.argument("prefix")(fn)


def _setup(
    exceptions: tuple[str, ...], paths: tuple[str, ...], verbose: bool, **overrides
) -> tuple[Config, Loader]:
    config = load_config(exceptions=list(exceptions), verbose=verbose, **overrides)
    for p in reversed(list(paths) + config.paths):
        if p not in sys.path:
            sys.path.insert(0, p)
    return config, Loader(verbose=config.verbose)


def _fail(e: PluggableError) -> NoReturn:
    if isinstance(e, ConflictError):
        for sym, plugins in e.conflicts.items():
            err_console.print(f"[red]conflict:[/red] [bold]{sym}[/bold]  {' '.join(plugins)}")
    elif isinstance(e, LoadError):
        err_console.print(f"[red]load error:[/red] [bold]{e.plugin}[/bold]  {e.cause}")
    else:
        err_console.print(f"error: {e}", style="bold")
    sys.exit(1)


@click.group()
@click.version_option(package_name="pluggable")
def cli():
    """pluggable: list, check and load plugin modules under a package prefix."""


@cli.command("list")
@_common_options
def list_cmd(prefix: str, exceptions: tuple[str, ...], paths: tuple[str, ...], verbose: bool):
    """List plugin modules under PREFIX."""
    config, loader = _setup(exceptions, paths, verbose)
    try:
        plugins = discover(prefix, config.exceptions, loader.registry)
    except PluggableError as e:
        _fail(e)
    if not plugins:
        console.print(f"no plugins under {prefix}", style="dim")
        return
    for name in plugins:
        console.print(name)


@cli.command()
@_common_options
def exports(prefix: str, exceptions: tuple[str, ...], paths: tuple[str, ...], verbose: bool):
    """Show where every exported name under PREFIX comes from."""
    config, loader = _setup(exceptions, paths, verbose)
    try:
        report = report_exports(prefix, config.exceptions, loader=loader)
    except PluggableError as e:
        _fail(e)
    for sym in sorted(report):
        origins = report[sym]
        style = "red" if len(origins) > 1 else "dim"
        console.print(f"  [bold]{sym}[/bold]  [{style}]{' '.join(origins)}[/{style}]")


@cli.command()
@_common_options
def check(prefix: str, exceptions: tuple[str, ...], paths: tuple[str, ...], verbose: bool):
    """Fail if two plugins under PREFIX export the same name."""
    config, loader = _setup(exceptions, paths, verbose)
    try:
        report = check_conflicts(prefix, config.exceptions, loader=loader)
    except PluggableError as e:
        _fail(e)
    console.print(
        f"[green]ok[/green]  {len(loader.loaded)} plugins, {len(report)} exported names"
    )


@cli.command()
@_common_options
def audit(prefix: str, exceptions: tuple[str, ...], paths: tuple[str, ...], verbose: bool):
    """Report load failures and conflicts under PREFIX without stopping."""
    config, loader = _setup(exceptions, paths, verbose)
    try:
        report = audit_exports(prefix, config.exceptions, loader=loader)
    except PluggableError as e:
        _fail(e)
    if report.ok:
        console.print(f"[green]ok[/green]  {len(report.plugins)} plugins")
        return
    console.print(
        f"[yellow]{len(report.failures)} failed, {len(report.conflicts)} conflicts[/yellow]"
        f"  ({len(report.plugins)} plugins)"
    )
    sys.exit(1)


@cli.command()
@_common_options
@click.option("--no-check", is_flag=True, help="Skip the duplicate-export scan")
@click.option("--no-import", is_flag=True, help="Load only, do not merge exports")
def load(
    prefix: str,
    exceptions: tuple[str, ...],
    paths: tuple[str, ...],
    verbose: bool,
    no_check: bool,
    no_import: bool,
):
    """Load every plugin under PREFIX."""
    overrides = {}
    if no_check:
        overrides["check_conflicts"] = False
    if no_import:
        overrides["import_enabled"] = False
    config, loader = _setup(exceptions, paths, verbose, **overrides)
    try:
        result = loader.load(prefix, config.load_options())
    except PluggableError as e:
        _fail(e)
    console.print(f"loaded [bold]{result.count}[/bold] plugins")
    for name in sorted(result.symbols):
        console.print(f"  {name}", style="dim")


def main():
    cli()


if __name__ == "__main__":
    main()
