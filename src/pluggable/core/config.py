"""Configuration: env, settings files, load options."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from pluggable.plugins.models import LoadOptions

from .utils import as_exception_set, parse_bool, split_list

PROJECT_DIR_NAME = ".pluggable"


@dataclass
class Config:
    exceptions: list[str] = field(default_factory=list)
    check_conflicts: bool = True
    import_enabled: bool = True
    # extra sys.path entries searched for plugins
    paths: list[str] = field(default_factory=list)
    verbose: bool = False
    cwd: Path = field(default_factory=Path.cwd)
    global_dir: Path = field(default_factory=lambda: Path.home() / ".pluggable")
    project_dir: Path | None = None  # explicit override; None = auto-detect from cwd

    @property
    def project_dirs(self) -> list[Path]:
        if self.project_dir is not None:
            return [self.project_dir] if self.project_dir.is_dir() else []
        d = self.cwd / PROJECT_DIR_NAME
        return [d] if d.is_dir() else []

    def load_options(self) -> LoadOptions:
        return LoadOptions(
            exceptions=as_exception_set(self.exceptions),
            check_conflicts=self.check_conflicts,
            import_enabled=self.import_enabled,
        )


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single settings.json file to config."""
    if not path.exists():
        return
    data = json.loads(path.read_text())
    if isinstance(data.get("exceptions"), list):
        for name in data["exceptions"]:
            if name not in config.exceptions:
                config.exceptions.append(name)
    if "checkConflicts" in data:
        config.check_conflicts = bool(data["checkConflicts"])
    if "import" in data:
        config.import_enabled = bool(data["import"])
    if isinstance(data.get("paths"), list):
        config.paths.extend(p for p in data["paths"] if p not in config.paths)


def load_config(
    exceptions: list[str] | None = None,
    check_conflicts: bool | None = None,
    import_enabled: bool | None = None,
    verbose: bool = False,
) -> Config:
    """Load config with priority: CLI args > env > .env > settings.json > defaults."""
    load_dotenv()

    config = Config()
    config.verbose = verbose

    _apply_settings(config, config.global_dir / "settings.json")

    for pdir in config.project_dirs:
        _apply_settings(config, pdir / "settings.json")

    for pdir in config.project_dirs:
        _apply_settings(config, pdir / "settings.local.json")

    if env_exceptions := os.getenv("PLUGGABLE_EXCEPTIONS"):
        config.exceptions = split_list(env_exceptions)
    if env_check := os.getenv("PLUGGABLE_CHECK_CONFLICTS"):
        config.check_conflicts = parse_bool(env_check)
    if env_import := os.getenv("PLUGGABLE_IMPORT"):
        config.import_enabled = parse_bool(env_import)
    if env_path := os.getenv("PLUGGABLE_PATH"):
        config.paths = split_list(env_path, os.pathsep) + config.paths

    if exceptions:
        config.exceptions = list(exceptions)
    if check_conflicts is not None:
        config.check_conflicts = check_conflicts
    if import_enabled is not None:
        config.import_enabled = import_enabled

    return config
