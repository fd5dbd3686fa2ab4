"""YAML command catalog loading.

Reads command entries from YAML files, validates their shape, and drops
entries whose platform constraints exclude the running OS.
Multi-path loading logs and skips broken sources instead of failing.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import CatalogInitError, CatalogLoadError
from .model import CommandEntry

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

DEFAULT_CATALOG_YAML = """\
- cmd: "kubectl get pods"
  desc: "List all pods in namespace"
  tags:
    - "k8s"
    - "container"
  platform:
    - "linux"
    - "darwin"
  examples:
    - "kubectl get pods -n kube-system -o wide"
    - "kubectl get pods --watch"

- cmd: "docker ps -a"
  desc: "List all containers"
  tags:
    - "docker"
    - "container"

- cmd: "git log --oneline --graph --all"
  desc: "Show git commit graph"
  tags:
    - "git"
    - "vcs"

- cmd: "find . -name '*.py' -type f"
  desc: "Find all Python files in current directory"
  tags:
    - "shell"
    - "find"

- cmd: "ps aux | grep <process>"
  desc: "Search for running processes"
  tags:
    - "shell"
    - "process"
  platform:
    - "linux"
    - "darwin"
"""


def current_platform() -> str:
    """Return the platform name used in catalog ``platform`` lists."""
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform in {"win32", "cygwin"}:
        return "windows"
    if sys.platform.startswith("freebsd"):
        return "freebsd"
    return sys.platform


def _coerce_text(value: object, field: str, index: int, path: Path) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise CatalogLoadError(path, f"entry {index}: {field!r} must be a string")


def _coerce_text_list(value: object, field: str, index: int, path: Path) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise CatalogLoadError(path, f"entry {index}: {field!r} must be a list of strings")
    return tuple(_coerce_text(item, field, index, path) for item in value)


def _entry_from_mapping(raw: object, index: int, path: Path) -> CommandEntry:
    if not isinstance(raw, dict):
        raise CatalogLoadError(path, f"entry {index}: expected a mapping, got {type(raw).__name__}")
    for required in ("cmd", "desc"):
        if raw.get(required) is None:
            raise CatalogLoadError(path, f"entry {index}: missing required field {required!r}")
    return CommandEntry(
        cmd=_coerce_text(raw["cmd"], "cmd", index, path),
        desc=_coerce_text(raw["desc"], "desc", index, path),
        tags=_coerce_text_list(raw.get("tags"), "tags", index, path),
        platform=_coerce_text_list(raw.get("platform"), "platform", index, path),
        examples=_coerce_text_list(raw.get("examples"), "examples", index, path),
    )


def parse_commands(text: str, path: Path | str = "<string>") -> list[CommandEntry]:
    """Parse catalog YAML text into entries without platform filtering.

    An empty document is an empty catalog. Anything other than a top-level
    sequence of mappings raises ``CatalogLoadError``.
    """
    source_path = Path(path)
    try:
        data = YAML(typ="safe").load(text)
    except YAMLError as exc:
        raise CatalogLoadError(source_path, str(exc)) from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise CatalogLoadError(source_path, "expected a list of command entries")
    return [_entry_from_mapping(raw, idx, source_path) for idx, raw in enumerate(data)]


def filter_by_platform(
    commands: list[CommandEntry],
    platform: str | None = None,
) -> list[CommandEntry]:
    """Keep entries without platform constraints or listing ``platform``."""
    current = platform if platform is not None else current_platform()
    return [entry for entry in commands if not entry.platform or current in entry.platform]


def load_commands(path: Path) -> list[CommandEntry]:
    """Read, parse, and platform-filter one catalog file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(path, str(exc)) from exc
    return filter_by_platform(parse_commands(text, path))


def init_default_catalog(path: Path) -> bool:
    """Write the starter catalog when ``path`` does not exist yet.

    Returns whether a file was created.
    """
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CATALOG_YAML, encoding="utf-8")
    except OSError as exc:
        raise CatalogInitError(path, str(exc)) from exc
    logger.info("created default catalog at %s", path)
    return True


def load_commands_from_directory(directory: Path) -> list[CommandEntry]:
    """Load every YAML file directly inside ``directory`` in name order.

    Subdirectories are ignored and files that fail to load are logged and
    skipped.
    """
    try:
        children = sorted(directory.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        raise CatalogLoadError(directory, f"failed to read directory: {exc}") from exc

    commands: list[CommandEntry] = []
    for child in children:
        if child.is_dir() or not child.name.lower().endswith(YAML_SUFFIXES):
            continue
        try:
            commands.extend(load_commands(child))
        except CatalogLoadError as exc:
            logger.warning("skipping catalog %s: %s", child, exc.reason)
    return commands


def load_all_commands(paths: list[Path]) -> list[CommandEntry]:
    """Merge catalogs from files and directories, skipping broken sources.

    Missing paths are seeded with the default template before loading.
    """
    commands: list[CommandEntry] = []
    for path in paths:
        try:
            if not path.exists():
                init_default_catalog(path)
            if path.is_dir():
                commands.extend(load_commands_from_directory(path))
            else:
                commands.extend(load_commands(path))
        except (CatalogLoadError, CatalogInitError) as exc:
            logger.warning("skipping catalog source %s: %s", path, exc)
    return commands


def expand_path(raw: str) -> Path:
    """Expand ``$VARS`` and a leading ``~`` in a configured catalog path."""
    return Path(os.path.expanduser(os.path.expandvars(raw)))
