"""Command-line front door for kbase.

Parses CLI options, sets up file logging, resolves and seeds the catalog,
then either prints a filtered listing or starts the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .catalog import init_default_catalog, load_all_commands, load_commands
from .errors import CatalogInitError, CatalogLoadError
from .highlight import DEFAULT_STYLE, normalize_style
from .render import RenderOptions
from .runtime import run_session
from .runtime.app import format_listing, is_interactive
from .runtime.config import (
    DEFAULT_LOG_PATH,
    default_catalog_path,
    load_command_paths,
    load_theme_name,
    save_theme_name,
)
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_file: Path) -> None:
    """Send log records to ``log_file``; the terminal belongs to the TUI."""
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, handlers=[handler], force=True)


def resolve_catalog_path(path_arg: str | None, configured: list[Path]) -> Path:
    """Pick the catalog to browse: explicit path, first configured path, or default."""
    if path_arg:
        return Path(path_arg).expanduser()
    for candidate in configured:
        if not candidate.is_dir():
            return candidate
    return default_catalog_path()


def _list_commands(path_arg: str | None, catalog_path: Path, configured: list[Path], query: str) -> None:
    if path_arg is None and configured:
        commands = load_all_commands(configured)
    else:
        try:
            init_default_catalog(catalog_path)
            commands = load_commands(catalog_path)
        except (CatalogInitError, CatalogLoadError) as exc:
            raise SystemExit(f"Error loading commands: {exc}") from exc
    sys.stdout.write(format_listing(commands, query))


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch kbase on a catalog file.

    ``default_path`` is primarily for tests; when omitted the configured or
    platform default catalog is used.
    """
    parser = argparse.ArgumentParser(
        description="Browse, search, and copy shell commands from a YAML knowledge base."
    )
    parser.add_argument("path", nargs="?", default=None, help="Catalog YAML file. Defaults to the config directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style for example highlighting.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors and highlighting.")
    parser.add_argument(
        "--list",
        nargs="?",
        const="",
        default=None,
        metavar="QUERY",
        help="Print matching commands and exit instead of starting the browser.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Log verbosity.")
    parser.add_argument("--log-file", type=Path, default=DEFAULT_LOG_PATH, help="Log file location.")
    args = parser.parse_args()

    configure_logging(args.log_level, args.log_file)

    path_arg = args.path
    if path_arg is None and default_path is not None:
        path_arg = str(default_path)
    configured = load_command_paths()
    catalog_path = resolve_catalog_path(path_arg, configured)

    if args.list is not None or not is_interactive():
        _list_commands(path_arg, catalog_path, configured, args.list or "")
        return

    try:
        init_default_catalog(catalog_path)
    except CatalogInitError as exc:
        raise SystemExit(f"Error initializing config: {exc}") from exc

    load_error: CatalogLoadError | None = None
    try:
        catalog = load_commands(catalog_path)
    except CatalogLoadError as exc:
        logger.warning("starting in error mode: %s", exc)
        catalog = []
        load_error = exc

    if args.theme:
        save_theme_name(args.theme)
    theme_name = args.theme or load_theme_name()
    options = RenderOptions(
        theme=resolve_theme(theme_name, no_color=args.no_color),
        style=normalize_style(args.style),
        highlight_examples=not args.no_color,
    )

    emitted = run_session(catalog_path, catalog, load_error, options)
    for text in emitted:
        sys.stdout.write(text + "\n")


if __name__ == "__main__":
    main()
