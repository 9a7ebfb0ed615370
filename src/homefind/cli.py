"""
Command-line entry point for homefind.

    homefind               browse the index, building it first if it is missing
    homefind index         rebuild the index and exit
    homefind init-config   write a configuration template
"""

import argparse
import curses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ConfigurationError, create_config_template, load_config
from .models.config import LocatorConfig
from .models.index_report import IndexBuildReport
from .tools.fs_walker import IndexBuildError, build_index
from .tools.index_store import CorruptIndexError, IndexStore, IndexStoreError, default_index_path
from .tools.reveal import Revealer, select_revealer
from .ui.terminal import run_terminal_session


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SetupError(Exception):
    """Raised when the environment does not allow homefind to run at all."""
    pass


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="homefind",
        description="Find any file under your home directory by typing parts of its path."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to a YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("index", help="Rebuild the index and exit")
    init_parser = subparsers.add_parser("init-config", help="Write a configuration template")
    init_parser.add_argument("path", nargs="?", default=None,
                             help="Where to write it (default: ~/.config/homefind/config.yaml)")
    return parser


def resolve_home() -> Path:
    """
    Find the current user's home directory.

    Raises:
        SetupError: If the home directory cannot be determined
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise SetupError(f"cannot find home directory: {e}") from e


def configure_logging(config: LocatorConfig, verbose: bool = False) -> None:
    """Apply the configured log level to the root logger."""
    level = logging.DEBUG if verbose else config.logging.get_numeric_level()
    logging.getLogger().setLevel(level)


def display_path(path: str) -> str:
    """Make a path printable on stdout, replacing bytes the terminal cannot show."""
    encoding = getattr(sys.stdout, 'encoding', None) or 'utf-8'
    return path.encode(encoding, 'replace').decode(encoding)


def print_progress(count: int) -> None:
    print(f"\rIndexed {count} files...", end="", flush=True)


def rebuild_index(home: Path, store: IndexStore, config: LocatorConfig) -> IndexBuildReport:
    """
    Walk the home directory and replace the stored index.

    Raises:
        IndexBuildError: If the walk cannot start
        IndexStoreError: If the index cannot be saved
    """
    print("Indexing home directory...")
    report = build_index(home, store, config, progress=print_progress)
    print(f"\nFinished! Indexed {report.files_indexed} files in {report.get_elapsed_human_readable()}")
    if report.has_errors():
        logger.warning(f"{report.errors} entries could not be read; the index may be incomplete")
    return report


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None, revealer: Optional[Revealer] = None) -> int:
    """
    Run homefind.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        revealer: File-manager integration (defaults to the running platform's)

    Returns:
        Process exit status
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)

    try:
        home = resolve_home()
    except SetupError as e:
        return _fail(f"System error: {e}")

    try:
        result = load_config(args.config, home=home)
    except ConfigurationError as e:
        return _fail(f"Configuration error: {e}")
    config = result.config
    configure_logging(config, verbose=args.verbose)
    for warning in result.warnings:
        logger.warning(warning)

    if args.command == "init-config":
        target = Path(args.path).expanduser() if args.path else home / ".config" / "homefind" / "config.yaml"
        try:
            create_config_template(target)
        except ConfigurationError as e:
            return _fail(f"Configuration error: {e}")
        print(f"Wrote configuration template to {target}")
        return 0

    store = IndexStore(default_index_path(home))

    if args.command == "index":
        try:
            rebuild_index(home, store, config)
        except (IndexBuildError, IndexStoreError) as e:
            return _fail(f"Failed to build index: {e}")
        return 0

    if not store.exists():
        print("Index not found in home folder. Running setup...")
        try:
            rebuild_index(home, store, config)
        except (IndexBuildError, IndexStoreError) as e:
            return _fail(f"Failed to build index: {e}")

    try:
        paths = store.load()
    except CorruptIndexError as e:
        return _fail(f"Failed to load index: {e} (run `homefind index` to rebuild it)")
    except IndexStoreError as e:
        return _fail(f"Failed to load index: {e}")

    if not paths:
        print("Index is empty. Try running `index` again.")
        return 0

    if revealer is None:
        revealer = select_revealer()

    try:
        selected = run_terminal_session(paths, config)
    except curses.error as e:
        return _fail(f"UI error: {e}")

    if selected:
        print(f"Revealing: {display_path(selected)}")
        revealer.reveal(selected)

    return 0


if __name__ == "__main__":
    sys.exit(main())
