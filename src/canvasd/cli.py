"""CLI entry point: load (or create) the configuration and bootstrap the store."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from canvasd import __version__
from canvasd.config import CONFIG_FILENAME, dump_config, load_config
from canvasd.errors import CanvasdError
from canvasd.state import AppState
from canvasd.storage import open_store

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the canvasd logger: DEBUG with --verbose, ERROR with --quiet,
    INFO otherwise. Console handler on stderr, added once.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    root = logging.getLogger("canvasd")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="canvasd",
        description="Load the service configuration and initialize its database.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILENAME),
        help=f"Configuration file; created with defaults if missing (default: {CONFIG_FILENAME}).",
    )
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")
    return parser


def bootstrap(config_path: Path) -> AppState:
    """Load the config, print it, open the store once to apply the schema, and build the app state."""
    config = load_config(config_path)
    sys.stdout.write(dump_config(config))
    with open_store(config.database_path) as store:
        logger.debug("Database %s has tables: %s", store.path, ", ".join(store.tables()))
    state = AppState.from_config(config)
    logger.info(
        "Ready to serve on %s:%d (database %s)",
        config.network.interface,
        config.network.port,
        config.database_path,
    )
    return state


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)
    try:
        bootstrap(args.config)
    except CanvasdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
