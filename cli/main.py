"""CLI entry point."""

import argparse
import os
from typing import Optional, Sequence

from common.exceptions import TagStoreError
from common.logging_config import setup_logging
from cli.commands import get_store, set_store
from cli.repl import repl_loop
from storage.factory import create_store


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tbf", description="Interactive shell for a tag-based file store")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    backend = parser.add_mutually_exclusive_group()
    backend.add_argument("--store", metavar="PATH", help="directory of the store to open")
    backend.add_argument("--memory", action="store_true", help="use a throwaway in-memory store")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for CLI."""
    args = _parse_args(argv)
    log_level = 'DEBUG' if args.debug else os.getenv('LOG_LEVEL', 'INFO')

    logger = setup_logging('cli', log_level=log_level)
    setup_logging('storage', log_level=log_level)

    if args.debug:
        logger.info("Debug logging enabled")

    try:
        if args.memory:
            store = create_store("memory")
        elif args.store:
            store = create_store("directory", args.store)
        else:
            store = get_store()
    except (TagStoreError, ValueError) as e:
        logger.error(f"Failed to open store: {e}")
        raise SystemExit(1)
    set_store(store)

    logger.info("CLI starting...")
    try:
        repl_loop(store)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
