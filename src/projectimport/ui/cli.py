from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from projectimport.adapters import TreeFormatError
from projectimport.app import import_tree_file
from projectimport.config import ConfigurationError, configure_logging, get_import_config
from projectimport.domain.faults import ImportFaultsError
from projectimport.services import default_registry

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from projectimport.config import ImportConfig

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import external project data trees")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser("import", help="Replay a dumped data node tree")
    replay.add_argument("path", help="JSON file holding one node or a list of root nodes")
    replay.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to deserialize payloads (defaults to config)",
    )
    replay.add_argument(
        "--keep-going",
        action="store_true",
        help="Report faults without failing the command",
    )

    subparsers.add_parser("handlers", help="List registered data services in registry order")

    return parser.parse_args(list(argv))


def _effective_config(args: argparse.Namespace) -> ImportConfig:
    config = get_import_config()
    if args.workers is not None:
        if args.workers < 1:
            raise ConfigurationError("--workers must be >= 1")
        config = replace(config, deserialize_workers=args.workers)
    if args.keep_going:
        config = replace(config, raise_on_faults=False)
    return config


def _list_handlers() -> None:
    for position, entry in enumerate(default_registry().entries(), start=1):
        log.info(
            "%2d. %-20s order=%-4s %s",
            position,
            entry.key.name,
            entry.order,
            type(entry.service).__qualname__,
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        config = _effective_config(parsed_args) if parsed_args.command == "import" else None
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    configure_logging(
        level=config.log_level if config else logging.INFO,
        force=True,
        threaded=config is not None and config.deserialize_workers > 1,
    )

    if parsed_args.command == "handlers":
        _list_handlers()
        return

    try:
        _project, report = import_tree_file(parsed_args.path, config=config)
    except (OSError, TreeFormatError):
        log.exception("Could not read %s", parsed_args.path)
        sys.exit(2)
    except ImportFaultsError as exc:
        for fault in exc.exceptions:
            log.error("%s", fault)  # noqa: TRY400
        log.error("Import finished with faults: %s", exc.report.summary())  # noqa: TRY400
        sys.exit(1)

    for fault in report.faults:
        log.warning("%s", fault)
    log.info("Import finished: %s", report.summary())


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
