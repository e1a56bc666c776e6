"""Logging setup for the projectimport command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
THREADED_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s/%(threadName)s] %(message)s"


def configure_logging(
    *, level: int | str = logging.INFO, force: bool = False, threaded: bool = False
) -> None:
    """Initialise the root logger through ``logging.basicConfig``.

    ``threaded`` adds the thread name to each line, which is useful when
    payloads are deserialized on several workers. Pass ``force=True`` to
    replace handlers installed earlier.
    """

    logging.basicConfig(
        level=level,
        format=THREADED_LOG_FORMAT if threaded else LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
