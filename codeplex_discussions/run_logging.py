from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
PACKAGE_LOGGER = "codeplex_discussions"


@contextmanager
def configure_run_logging(
    output_dir: Path,
    log_file: Optional[str],
    level: int = logging.INFO,
) -> Iterator[logging.Logger]:
    """
    Route the package's log records to stdout and, when log_file is set,
    append them to <output_dir>/<log_file> for the duration of one run.

    Handlers are detached and closed on exit.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    handlers.append(console_handler)

    if log_file:
        output_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(output_dir / log_file, mode="a", encoding="utf-8"))

    previous_level = logger.level
    logger.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    try:
        yield logger
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(previous_level)
