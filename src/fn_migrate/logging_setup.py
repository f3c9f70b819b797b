"""
Logging for fn-migrate runs.

Every run gets its own DEBUG log file (requests, payload summaries,
create/update outcomes).  The console only shows warnings and the fatal
error that ends a run, unless --verbose is given.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

from .config import PROJECT_ROOT

LOG_DIR = os.path.join(PROJECT_ROOT, "logs")

_FILE_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


def setup_logging(
    verbose: bool = False,
    log_prefix: str = "fn_migrate",
    log_dir: str | None = None,
) -> str:
    """Route logging to <log_dir>/<prefix>_<timestamp>.log and stderr.

    Returns the path to the log file.  Raises OSError if the log
    directory cannot be created.
    """
    log_dir = log_dir or LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(
        log_dir, f"{log_prefix}_{datetime.now():%Y-%m-%d-%H%M%S}.log"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    if verbose:
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%H:%M:%S"))
    else:
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s  %(message)s"))
    root_logger.addHandler(console_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)

    return log_path
