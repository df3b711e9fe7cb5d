"""
Logging setup for engine_link.

All modules log through children of the ``engine_link`` logger, so a single
call to setup_logger() captures the full engine traffic:

    --> go depth 10              (command written)
    (failed) --> stop            (write failed, engine gone)
    < bestmove e2e4              (fresh line, forwarded)
    (bestmove desync) < info ... (stale line, discarded)
    ! some stderr text           (diagnostic line)
"""

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = Path.home() / ".engine_link" / "engine.log"


def setup_logger(debug=True, log_file: Optional[Path] = None):
    """
    Setup file-based logger for engine traffic.

    Args:
        debug: If True, log at DEBUG level (includes every line exchanged
            with the engine); otherwise INFO level
        log_file: Destination file (default: ~/.engine_link/engine.log)

    Returns:
        Configured logger instance
    """
    log_file = Path(log_file) if log_file else DEFAULT_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("engine_link")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
