"""
Routing of classified engine output to application callbacks.
"""

import logging
from typing import Callable, Optional

from engine_link.sync import INFO, LineStatus


LineConsumer = Callable[[str], None]


def _ignore(line: str):
    pass


class OutputRouter:
    """
    Delivers engine output to the application.

    Fresh stdout lines go to the fresh consumer, stale ones are dropped, and
    stderr lines always go to the error consumer. Consumers are set with
    attach() and removed with detach(); there is no other way to swap them.

    Attributes:
        log_info_lines: Whether lines containing "info" are logged
        logger: Destination for the traffic log
    """

    def __init__(self, log_info_lines: bool = False, logger: Optional[logging.Logger] = None):
        self.log_info_lines = log_info_lines
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._fresh_consumer: LineConsumer = _ignore
        self._error_consumer: LineConsumer = _ignore

    @property
    def attached(self) -> bool:
        return self._fresh_consumer is not _ignore or self._error_consumer is not _ignore

    def attach(self, fresh_consumer: LineConsumer, error_consumer: LineConsumer):
        """
        Bind the application callbacks.

        Args:
            fresh_consumer: Called with every fresh stdout line
            error_consumer: Called with every stderr line
        """
        self._fresh_consumer = fresh_consumer
        self._error_consumer = error_consumer

    def detach(self):
        """Replace both callbacks with no-ops; later lines are dropped silently."""
        self._fresh_consumer = _ignore
        self._error_consumer = _ignore

    def _should_log(self, line: str) -> bool:
        return self.log_info_lines or INFO not in line

    def route(self, status: LineStatus, line: str):
        """
        Log a classified stdout line and forward it if fresh.

        Args:
            status: Result of DesyncFilter.classify() for this line
            line: The raw line
        """
        if status.is_stale:
            if self._should_log(line):
                self.logger.debug(f"({status.value}) < {line}")
            return

        if self._should_log(line):
            self.logger.debug(f"< {line}")

        self._fresh_consumer(line)

    def route_error(self, line: str):
        """Log a stderr line and forward it unconditionally."""
        self.logger.debug(f"! {line}")
        self._error_consumer(line)
