"""
Engine Session

An EngineSession is the application's handle on one running engine. It
sends commands, runs every stdout line through the DesyncFilter and hands
the survivors to the application.

Lifecycle:
    session = EngineSession(EngineConfig(path="/usr/bin/stockfish"))
    session.setup(on_fresh_line, on_error_line)
    session.send("uci")
    session.send("isready")
    session.send("position startpos moves e2e4")
    session.send("go depth 12")
    ...
    session.shutdown()          # detaches callbacks, sends "quit"
    session.process.close()     # reaping the process is up to the caller

A session is used once. setup() binds a process at most once, and a session
that has been shut down cannot be set up again.

Threading:
    - stdout reader thread: filter + routing, under the session lock
    - stderr reader thread: routing only, no lock
    - caller threads: send(), which updates the counters under the same lock
"""

import logging
import sys
import threading
from typing import Callable, Optional

from engine_link.channel import ProcessChannel
from engine_link.commands import format_setoption
from engine_link.config import EngineConfig
from engine_link.errors import ChannelClosedError, EngineSpawnError, SessionError
from engine_link.router import LineConsumer, OutputRouter
from engine_link.sync import DesyncFilter

CRASH_MESSAGE = "The engine appears to have crashed."


def print_alert(message: str):
    """Default notifier: show the message on stderr."""
    print(f"# {message}", file=sys.stderr)


class EngineSession:
    """
    One engine process plus the bookkeeping to keep its output in sync.

    Attributes:
        config: Engine path, arguments and logging options
        process: Bound ProcessChannel, or None before setup / after a
            failed spawn
        sync: Pending-command counters and line classifier
        router: Delivers classified lines to the application
        ever_sent: True once any command was written successfully
        crash_warned: True once the crash notification has been shown
    """

    def __init__(
        self,
        config: EngineConfig,
        logger: Optional[logging.Logger] = None,
        notifier: Optional[Callable[[str], None]] = None,
        channel_factory: Optional[Callable[..., ProcessChannel]] = None,
    ):
        """
        Initialize an unbound session.

        Args:
            config: Engine configuration
            logger: Traffic logger (default: the engine_link.session logger)
            notifier: Shows user-visible alerts (default: print to stderr)
            channel_factory: Starts the process; same signature as
                ProcessChannel.spawn (default: ProcessChannel.spawn)
        """
        self.config = config
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.notifier = notifier or print_alert
        self.channel_factory = channel_factory or ProcessChannel.spawn

        self.process: Optional[ProcessChannel] = None
        self.sync = DesyncFilter()
        self.router = OutputRouter(log_info_lines=config.log_info_lines, logger=self.logger)

        self.ever_sent = False
        self.crash_warned = False
        self.closed = False

        self._lock = threading.Lock()

    @property
    def pending_acks(self) -> int:
        return self.sync.pending_acks

    @property
    def pending_results(self) -> int:
        return self.sync.pending_results

    def setup(self, fresh_consumer: LineConsumer, error_consumer: LineConsumer):
        """
        Start the engine and wire its output to the given callbacks.

        Args:
            fresh_consumer: Called with each fresh stdout line
            error_consumer: Called with each stderr line

        Raises:
            SessionError: If the session is already bound or shut down
            EngineSpawnError: If the engine cannot be started; the session
                stays unbound and send() does nothing
        """
        if self.closed:
            raise SessionError("Session has been shut down and cannot be reused")
        if self.process is not None:
            raise SessionError("Session is already set up")

        self.router.attach(fresh_consumer, error_consumer)

        with self._lock:
            self.sync.reset()

        try:
            self.process = self.channel_factory(
                self.config.executable,
                self.config.args,
                self.config.working_dir,
                self._on_line,
                self._on_error_line,
            )
        except EngineSpawnError as e:
            self.logger.error(str(e))
            self.notifier(str(e))
            raise

        self.logger.info(f"Session started: {self.config!r}")

    def _on_line(self, line: str):
        with self._lock:
            status = self.sync.classify(line)
        self.router.route(status, line)

    def _on_error_line(self, line: str):
        self.router.route_error(line)

    def send(self, command: str):
        """
        Send one command to the engine.

        Does nothing if no engine is bound. A failed write is logged, never
        raised; the first failure after a successful write triggers a
        one-time crash notification.

        Args:
            command: Command text; surrounding whitespace is stripped
        """
        if self.process is None:
            return

        command = command.strip()

        with self._lock:
            self.sync.note_command(command)

        try:
            self.process.write(command + "\n")
        except ChannelClosedError as e:
            self.logger.warning(f"(failed) --> {command} ({e})")
            with self._lock:
                warn = self.ever_sent and not self.crash_warned
                if warn:
                    self.crash_warned = True
            if warn:
                self.notifier(CRASH_MESSAGE)
            return

        with self._lock:
            self.ever_sent = True

        self.logger.debug(f"--> {command}")

    def setoption(self, name: str, value) -> str:
        """
        Send a "setoption" command.

        Returns:
            The command as sent, for display
        """
        command = format_setoption(name, value)
        self.send(command)
        return command

    def shutdown(self):
        """
        Detach the callbacks and ask the engine to quit.

        The process itself is left running until it exits on its own or the
        caller closes it with self.process.close().
        """
        self.router.detach()
        self.send("quit")
        self.closed = True
        self.logger.info("Session shut down")
