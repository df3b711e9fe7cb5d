"""
Process Channel

Owns the engine child process and its three pipes:

    stdin   <- commands, one per line
    stdout  -> read line by line on its own thread, delivered in order
    stderr  -> read line by line on a second thread, delivered in order

The two reader threads are independent; nothing orders a stdout line
relative to a stderr line. Callbacks run on the reader thread, so a slow
callback holds up later lines of the same stream.
"""

import logging
import subprocess
import threading
from typing import Callable, List, Optional

from engine_link.errors import ChannelClosedError, EngineSpawnError

logger = logging.getLogger(__name__)


class ProcessChannel:
    """
    Line-oriented pipe to an engine process.

    Use ProcessChannel.spawn() to start one.

    Attributes:
        process: The underlying Popen object
        readers: Reader threads for stdout and stderr
    """

    def __init__(
        self,
        process: subprocess.Popen,
        on_line: Callable[[str], None],
        on_error_line: Callable[[str], None],
    ):
        self.process = process
        self._write_lock = threading.Lock()
        self.readers: List[threading.Thread] = [
            self._start_reader(process.stdout, on_line, "stdout"),
            self._start_reader(process.stderr, on_error_line, "stderr"),
        ]

    @classmethod
    def spawn(
        cls,
        path: str,
        args: List[str],
        cwd: Optional[str],
        on_line: Callable[[str], None],
        on_error_line: Callable[[str], None],
    ) -> "ProcessChannel":
        """
        Start the engine and begin reading its output.

        Args:
            path: Engine executable
            args: Command-line arguments
            cwd: Working directory for the engine
            on_line: Called with each stdout line (without line terminator)
            on_error_line: Called with each stderr line

        Returns:
            Running channel

        Raises:
            EngineSpawnError: If the process cannot be started
        """
        try:
            process = subprocess.Popen(
                [path, *args],
                cwd=cwd,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except (OSError, ValueError) as e:
            raise EngineSpawnError(f"Failed to start engine {path}: {e}") from e

        logger.info(f"Engine started: {path} (pid={process.pid})")
        return cls(process, on_line, on_error_line)

    def _start_reader(self, stream, callback, name: str) -> threading.Thread:
        thread = threading.Thread(
            target=self._pump,
            args=(stream, callback, name),
            name=f"engine-{name}-{self.process.pid}",
            daemon=True,
        )
        thread.start()
        return thread

    def _pump(self, stream, callback, name: str):
        """Deliver lines from one stream until EOF."""
        for raw in iter(stream.readline, ""):
            line = raw.rstrip("\r\n")
            try:
                callback(line)
            except Exception as e:
                logger.error(f"Consumer failed on {name} line {line!r}: {e}", exc_info=True)

        logger.debug(f"Engine {name} closed")

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def returncode(self) -> Optional[int]:
        """Exit code, or None while the engine is running."""
        return self.process.poll()

    def write(self, text: str):
        """
        Write raw text to the engine's stdin and flush.

        Raises:
            ChannelClosedError: If the engine has exited or the pipe is closed
        """
        if self.process.poll() is not None:
            raise ChannelClosedError(
                f"Engine exited with code {self.process.returncode}"
            )

        with self._write_lock:
            try:
                self.process.stdin.write(text)
                self.process.stdin.flush()
            except (OSError, ValueError) as e:
                raise ChannelClosedError(f"Engine pipe closed: {e}") from e

    def close(self, timeout: float = 2.0):
        """
        Terminate and reap the engine.

        Closes stdin, waits up to ``timeout`` seconds for a clean exit, then
        kills the process. Reader threads are joined afterwards.
        """
        try:
            self.process.stdin.close()
        except OSError:
            # Already broken; the process is going away regardless.
            pass

        try:
            self.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Engine did not exit within {timeout}s, killing it")
            self.process.kill()
            self.process.wait()

        for thread in self.readers:
            thread.join(timeout=timeout)

        logger.info(f"Engine exited with code {self.process.returncode}")
