"""
Output Synchronisation

UCI gives no way to tie an output line to the command that caused it. A
"go" is answered some time later by "info" lines and finally a "bestmove",
and if a new position was sent in the meantime, those lines may still be
about the old one. This module decides, line by line, whether output can be
trusted.

Two counters are kept:

    pending_results: "go" commands still waiting for their "bestmove"
    pending_acks:    "isready" commands still waiting for their "readyok"

Rules, applied to every line from the engine's stdout in arrival order:

    1. "bestmove" in line and pending_results > 0  ->  pending_results -= 1
    2. "readyok" in line and pending_acks > 0      ->  pending_acks -= 1
    3. pending_results > 1, or the line is a "bestmove" while
       pending_results > 0                          ->  stale
    4. pending_acks > 0                             ->  stale
    5. otherwise                                    ->  fresh

The decrements must come first, so the bestmove answering the most recent
"go" is itself fresh. With two or more "go" commands outstanding nothing can
be attributed to the newest one, so everything is dropped, info lines
included.

Some engines (Lc0 among them) send "readyok" at dubious times, e.g. right
after "stop" rather than after analysis really ended, so output is never
trusted while an ack is outstanding. Note also that "ucinewgame" makes some
engines halt without sending "bestmove"; callers must send "stop" first or
pending_results will never drain.

Example:
    >>> sync = DesyncFilter()
    >>> sync.note_command("go")
    >>> sync.note_command("go")
    >>> sync.classify("bestmove a2a3")
    <LineStatus.STALE_RESULT: 'bestmove desync'>
    >>> sync.classify("bestmove e2e4")
    <LineStatus.FRESH: 'fresh'>
"""

from enum import Enum

GO = "go"
ISREADY = "isready"
BESTMOVE = "bestmove"
READYOK = "readyok"
INFO = "info"


class LineStatus(Enum):
    """Classification of one line of engine output.

    Both STALE_* members mean the line is discarded; they only record which
    counter caused it, for the log.
    """

    FRESH = "fresh"
    STALE_RESULT = "bestmove desync"
    STALE_ACK = "readyok desync"

    @property
    def is_stale(self) -> bool:
        return self is not LineStatus.FRESH


class DesyncFilter:
    """
    Counter-driven staleness filter for UCI engine output.

    Not reentrant: classify() must run to completion for one line before the
    next, and callers sharing the filter across threads must serialise
    note_command() and classify() with a single lock.

    Attributes:
        pending_acks: Outstanding "isready" commands
        pending_results: Outstanding "go" commands
    """

    def __init__(self):
        self.pending_acks = 0
        self.pending_results = 0

    def reset(self):
        """Forget all outstanding commands."""
        self.pending_acks = 0
        self.pending_results = 0

    def note_command(self, command: str):
        """
        Account for an outgoing command.

        Args:
            command: Command text, already trimmed
        """
        if command.startswith(GO):
            self.pending_results += 1

        if command == ISREADY:
            self.pending_acks += 1

    def classify(self, line: str) -> LineStatus:
        """
        Update the counters for one output line and classify it.

        Args:
            line: A line from the engine's stdout

        Returns:
            LineStatus.FRESH if the line can be passed on, otherwise the
            STALE_* member naming the counter that made it ambiguous
        """
        is_result = BESTMOVE in line

        if is_result and self.pending_results > 0:
            self.pending_results -= 1

        if READYOK in line and self.pending_acks > 0:
            self.pending_acks -= 1

        if self.pending_results > 1 or (is_result and self.pending_results > 0):
            return LineStatus.STALE_RESULT

        if self.pending_acks > 0:
            return LineStatus.STALE_ACK

        return LineStatus.FRESH

    def __repr__(self) -> str:
        return (
            f"DesyncFilter(pending_acks={self.pending_acks}, "
            f"pending_results={self.pending_results})"
        )
