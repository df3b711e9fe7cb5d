"""
engine_link

Drive a UCI chess engine as a long-lived child process without acting on
stale output.

## Architecture

1. **channel**: ProcessChannel, the engine process and its pipes
   - stdout and stderr read on separate threads, line by line

2. **sync**: DesyncFilter, the output synchronisation rules
   - Counts outstanding "go" and "isready" commands
   - Classifies every stdout line as fresh or stale

3. **router**: OutputRouter
   - Fresh lines to the application, stale lines to the log only
   - stderr lines to the application unfiltered

4. **session**: EngineSession, the public entry point
   - setup / send / setoption / shutdown

5. **commands**, **config**, **log**: command builders, EngineConfig,
   logger setup

## Quick Start

```python
import chess
from engine_link import EngineConfig, EngineSession
from engine_link.commands import format_position

session = EngineSession(EngineConfig(path="/usr/bin/stockfish"))
session.setup(print, lambda line: print("stderr:", line))

session.send("uci")
session.send("isready")
session.send(format_position(chess.Board()))
session.send("go depth 12")
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from engine_link.config import EngineConfig
from engine_link.errors import (
    ChannelClosedError,
    EngineLinkError,
    EngineSpawnError,
    SessionError,
)
from engine_link.session import EngineSession
from engine_link.sync import DesyncFilter, LineStatus

__all__ = [
    'EngineConfig',
    'EngineSession',
    'DesyncFilter',
    'LineStatus',
    'EngineLinkError',
    'EngineSpawnError',
    'ChannelClosedError',
    'SessionError',
]
