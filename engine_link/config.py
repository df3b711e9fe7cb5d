"""
Engine configuration.
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def find_engine(name: str = "stockfish") -> str:
    """
    Auto-detect an engine binary location.

    Args:
        name: Executable name to look for

    Returns:
        Path to the engine binary

    Raises:
        FileNotFoundError: If the engine is not found
    """
    candidates = [
        name,
        f"/usr/local/bin/{name}",
        f"/usr/bin/{name}",
        f"/usr/games/{name}",
        f"/opt/homebrew/bin/{name}",
    ]

    for candidate in candidates:
        path = shutil.which(candidate)
        if path:
            return path

    raise FileNotFoundError(
        f"{name} not found. Install with: brew install {name} (macOS) "
        f"or apt install {name} (Linux)"
    )


@dataclass
class EngineConfig:
    """Configuration for an engine session.

    Holds everything needed to start the engine process and decide how
    much of its output ends up in the log.
    """

    path: Optional[str] = None
    """Path to the engine executable (None = auto-detect Stockfish)"""

    args: List[str] = field(default_factory=list)
    """Command-line arguments passed to the engine"""

    log_info_lines: bool = False
    """Log lines containing "info". These are the bulk of engine output, so
    they are left out of the log by default. Routing is unaffected."""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.path is None:
            self.path = find_engine()

        self.path = str(self.path)
        if not self.path.strip():
            raise ValueError("path must be a non-empty string")

        if not isinstance(self.args, (list, tuple)) or not all(
            isinstance(arg, str) for arg in self.args
        ):
            raise ValueError(f"args must be a list of strings, got {self.args!r}")
        self.args = list(self.args)

    @property
    def executable(self) -> str:
        """Absolute path of the engine binary.

        A bare name is looked up on PATH; anything containing a directory
        part is resolved against the current directory.
        """
        if os.sep in self.path or (os.altsep and os.altsep in self.path):
            return str(Path(self.path).expanduser().resolve())
        return shutil.which(self.path) or self.path

    @property
    def working_dir(self) -> Optional[str]:
        """Directory containing the engine binary, used as its cwd."""
        parent = os.path.dirname(self.executable)
        return parent or None

    def __repr__(self) -> str:
        return (
            f"EngineConfig(path={self.path!r}, args={self.args!r}, "
            f"log_info_lines={self.log_info_lines})"
        )
