"""
Exceptions raised by engine_link.
"""


class EngineLinkError(Exception):
    """Base class for all engine_link errors."""


class EngineSpawnError(EngineLinkError):
    """The engine process could not be started."""


class ChannelClosedError(EngineLinkError):
    """A command could not be written because the engine process is gone."""


class SessionError(EngineLinkError):
    """An EngineSession was used outside its setup/shutdown lifecycle."""
