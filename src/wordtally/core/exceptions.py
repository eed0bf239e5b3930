"""
wordtally exception hierarchy.

All wordtally exceptions inherit from WordTallyError, making it easy for
consumers to catch library-level errors while still distinguishing specific
failure modes. The tracking core itself raises none of these; they surface
from configuration, persistence and file I/O at the edges.
"""


class WordTallyError(Exception):
    """Base exception class for all wordtally errors."""


class ConfigurationError(WordTallyError):
    """Raised for configuration errors (missing keys, invalid values)."""


class StateError(WordTallyError):
    """Raised when persisted tracking state cannot be decoded."""
