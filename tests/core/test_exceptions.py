"""Tests for wordtally.core.exceptions."""

import pytest

from wordtally.core.exceptions import ConfigurationError, StateError, WordTallyError


def test_hierarchy():
    """All exceptions should inherit from WordTallyError."""
    for exc_cls in [ConfigurationError, StateError]:
        assert issubclass(exc_cls, WordTallyError)


def test_catch_base():
    with pytest.raises(WordTallyError):
        raise StateError("corrupt state file")
