"""Exceptions raised by the round scorer."""

from __future__ import annotations


class ScoringError(Exception):
    """Base class for every error the scorer raises."""


class RoundParseError(ScoringError):
    """The round description could not be read or decoded."""

    def __init__(self, message: str, entry: object = None):
        self.entry = entry
        if entry is not None:
            message = f"{message}: {entry!r}"
        super().__init__(message)


class UnsupportedScopeError(ScoringError):
    """A joker asked for a scoring scope the scorer cannot evaluate."""

    def __init__(self, scope):
        self.scope = scope
        super().__init__(f"scoring scope {scope.value!r} is not supported")
