"""Exceptions raised by react-cycles."""

from __future__ import annotations


class ReactCyclesError(Exception):
    """Base class for all analyzer errors."""


class InputPathError(ReactCyclesError, ValueError):
    """The top-level entry path is missing, empty, or does not exist."""


class SourceParseError(ReactCyclesError):
    """A source file could not be parsed into a syntax tree."""


class SessionNotFoundError(ReactCyclesError, KeyError):
    """No live session exists for the given token (unknown or evicted)."""

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"Parser session not found or expired: {self.token}"
