"""Exception hierarchy raised by the rules engine and game layer."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by :mod:`chessrules`."""


class IllegalMoveError(ChessError, ValueError):
    """A move is not in the legal set of the current position.

    Recoverable: a UI simply re-prompts.
    """


class GameOverError(ChessError):
    """A move was submitted after the game finished."""


class NoLegalMoveError(ChessError, RuntimeError):
    """A policy was asked to move in a position without legal moves.

    Callers check the termination status first, so this signals a
    sequencing bug rather than bad input.
    """


class CorruptSaveError(ChessError, ValueError):
    """Persisted game data is malformed or describes an impossible game."""
