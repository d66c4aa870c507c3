"""Opponent policy protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.position import Position


@runtime_checkable
class OpponentPolicy(Protocol):
    """Strategy that picks a move for the side to move.

    Implementations raise :class:`~chessrules.core.errors.NoLegalMoveError`
    when *position* has no legal moves; callers check termination first.
    """

    def select_move(self, position: Position) -> Move: ...
