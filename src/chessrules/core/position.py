"""Position - complete, immutable game snapshot (board + metadata)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.attacks import is_square_attacked
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color
from chessrules.core.types import Square, is_valid_square


@dataclass(frozen=True, slots=True)
class Position:
    """Board, side to move, castling rights, en-passant target and clocks.

    Positions are values: compared and hashed by content, never changed
    after creation. :class:`~chessrules.core.move_applier.MoveApplier`
    derives successors.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def __post_init__(self) -> None:
        if self.halfmove_clock < 0:
            raise ValueError(f"Negative halfmove clock: {self.halfmove_clock}")
        if self.fullmove_number < 1:
            raise ValueError(f"Fullmove number must be >= 1: {self.fullmove_number}")
        if self.en_passant is not None and not is_valid_square(self.en_passant):
            raise ValueError(f"Invalid en-passant square: {self.en_passant}")

    @classmethod
    def initial(cls) -> Position:
        """The standard starting position."""
        return cls()

    # ── Derived queries ──────────────────────────────────────────────────

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self.board, sq, by_color)

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?"""
        if color is None:
            color = self.side_to_move
        return self.is_square_attacked(self.king_square(color), color.opposite)

    def __str__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
