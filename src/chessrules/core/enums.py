"""Enumerations shared by the rules engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_rank(self) -> int:
        """Rank index of this side's back rank."""
        return 0 if self == Color.WHITE else 7

    @property
    def pawn_direction(self) -> int:
        """Square delta of a single pawn push."""
        return 8 if self == Color.WHITE else -8

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """The six piece kinds, ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class MoveFlag(IntEnum):
    """Special-move tag carried by :class:`~chessrules.core.move.Move`."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class CastlingRights(IntFlag):
    """Set of castling rights still available."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH


class TerminationKind(IntEnum):
    """Why a game is (or is not yet) over."""

    IN_PROGRESS = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    DRAW_BY_FIFTY_MOVE = auto()
    DRAW_BY_INSUFFICIENT_MATERIAL = auto()
    RESIGNED = auto()

    def __str__(self) -> str:
        return self.name.lower()
