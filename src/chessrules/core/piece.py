"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceKind

# Letter <-> (Color, PieceKind); uppercase is white.
_CHAR_MAP: dict[str, tuple[Color, PieceKind]] = {
    "P": (Color.WHITE, PieceKind.PAWN),
    "N": (Color.WHITE, PieceKind.KNIGHT),
    "B": (Color.WHITE, PieceKind.BISHOP),
    "R": (Color.WHITE, PieceKind.ROOK),
    "Q": (Color.WHITE, PieceKind.QUEEN),
    "K": (Color.WHITE, PieceKind.KING),
    "p": (Color.BLACK, PieceKind.PAWN),
    "n": (Color.BLACK, PieceKind.KNIGHT),
    "b": (Color.BLACK, PieceKind.BISHOP),
    "r": (Color.BLACK, PieceKind.ROOK),
    "q": (Color.BLACK, PieceKind.QUEEN),
    "k": (Color.BLACK, PieceKind.KING),
}

_LETTERS: dict[tuple[Color, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}

_SYMBOLS = "♙♘♗♖♕♔♟♞♝♜♛♚"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable (color, kind) pair."""

    color: Color
    kind: PieceKind

    def __str__(self) -> str:
        """Piece letter, e.g. 'N' for a white knight, 'q' for a black queen."""
        return _LETTERS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, kind)

    @property
    def symbol(self) -> str:
        """Unicode chess glyph, e.g. ♞."""
        return _SYMBOLS[int(self.color) * 6 + int(self.kind) - 1]

    def promoted(self, kind: PieceKind) -> Piece:
        return Piece(self.color, kind)
