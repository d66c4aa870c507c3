"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import MoveFlag, PieceKind
from chessrules.core.types import Square, parse_square, square_name

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}
_PROMO_KINDS: dict[str, PieceKind] = {v: k for k, v in _PROMO_CHARS.items()}

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """A single move, meaningful only against the position it came from.

    ``flag`` records what the generator recognised about the move (double
    push, en passant, castling side, promotion) so that applying it needs no
    second look at the board.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceKind | None = None

    def __post_init__(self) -> None:
        if (self.flag == MoveFlag.PROMOTION) != (self.promotion is not None):
            raise ValueError("Promotion flag and promotion kind must go together")
        if self.promotion is not None and self.promotion not in _PROMO_CHARS:
            raise ValueError(f"Cannot promote to {self.promotion}")

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """Coordinate text such as ``e2e4`` or ``e7e8q``."""
        return str(self)


def parse_coordinates(text: str) -> tuple[Square, Square, PieceKind | None]:
    """Split coordinate text (``e7e8q``) into from, to and promotion kind.

    The result still has to be resolved against a position's legal moves,
    since the text carries no flag.
    """
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid move text: {text!r}")
    promotion = None
    if len(text) == 5:
        try:
            promotion = _PROMO_KINDS[text[4]]
        except KeyError:
            raise ValueError(f"Invalid promotion piece in {text!r}") from None
    return parse_square(text[:2]), parse_square(text[2:4]), promotion
