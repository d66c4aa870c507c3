"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from chessrules.core.enums import Color, PieceKind
from chessrules.core.piece import Piece
from chessrules.core.types import Square, make_square, parse_square

_KIND_COUNT = 6
_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def squares_of(bitboard: int) -> list[Square]:
    """Squares of the set bits of *bitboard*, lowest first."""
    squares: list[Square] = []
    while bitboard:
        lsb = bitboard & -bitboard
        squares.append(lsb.bit_length() - 1)
        bitboard ^= lsb
    return squares


class Board:
    """64 squares, each empty or holding a :class:`Piece`.

    A board never changes after construction; :meth:`replace` builds the
    successor. Occupancy bitboards per colour and kind are computed once
    in the constructor so attack and material queries stay cheap.
    """

    __slots__ = ("_squares", "_piece_bitboards", "_color_bitboards")

    def __init__(self, squares: Iterable[Piece | None] | None = None) -> None:
        cells = tuple(squares) if squares is not None else (None,) * 64
        if len(cells) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(cells)}")

        # [color][kind-1] -> bitboard
        piece_bitboards = [[0] * _KIND_COUNT for _ in range(_COLOR_COUNT)]
        color_bitboards = [0] * _COLOR_COUNT
        for sq, piece in enumerate(cells):
            if piece is None:
                continue
            mask = 1 << sq
            piece_bitboards[piece.color][piece.kind - 1] |= mask
            color_bitboards[piece.color] |= mask

        self._squares: tuple[Piece | None, ...] = cells
        self._piece_bitboards = tuple(tuple(row) for row in piece_bitboards)
        self._color_bitboards = tuple(color_bitboards)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """(square, piece) for every occupied square, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, kind: PieceKind) -> list[Square]:
        """Squares occupied by *color*'s pieces of *kind*."""
        return squares_of(self.pieces_bitboard(color, kind))

    def pieces_bitboard(self, color: Color, kind: PieceKind) -> int:
        return self._piece_bitboards[color][kind - 1]

    def has_piece(self, color: Color, kind: PieceKind) -> bool:
        return bool(self.pieces_bitboard(color, kind))

    def all_pieces_bitboard(self, color: Color) -> int:
        return self._color_bitboards[color]

    def all_pieces(self, color: Color) -> list[Square]:
        return squares_of(self.all_pieces_bitboard(color))

    def king_count(self, color: Color) -> int:
        return self.pieces_bitboard(color, PieceKind.KING).bit_count()

    def king_square(self, color: Color) -> Square:
        """The square of *color*'s single king."""
        kings = self.pieces_bitboard(color, PieceKind.KING)
        if kings.bit_count() != 1:
            raise ValueError(
                f"Expected one {color} king, found {kings.bit_count()}"
            )
        return kings.bit_length() - 1

    # -- Successors ---------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """A new board with *changes* applied; this one is untouched."""
        cells = list(self._squares)
        for sq, piece in changes.items():
            cells[sq] = piece
        return Board(cells)

    # -- Factories ----------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting arrangement."""
        cells: list[Piece | None] = [None] * 64
        for f, kind in enumerate(_BACK_RANK):
            cells[make_square(f, 0)] = Piece(Color.WHITE, kind)
            cells[make_square(f, 1)] = Piece(Color.WHITE, PieceKind.PAWN)
            cells[make_square(f, 6)] = Piece(Color.BLACK, PieceKind.PAWN)
            cells[make_square(f, 7)] = Piece(Color.BLACK, kind)
        return cls(cells)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight rows of piece letters, rank 8 first.

        ``.`` marks an empty square::

            Board.from_rows([
                "....k...",
                "........",
                ...
                "....K...",
            ])
        """
        if len(rows) != 8:
            raise ValueError(f"Expected 8 rows, got {len(rows)}")
        cells: list[Piece | None] = [None] * 64
        for row_idx, row in enumerate(rows):
            if len(row) != 8:
                raise ValueError(f"Row {row_idx + 1} must have 8 squares: {row!r}")
            rank = 7 - row_idx
            for file, ch in enumerate(row):
                if ch != ".":
                    cells[make_square(file, rank)] = Piece.from_char(ch)
        return cls(cells)

    @classmethod
    def from_mapping(cls, placement: Mapping[str, str]) -> Board:
        """Build a board from ``{"e1": "K", "e8": "k", ...}``."""
        cells: list[Piece | None] = [None] * 64
        for name, ch in placement.items():
            cells[parse_square(name)] = Piece.from_char(ch)
        return cls(cells)

    def rows(self) -> list[str]:
        """Inverse of :meth:`from_rows`."""
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = ""
            for file in range(8):
                p = self._squares[make_square(file, rank)]
                row += str(p) if p else "."
            rows.append(row)
        return rows

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        lines = [
            f"{8 - i} {' '.join(row)}" for i, row in enumerate(self.rows())
        ]
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
