"""Pseudo-legal and legal move generation."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
)
from chessrules.core.board import squares_of
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from chessrules.core.move import PROMOTION_KINDS, Move
from chessrules.core.move_applier import MoveApplier
from chessrules.core.piece import Piece
from chessrules.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from chessrules.core.position import Position

_PAWN_START_RANK = (1, 6)
_PAWN_LAST_RANK = (7, 0)


class MoveGenerator:
    """Generates moves for a given :class:`Position`.

    Each piece kind has its own pattern generator; the king-safety filter in
    :meth:`generate_legal_moves` is applied once, the same way, to all of
    them. The position is never modified.
    """

    __slots__ = ("_pos", "_board", "_dispatch")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board
        self._dispatch: dict[PieceKind, Callable[[Square, Color, list[Move]], None]] = {
            PieceKind.PAWN: self._gen_pawn,
            PieceKind.KNIGHT: self._gen_knight,
            PieceKind.BISHOP: self._gen_bishop,
            PieceKind.ROOK: self._gen_rook,
            PieceKind.QUEEN: self._gen_queen,
            PieceKind.KING: self._gen_king,
        }

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All legal moves for the side to move, in a stable order."""
        return [m for m in self.generate_pseudo_legal_moves() if self._is_safe(m)]

    legal_moves = generate_legal_moves

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty for an opponent or blank)."""
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        return [m for m in self.pseudo_legal_moves(sq) if self._is_safe(m)]

    def find(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> Move | None:
        """The legal move matching a from/to selection, if any.

        Flags are filled in from the position. A promotion whose piece was
        not chosen resolves to a queen.
        """
        candidates = [m for m in self.legal_moves_from(from_sq) if m.to_sq == to_sq]
        if promotion is None and any(m.promotion is not None for m in candidates):
            promotion = PieceKind.QUEEN
        for move in candidates:
            if move.promotion == promotion:
                return move
        return None

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """Pattern moves of every side-to-move piece, king safety ignored."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        for sq in squares_of(self._board.all_pieces_bitboard(color)):
            piece = self._board[sq]
            assert piece is not None
            self._dispatch[piece.kind](sq, color, moves)
        return moves

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Pattern moves of the piece on *sq*, whichever colour it is."""
        piece = self._board[sq]
        if piece is None:
            return []
        moves: list[Move] = []
        self._dispatch[piece.kind](sq, piece.color, moves)
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        return self._pos.is_in_check(color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return self._pos.is_square_attacked(sq, by_color)

    # -- Internal -----------------------------------------------------------

    def _is_safe(self, move: Move) -> bool:
        mover = self._board[move.from_sq]
        assert mover is not None
        after = MoveApplier.successor(self._pos, move)
        return not after.is_in_check(mover.color)

    # -- Piece-specific generators ------------------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        step = color.pawn_direction
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        if rank_idx == _PAWN_LAST_RANK[color]:
            return  # only reachable on hand-built boards
        promotes = rank_of(sq + step) == _PAWN_LAST_RANK[color]

        def add(to_sq: Square) -> None:
            if promotes:
                for kind in PROMOTION_KINDS:
                    moves.append(Move(sq, to_sq, MoveFlag.PROMOTION, kind))
            else:
                moves.append(Move(sq, to_sq))

        one_step = sq + step
        if board.is_empty(one_step):
            add(one_step)
            if rank_idx == _PAWN_START_RANK[color]:
                two_step = one_step + step
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    add(cap_sq)
            elif cap_sq == self._pos.en_passant and color == self._pos.side_to_move:
                moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    def _gen_knight(self, sq: Square, color: Color, moves: list[Move]) -> None:
        self._gen_steps(sq, color, KNIGHT_TARGETS[sq], moves)

    def _gen_bishop(self, sq: Square, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)

    def _gen_rook(self, sq: Square, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)

    def _gen_queen(self, sq: Square, color: Color, moves: list[Move]) -> None:
        self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)

    def _gen_king(self, sq: Square, color: Color, moves: list[Move]) -> None:
        self._gen_steps(sq, color, KING_TARGETS[sq], moves)
        self._gen_castling(sq, color, moves)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rights = self._pos.castling
        if not rights & CastlingRights.both(color):
            return
        rank = color.home_rank
        if king_sq != make_square(4, rank):
            return

        board = self._board
        opponent = color.opposite
        rook = Piece(color, PieceKind.ROOK)
        if self._pos.is_square_attacked(king_sq, opponent):
            return

        if rights & CastlingRights.kingside(color) and board[make_square(7, rank)] == rook:
            f_sq = make_square(5, rank)
            g_sq = make_square(6, rank)
            if (
                board.is_empty(f_sq)
                and board.is_empty(g_sq)
                and not self._pos.is_square_attacked(f_sq, opponent)
                and not self._pos.is_square_attacked(g_sq, opponent)
            ):
                moves.append(Move(king_sq, g_sq, MoveFlag.CASTLE_KINGSIDE))

        if rights & CastlingRights.queenside(color) and board[make_square(0, rank)] == rook:
            b_sq = make_square(1, rank)
            c_sq = make_square(2, rank)
            d_sq = make_square(3, rank)
            if (
                board.is_empty(b_sq)
                and board.is_empty(c_sq)
                and board.is_empty(d_sq)
                and not self._pos.is_square_attacked(c_sq, opponent)
                and not self._pos.is_square_attacked(d_sq, opponent)
            ):
                moves.append(Move(king_sq, c_sq, MoveFlag.CASTLE_QUEENSIDE))
