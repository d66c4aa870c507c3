"""MoveApplier - derives the successor of a Position after a Move."""

from __future__ import annotations

from dataclasses import replace

from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from chessrules.core.errors import IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import Square, file_of, make_square, rank_of

# Corner square -> right lost when a rook leaves or is captured there.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# Castling flag -> (rook from file, rook to file)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


class MoveApplier:
    """Static move application; positions in, new positions out."""

    @staticmethod
    def apply(position: Position, move: Move) -> Position:
        """Apply *move* after checking it is legal in *position*.

        Raises:
            IllegalMoveError: *move* is not among the legal moves.
        """
        from chessrules.core.move_generator import MoveGenerator

        if move not in MoveGenerator(position).generate_legal_moves():
            raise IllegalMoveError(f"Illegal move {move} in this position")
        return MoveApplier.successor(position, move)

    @staticmethod
    def successor(position: Position, move: Move) -> Position:
        """Apply *move* without a legality check.

        Used by the legality filter itself; callers outside the engine want
        :meth:`apply`.
        """
        board = position.board
        piece = board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on the origin square of {move}")

        captured = board[move.to_sq]
        changes: dict[Square, Piece | None] = {move.from_sq: None}

        # En passant: the captured pawn sits beside the origin, not on to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            ep_capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[ep_capture_sq]
            changes[ep_capture_sq] = None

        placed = piece
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = piece.promoted(move.promotion)
        changes[move.to_sq] = placed

        if move.flag in _CASTLE_ROOK_FILES:
            rank = rank_of(move.from_sq)
            rook_from_file, rook_to_file = _CASTLE_ROOK_FILES[move.flag]
            rook_from = make_square(rook_from_file, rank)
            changes[make_square(rook_to_file, rank)] = board[rook_from]
            changes[rook_from] = None

        en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            en_passant = (move.from_sq + move.to_sq) // 2

        is_reset = piece.kind == PieceKind.PAWN or captured is not None
        return replace(
            position,
            board=board.replace(changes),
            side_to_move=position.side_to_move.opposite,
            castling=_next_castling(position.castling, move, piece),
            en_passant=en_passant,
            halfmove_clock=0 if is_reset else position.halfmove_clock + 1,
            fullmove_number=position.fullmove_number
            + (1 if piece.color == Color.BLACK else 0),
        )


def _next_castling(rights: CastlingRights, move: Move, piece: Piece) -> CastlingRights:
    if not rights:
        return rights
    if piece.kind == PieceKind.KING:
        rights &= ~CastlingRights.both(piece.color)
    for sq in (move.from_sq, move.to_sq):
        if sq in _ROOK_CORNERS:
            rights &= ~_ROOK_CORNERS[sq]
    return rights
