"""High-level chess rules: checkmate, stalemate and draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceKind
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.termination import Termination
from chessrules.core.types import is_light_square

if TYPE_CHECKING:
    from chessrules.core.position import Position

FIFTY_MOVE_HALFMOVES = 100


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Every draw is automatic: a game ends the moment its position qualifies,
    without a player claiming it.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return position.is_in_check()

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        return bool(MoveGenerator(position).generate_legal_moves())

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K v K, K+B v K, K+N v K, K+B v K+B with same-coloured bishops."""
        board = position.board
        occupied = board.all_pieces_bitboard(Color.WHITE) | board.all_pieces_bitboard(
            Color.BLACK
        )
        total = occupied.bit_count()

        if total == 2:
            return True

        if total == 3:
            return any(
                board.has_piece(color, kind)
                for color in Color
                for kind in (PieceKind.KNIGHT, PieceKind.BISHOP)
            )

        if total == 4:
            white_bishops = board.pieces(Color.WHITE, PieceKind.BISHOP)
            black_bishops = board.pieces(Color.BLACK, PieceKind.BISHOP)
            if len(white_bishops) == 1 and len(black_bishops) == 1:
                return is_light_square(white_bishops[0]) == is_light_square(
                    black_bishops[0]
                )

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def termination(position: Position) -> Termination:
        """Termination status derived from the position alone.

        Mate and stalemate take precedence over the draw rules, so a mating
        move that also reaches the fifty-move mark still wins.
        """
        if not Rules.has_legal_moves(position):
            if Rules.is_in_check(position):
                return Termination.checkmate(position.side_to_move.opposite)
            return Termination.stalemate()

        if Rules.is_insufficient_material(position):
            return Termination.draw_by_insufficient_material()

        if Rules.is_fifty_move_rule(position):
            return Termination.draw_by_fifty_move()

        return Termination.in_progress()
