"""Tests for MoveApplier."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from chessrules.core.errors import IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.move_applier import MoveApplier
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import (
    A1, A7, A8, C1, D1, E1, E2, E3, E4, E5, E7, F1, G1, H1, H8, parse_square,
)


class TestApplyBasics:
    def test_relocates_piece(self, start: Position) -> None:
        after = MoveApplier.apply(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after.board[E4] == Piece(Color.WHITE, PieceKind.PAWN)
        assert after.board[E2] is None
        assert after.side_to_move == Color.BLACK

    def test_never_mutates_input(self, start: Position) -> None:
        snapshot = Position.initial()
        MoveApplier.apply(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert start == snapshot

    def test_illegal_move_rejected(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError):
            MoveApplier.apply(start, Move(E2, E5))

    def test_missing_flag_is_illegal(self, start: Position) -> None:
        # A double push must carry its flag to match the generated move.
        with pytest.raises(IllegalMoveError):
            MoveApplier.apply(start, Move(E2, E4))

    def test_opponent_piece_rejected(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError):
            MoveApplier.apply(start, Move(E7, parse_square("e6")))

    def test_empty_origin_in_successor(self, start: Position) -> None:
        with pytest.raises(IllegalMoveError):
            MoveApplier.successor(start, Move(E4, E5))


class TestEnPassantTarget:
    def test_set_after_double_push(self, start: Position) -> None:
        after = MoveApplier.apply(start, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert after.en_passant == E3

    def test_cleared_after_other_moves(self, start: Position, play) -> None:
        pos = play(start, "e2e4", "g8f6")
        assert pos.en_passant is None


class TestClocks:
    def test_halfmove_increments_on_quiet_piece_move(self, start: Position, play) -> None:
        pos = play(start, "g1f3", "g8f6")
        assert pos.halfmove_clock == 2

    def test_halfmove_resets_on_pawn_move(self, start: Position, play) -> None:
        pos = play(start, "g1f3", "g8f6", "e2e4")
        assert pos.halfmove_clock == 0

    def test_halfmove_resets_on_capture(self, start: Position, play) -> None:
        pos = play(start, "g1f3", "d7d5", "f3e5", "b8c6", "e5c6")
        assert pos.halfmove_clock == 0

    def test_fullmove_increments_after_black(self, start: Position, play) -> None:
        assert play(start, "e2e4").fullmove_number == 1
        assert play(start, "e2e4", "e7e5").fullmove_number == 2


class TestPromotionApply:
    def test_replaces_pawn(self) -> None:
        pos = Position(Board.from_mapping({"e1": "K", "h7": "k", "a7": "P"}))
        after = MoveApplier.apply(pos, Move(A7, A8, MoveFlag.PROMOTION, PieceKind.KNIGHT))
        assert after.board[A8] == Piece(Color.WHITE, PieceKind.KNIGHT)
        assert after.board[A7] is None


class TestCastlingApply:
    ROWS = [
        "r...k..r",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        "R...K..R",
    ]

    def test_kingside_moves_rook(self) -> None:
        pos = Position(Board.from_rows(self.ROWS))
        after = MoveApplier.apply(pos, Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert after.board[G1] == Piece(Color.WHITE, PieceKind.KING)
        assert after.board[F1] == Piece(Color.WHITE, PieceKind.ROOK)
        assert after.board[H1] is None
        assert after.castling == CastlingRights.BLACK_BOTH

    def test_queenside_moves_rook(self) -> None:
        pos = Position(Board.from_rows(self.ROWS))
        after = MoveApplier.apply(pos, Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert after.board[C1] == Piece(Color.WHITE, PieceKind.KING)
        assert after.board[D1] == Piece(Color.WHITE, PieceKind.ROOK)
        assert after.board[A1] is None

    def test_rook_move_revokes_one_side(self) -> None:
        pos = Position(Board.from_rows(self.ROWS))
        after = MoveApplier.apply(pos, Move(H1, parse_square("h4")))
        assert after.castling == CastlingRights.ALL & ~CastlingRights.WHITE_KINGSIDE

    def test_rook_capture_revokes_victims_right(self) -> None:
        pos = Position(Board.from_rows(self.ROWS))
        after = MoveApplier.apply(pos, Move(H1, H8))
        assert not after.castling & CastlingRights.BLACK_KINGSIDE
        assert not after.castling & CastlingRights.WHITE_KINGSIDE
        assert after.castling & CastlingRights.BLACK_QUEENSIDE

    def test_king_move_revokes_both(self) -> None:
        pos = Position(Board.from_rows(self.ROWS))
        after = MoveApplier.apply(pos, Move(E1, parse_square("e2")))
        assert after.castling == CastlingRights.BLACK_BOTH
